from __future__ import annotations

import dataclasses

import pytest

from solveparams.params import (
    BackendOverride,
    GurobiParameter,
    NativeParameterBlock,
    OverrideKind,
    SolveParameters,
)

pytestmark = pytest.mark.unit


def test_native_block_is_canonically_sorted_and_rejects_duplicates() -> None:
    block = NativeParameterBlock((("zeta", 1), ("alpha", True), ("mid", "x")))

    assert block.entries == (("alpha", True), ("mid", "x"), ("zeta", 1))
    assert block.as_dict() == {"alpha": True, "mid": "x", "zeta": 1}
    assert len(block) == 3

    with pytest.raises(ValueError, match="duplicate native parameter key"):
        NativeParameterBlock((("a", 1), ("a", 2)))
    with pytest.raises(ValueError, match="must be a bool, int, float or str"):
        NativeParameterBlock((("a", [1, 2]),))  # type: ignore[arg-type]


def test_override_variants_are_selected_by_tag() -> None:
    empty = BackendOverride.empty()
    gurobi = BackendOverride.gurobi([("Threads", "8"), GurobiParameter("Seed", "3")])
    glop = BackendOverride.native_block(OverrideKind.GLOP, {"use_scaling": False})

    assert empty.is_empty
    assert empty.kind is OverrideKind.NONE
    assert gurobi.kind is OverrideKind.GUROBI
    assert gurobi.gurobi_parameters == (
        GurobiParameter("Threads", "8"),
        GurobiParameter("Seed", "3"),
    )
    assert gurobi.native is None
    assert glop.kind is OverrideKind.GLOP
    assert glop.native is not None
    assert glop.native.as_dict() == {"use_scaling": False}


def test_override_rejects_payload_of_inactive_variant() -> None:
    with pytest.raises(ValueError, match="cannot carry a payload"):
        BackendOverride(gurobi_parameters=(GurobiParameter("Threads", "1"),))
    with pytest.raises(ValueError, match="cannot carry a native parameter block"):
        BackendOverride(kind=OverrideKind.GUROBI, native=NativeParameterBlock())
    with pytest.raises(ValueError, match="cannot carry gurobi parameters"):
        BackendOverride(
            kind=OverrideKind.CP_SAT,
            gurobi_parameters=(GurobiParameter("Threads", "1"),),
        )
    with pytest.raises(ValueError, match="does not take a native parameter block"):
        BackendOverride.native_block(OverrideKind.GUROBI, {"Threads": 1})


def test_native_override_without_block_gets_empty_block() -> None:
    override = BackendOverride(kind=OverrideKind.GSCIP)

    assert override.native == NativeParameterBlock()


def test_gurobi_parameter_requires_string_pair() -> None:
    with pytest.raises(ValueError):
        GurobiParameter("", "1")
    with pytest.raises(ValueError):
        GurobiParameter("Threads", 4)  # type: ignore[arg-type]


def test_direct_gurobi_override_converts_raw_pairs() -> None:
    override = BackendOverride(
        kind=OverrideKind.GUROBI,
        gurobi_parameters=(("Threads", "8"), GurobiParameter("Seed", "3")),  # type: ignore[arg-type]
    )

    assert override.gurobi_parameters == (
        GurobiParameter("Threads", "8"),
        GurobiParameter("Seed", "3"),
    )
    with pytest.raises(ValueError, match="pairs"):
        BackendOverride(kind=OverrideKind.GUROBI, gurobi_parameters=("Threads=8",))  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="must be a string"):
        BackendOverride.gurobi([("Threads", 8)])  # type: ignore[list-item]


def test_solve_parameters_are_immutable() -> None:
    parameters = SolveParameters()

    with pytest.raises(dataclasses.FrozenInstanceError):
        parameters.override = BackendOverride.gurobi([])  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        parameters.common.threads = 2  # type: ignore[misc]
