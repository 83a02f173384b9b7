from __future__ import annotations

from pathlib import Path

import pytest

from solveparams.backends import (
    DEFAULT_CAPABILITIES_PATH,
    BackendFamily,
    CapabilityConfigError,
    EmphasisLevels,
    capabilities_from_mapping,
    get_backend_capabilities,
    load_backend_capabilities,
)
from solveparams.params import Emphasis, LPAlgorithm

pytestmark = pytest.mark.unit

INT32_MAX = 2_147_483_647
GUROBI_MAX_SEED = 2_000_000_000


def test_default_table_covers_every_backend_family() -> None:
    table = load_backend_capabilities()

    assert set(table) == set(BackendFamily)
    assert DEFAULT_CAPABILITIES_PATH.is_file()
    assert load_backend_capabilities() is table


def test_default_table_values() -> None:
    gscip = get_backend_capabilities(BackendFamily.GSCIP)
    gurobi = get_backend_capabilities(BackendFamily.GUROBI)
    glop = get_backend_capabilities(BackendFamily.GLOP)
    cp_sat = get_backend_capabilities(BackendFamily.CP_SAT)

    assert gscip.max_random_seed == INT32_MAX
    assert gurobi.max_random_seed == GUROBI_MAX_SEED
    assert glop.max_random_seed == INT32_MAX
    assert cp_sat.max_random_seed == INT32_MAX

    assert gurobi.sequential_settings is True
    assert not any(caps.sequential_settings for caps in (gscip, glop, cp_sat))

    assert [gurobi.supports_emphasis(name) for name in ("presolve", "cuts", "heuristics", "scaling")] == [
        True,
        True,
        True,
        True,
    ]
    assert gscip.supports_emphasis("scaling") is False
    assert glop.supports_emphasis("cuts") is False
    assert glop.supports_emphasis("scaling") is True
    assert cp_sat.supports_emphasis("presolve") is True
    assert cp_sat.supports_emphasis("heuristics") is False

    assert glop.max_threads == 1
    assert gurobi.max_threads is None
    assert glop.lp_algorithm_value(LPAlgorithm.BARRIER) is None
    assert glop.lp_algorithm_value(LPAlgorithm.DUAL_SIMPLEX) is True
    assert cp_sat.lp_algorithm_parameter is None
    assert gscip.output is not None
    assert gscip.output.inverted is True


def test_string_levels_keep_their_yaml_text() -> None:
    gscip = get_backend_capabilities(BackendFamily.GSCIP)
    levels = gscip.emphasis_levels("presolve")

    assert levels is not None
    assert levels.value_for(Emphasis.OFF) == "off"
    assert levels.value_for(Emphasis.VERY_HIGH) == "aggressive"


@pytest.mark.parametrize(
    ("backend", "feature", "native_default"),
    [
        (BackendFamily.GUROBI, "presolve", 1),
        (BackendFamily.GUROBI, "cuts", 1),
        (BackendFamily.GUROBI, "heuristics", 0.05),
        (BackendFamily.GUROBI, "scaling", 1),
        (BackendFamily.GSCIP, "presolve", "default"),
        (BackendFamily.GSCIP, "cuts", "default"),
        (BackendFamily.GSCIP, "heuristics", "default"),
        (BackendFamily.GLOP, "presolve", True),
        (BackendFamily.GLOP, "scaling", True),
        (BackendFamily.CP_SAT, "presolve", True),
    ],
)
def test_medium_emphasis_is_the_backend_default(
    backend: BackendFamily, feature: str, native_default: object
) -> None:
    levels = get_backend_capabilities(backend).emphasis_levels(feature)

    assert levels is not None
    assert levels.value_for(Emphasis.MEDIUM) == native_default
    assert levels.value_for(Emphasis.MEDIUM) != levels.value_for(Emphasis.OFF)


def test_emphasis_levels_must_be_monotonic() -> None:
    with pytest.raises(ValueError, match="non-decreasing"):
        EmphasisLevels(parameter="Cuts", off=0, low=2, medium=1, high=3, very_high=3)
    with pytest.raises(ValueError, match="non-decreasing"):
        EmphasisLevels(
            parameter="presolve",
            off="off",
            low="aggressive",
            medium="fast",
            high="aggressive",
            very_high="aggressive",
            scale=("off", "fast", "default", "aggressive"),
        )
    with pytest.raises(ValueError, match="needs an explicit scale"):
        EmphasisLevels(parameter="p", off="a", low="b", medium="c", high="d", very_high="e")
    with pytest.raises(ValueError, match="UNSPECIFIED"):
        EmphasisLevels(parameter="p", off=0, low=1, medium=1, high=1, very_high=1).value_for(
            Emphasis.UNSPECIFIED
        )


def test_to_dict_summary() -> None:
    summary = get_backend_capabilities(BackendFamily.GLOP).to_dict()

    assert summary["backend"] == "glop"
    assert summary["lp_algorithms"] == ["DUAL_SIMPLEX", "PRIMAL_SIMPLEX"]
    assert summary["emphasis"] == {
        "presolve": True,
        "cuts": False,
        "heuristics": False,
        "scaling": True,
    }


def test_loader_error_codes(tmp_path: Path) -> None:
    with pytest.raises(CapabilityConfigError) as missing:
        load_backend_capabilities(tmp_path / "missing.yaml")
    assert missing.value.code == "E_CAPABILITY_CONFIG_READ_FAILED"

    malformed = tmp_path / "malformed.yaml"
    malformed.write_text("backends: {gscip: [\n", encoding="utf-8")
    with pytest.raises(CapabilityConfigError) as parse_failure:
        load_backend_capabilities(malformed)
    assert parse_failure.value.code == "E_CAPABILITY_CONFIG_PARSE_FAILED"

    wrong_root = tmp_path / "wrong_root.yaml"
    wrong_root.write_text("- gscip\n", encoding="utf-8")
    with pytest.raises(CapabilityConfigError) as invalid_root:
        load_backend_capabilities(wrong_root)
    assert invalid_root.value.code == "E_CAPABILITY_CONFIG_INVALID"


def test_mapping_validation_rejects_bad_tables() -> None:
    with pytest.raises(CapabilityConfigError, match="unsupported capability schema"):
        capabilities_from_mapping({"schema": "v0", "backends": {}})
    with pytest.raises(CapabilityConfigError, match="missing backends"):
        capabilities_from_mapping({"schema": "backend_capabilities_v1", "backends": {}})
    with pytest.raises(CapabilityConfigError, match="unknown backend family"):
        capabilities_from_mapping(
            {"schema": "backend_capabilities_v1", "backends": {"glpk": {}}}
        )


def test_alternate_file_can_change_backend_limits(tmp_path: Path) -> None:
    text = DEFAULT_CAPABILITIES_PATH.read_text(encoding="utf-8").replace(
        "max_random_seed: 2000000000", "max_random_seed: 1000"
    )
    path = tmp_path / "caps.yaml"
    path.write_text(text, encoding="utf-8")

    assert get_backend_capabilities(BackendFamily.GUROBI, path).max_random_seed == 1000
