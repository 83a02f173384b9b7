from __future__ import annotations

from datetime import timedelta

import pytest

from solveparams.diagnostics import IssueKind, Severity
from solveparams.params import (
    CommonParameters,
    Emphasis,
    LPAlgorithm,
    Strictness,
    normalize_parameters,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("bad_parameter", [False, True])
@pytest.mark.parametrize("threads", [0, -1, -64])
def test_nonpositive_threads_are_fatal_regardless_of_strictness(
    threads: int, bad_parameter: bool
) -> None:
    result = normalize_parameters(
        CommonParameters(strictness=Strictness(bad_parameter=bad_parameter), threads=threads)
    )

    assert result.ok is False
    assert result.parameters is None
    assert result.error is not None
    assert result.error.code == "E_PARAM_THREADS_INVALID"
    assert result.error.kind is IssueKind.INVALID_PARAMETER
    assert result.error.severity is Severity.ERROR
    assert result.error.parameter == "threads"


def test_bool_threads_are_structurally_invalid() -> None:
    result = normalize_parameters(CommonParameters(threads=True))

    assert result.error is not None
    assert result.error.code == "E_PARAM_THREADS_INVALID"


def test_unset_fields_stay_unset_and_explicit_values_pass_through() -> None:
    unset = normalize_parameters(CommonParameters())
    explicit = normalize_parameters(
        CommonParameters(
            enable_output=False,
            time_limit=timedelta(0),
            threads=1,
            random_seed=0,
            lp_algorithm=LPAlgorithm.BARRIER,
            presolve=Emphasis.OFF,
            cuts=Emphasis.LOW,
            heuristics=Emphasis.HIGH,
            scaling=Emphasis.VERY_HIGH,
        )
    )

    assert unset.parameters is not None
    assert unset.parameters.enable_output is None
    assert unset.parameters.time_limit is None
    assert unset.parameters.threads is None
    assert unset.parameters.random_seed is None
    assert unset.parameters.time_limit_seconds is None

    assert explicit.parameters is not None
    assert explicit.parameters.enable_output is False
    assert explicit.parameters.time_limit == timedelta(0)
    assert explicit.parameters.time_limit_seconds == 0.0
    assert explicit.parameters.threads == 1
    assert explicit.parameters.random_seed == 0
    assert explicit.parameters.lp_algorithm is LPAlgorithm.BARRIER
    assert explicit.parameters.emphasis("presolve") is Emphasis.OFF
    assert explicit.parameters.emphasis("scaling") is Emphasis.VERY_HIGH


def test_out_of_range_seed_is_not_a_normalization_error() -> None:
    result = normalize_parameters(CommonParameters(random_seed=-5))

    assert result.ok
    assert result.parameters is not None
    assert result.parameters.random_seed == -5


def test_negative_time_limit_is_invalid() -> None:
    result = normalize_parameters(CommonParameters(time_limit=timedelta(seconds=-1)))

    assert result.error is not None
    assert result.error.code == "E_PARAM_TIME_LIMIT_INVALID"
    assert result.error.kind is IssueKind.INVALID_PARAMETER


def test_non_integer_seed_is_invalid() -> None:
    result = normalize_parameters(CommonParameters(random_seed=False))

    assert result.error is not None
    assert result.error.code == "E_PARAM_SEED_INVALID"


def test_unknown_emphasis_field_name_raises() -> None:
    result = normalize_parameters(CommonParameters())
    assert result.parameters is not None

    with pytest.raises(KeyError):
        result.parameters.emphasis("branching")


def test_raw_enum_strings_are_coerced() -> None:
    result = normalize_parameters(
        CommonParameters(lp_algorithm="DUAL_SIMPLEX", cuts="HIGH")  # type: ignore[arg-type]
    )

    assert result.parameters is not None
    assert result.parameters.lp_algorithm is LPAlgorithm.DUAL_SIMPLEX
    assert result.parameters.cuts is Emphasis.HIGH
    assert result.parameters.presolve is Emphasis.UNSPECIFIED


@pytest.mark.parametrize(
    ("fields", "code", "parameter"),
    [
        ({"lp_algorithm": "SIFTING"}, "E_PARAM_LP_ALGORITHM_INVALID", "lp_algorithm"),
        ({"lp_algorithm": 1}, "E_PARAM_LP_ALGORITHM_INVALID", "lp_algorithm"),
        ({"cuts": "EXTREME"}, "E_PARAM_EMPHASIS_INVALID", "cuts"),
        ({"scaling": None}, "E_PARAM_EMPHASIS_INVALID", "scaling"),
    ],
)
def test_values_outside_the_enums_are_invalid(
    fields: dict[str, object], code: str, parameter: str
) -> None:
    result = normalize_parameters(CommonParameters(**fields))  # type: ignore[arg-type]

    assert result.parameters is None
    assert result.error is not None
    assert result.error.code == code
    assert result.error.kind is IssueKind.INVALID_PARAMETER
    assert result.error.parameter == parameter
