from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from solveparams.diagnostics import ParameterIssue, build_parameter_issue

from .models import (
    EMPHASIS_FIELDS,
    CommonParameters,
    Emphasis,
    LPAlgorithm,
    NormalizedParameters,
)

_ZERO_DURATION = timedelta(0)


@dataclass(frozen=True, slots=True)
class NormalizationResult:
    parameters: NormalizedParameters | None
    error: ParameterIssue | None

    def __post_init__(self) -> None:
        if (self.parameters is None) == (self.error is None):
            raise ValueError("normalization result requires exactly one of parameters or error")

    @property
    def ok(self) -> bool:
        return self.error is None


def normalize_parameters(raw: CommonParameters) -> NormalizationResult:
    """Validate the structural invariants of ``raw`` and freeze it for translation.

    Structural violations are fatal independent of ``raw.strictness``; everything
    backend-dependent is left to the translators. Unset fields stay unset.
    """
    error = _validate_threads(raw.threads)
    if error is None:
        error = _validate_random_seed(raw.random_seed)
    if error is None:
        error = _validate_time_limit(raw.time_limit)
    if error is not None:
        return NormalizationResult(parameters=None, error=error)

    lp_algorithm, error = _coerce_lp_algorithm(raw.lp_algorithm)
    if error is not None:
        return NormalizationResult(parameters=None, error=error)
    emphasis: dict[str, Emphasis] = {}
    for name in EMPHASIS_FIELDS:
        level, error = _coerce_emphasis(name, getattr(raw, name))
        if error is not None:
            return NormalizationResult(parameters=None, error=error)
        assert level is not None
        emphasis[name] = level

    return NormalizationResult(
        parameters=NormalizedParameters(
            strictness=raw.strictness,
            enable_output=raw.enable_output,
            time_limit=raw.time_limit,
            threads=raw.threads,
            random_seed=raw.random_seed,
            lp_algorithm=lp_algorithm,
            **emphasis,
        ),
        error=None,
    )


def _is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_threads(threads: object) -> ParameterIssue | None:
    if threads is None:
        return None
    if not _is_integer(threads) or threads < 1:  # type: ignore[operator]
        return build_parameter_issue(
            code="E_PARAM_THREADS_INVALID",
            parameter="threads",
            message=f"threads must be an integer >= 1 when set, got {threads!r}",
            witness={"threads": repr(threads)},
        )
    return None


def _validate_random_seed(random_seed: object) -> ParameterIssue | None:
    if random_seed is None or _is_integer(random_seed):
        return None
    return build_parameter_issue(
        code="E_PARAM_SEED_INVALID",
        parameter="random_seed",
        message=f"random_seed must be an integer when set, got {random_seed!r}",
        witness={"random_seed": repr(random_seed)},
    )


def _validate_time_limit(time_limit: object) -> ParameterIssue | None:
    if time_limit is None:
        return None
    if not isinstance(time_limit, timedelta) or time_limit < _ZERO_DURATION:
        return build_parameter_issue(
            code="E_PARAM_TIME_LIMIT_INVALID",
            parameter="time_limit",
            message=f"time_limit must be a non-negative duration when set, got {time_limit!r}",
            witness={"time_limit": repr(time_limit)},
        )
    return None


def _coerce_lp_algorithm(value: object) -> tuple[LPAlgorithm, ParameterIssue | None]:
    try:
        return (LPAlgorithm(value), None)
    except ValueError:
        return (
            LPAlgorithm.UNSPECIFIED,
            build_parameter_issue(
                code="E_PARAM_LP_ALGORITHM_INVALID",
                parameter="lp_algorithm",
                message=f"lp_algorithm must be an LPAlgorithm value, got {value!r}",
                witness={"lp_algorithm": repr(value)},
            ),
        )


def _coerce_emphasis(name: str, value: object) -> tuple[Emphasis | None, ParameterIssue | None]:
    try:
        return (Emphasis(value), None)
    except ValueError:
        return (
            None,
            build_parameter_issue(
                code="E_PARAM_EMPHASIS_INVALID",
                parameter=name,
                message=f"{name} must be an Emphasis value, got {value!r}",
                witness={name: repr(value)},
            ),
        )
