from .models import (
    EMPHASIS_FIELDS,
    EMPHASIS_LEVELS,
    BackendOverride,
    CommonParameters,
    Emphasis,
    GurobiParameter,
    LPAlgorithm,
    NativeParameterBlock,
    NativeValue,
    NormalizedParameters,
    OverrideKind,
    SolveParameters,
    Strictness,
)
from .normalize import NormalizationResult, normalize_parameters
from .wire import (
    ParameterLoadError,
    SolveParametersPayload,
    load_solve_parameters,
    parse_solve_parameters,
)

__all__ = [
    "BackendOverride",
    "CommonParameters",
    "EMPHASIS_FIELDS",
    "EMPHASIS_LEVELS",
    "Emphasis",
    "GurobiParameter",
    "LPAlgorithm",
    "NativeParameterBlock",
    "NativeValue",
    "NormalizationResult",
    "NormalizedParameters",
    "OverrideKind",
    "ParameterLoadError",
    "SolveParameters",
    "SolveParametersPayload",
    "Strictness",
    "load_solve_parameters",
    "normalize_parameters",
    "parse_solve_parameters",
]
