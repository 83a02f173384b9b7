from .capabilities import (
    DEFAULT_CAPABILITIES_PATH,
    BackendCapabilities,
    BackendFamily,
    CapabilityConfigError,
    EmphasisLevels,
    OutputControl,
    capabilities_from_mapping,
    get_backend_capabilities,
    load_backend_capabilities,
)
from .emphasis import resolve_emphasis
from .gurobi import GurobiParameterSequence, format_gurobi_value, sequence_gurobi_parameters
from .mapping import map_common_parameters
from .seed import clamp_seed
from .settings import BackendSettings, TranslationResult
from .strictness import StrictnessEscalator
from .translate import (
    BackendTranslator,
    GurobiTranslator,
    NativeParameterTranslator,
    apply_common_policy,
    translate_parameters,
    translator_for,
)

__all__ = [
    "BackendCapabilities",
    "BackendFamily",
    "BackendSettings",
    "BackendTranslator",
    "CapabilityConfigError",
    "DEFAULT_CAPABILITIES_PATH",
    "EmphasisLevels",
    "GurobiParameterSequence",
    "GurobiTranslator",
    "NativeParameterTranslator",
    "OutputControl",
    "StrictnessEscalator",
    "TranslationResult",
    "apply_common_policy",
    "capabilities_from_mapping",
    "clamp_seed",
    "format_gurobi_value",
    "get_backend_capabilities",
    "load_backend_capabilities",
    "map_common_parameters",
    "resolve_emphasis",
    "sequence_gurobi_parameters",
    "translate_parameters",
    "translator_for",
]
