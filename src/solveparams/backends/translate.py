from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Protocol, runtime_checkable

from solveparams.diagnostics import ParameterIssue, build_parameter_issue
from solveparams.params import (
    EMPHASIS_FIELDS,
    BackendOverride,
    Emphasis,
    LPAlgorithm,
    NativeValue,
    NormalizedParameters,
    OverrideKind,
    SolveParameters,
    normalize_parameters,
)

from .capabilities import BackendCapabilities, BackendFamily, get_backend_capabilities
from .emphasis import resolve_emphasis
from .gurobi import sequence_gurobi_parameters
from .mapping import map_common_parameters
from .seed import clamp_seed
from .settings import BackendSettings, TranslationResult
from .strictness import StrictnessEscalator

logger = logging.getLogger(__name__)


@runtime_checkable
class BackendTranslator(Protocol):
    @property
    def capabilities(self) -> BackendCapabilities: ...

    def translate(
        self,
        normalized: NormalizedParameters,
        override: BackendOverride | None = None,
    ) -> TranslationResult: ...


@dataclass(frozen=True, slots=True)
class NativeParameterTranslator:
    """Translator for backends configured through a structured parameter block."""

    capabilities: BackendCapabilities

    def translate(
        self,
        normalized: NormalizedParameters,
        override: BackendOverride | None = None,
    ) -> TranslationResult:
        escalator = StrictnessEscalator(normalized.strictness)
        effective, fatal = apply_common_policy(normalized, self.capabilities, escalator)
        if fatal is not None:
            return TranslationResult.rejected(fatal, escalator.warnings())
        assert effective is not None

        active_override, fatal = _select_override(override, self.capabilities, escalator)
        if fatal is not None:
            return TranslationResult.rejected(fatal, escalator.warnings())

        merged: dict[str, NativeValue] = dict(map_common_parameters(effective, self.capabilities))
        if active_override is not None and active_override.native is not None:
            merged.update(active_override.native.as_dict())

        settings = BackendSettings(
            backend=self.capabilities.backend,
            entries=tuple(sorted(merged.items(), key=lambda item: item[0])),
            ordered=False,
        )
        _log_settings(settings, escalator)
        return TranslationResult(settings=settings, warnings=escalator.warnings(), error=None)


@dataclass(frozen=True, slots=True)
class GurobiTranslator:
    """Translator for the backend that replays ``name=value`` strings in order."""

    capabilities: BackendCapabilities

    def translate(
        self,
        normalized: NormalizedParameters,
        override: BackendOverride | None = None,
    ) -> TranslationResult:
        escalator = StrictnessEscalator(normalized.strictness)
        effective, fatal = apply_common_policy(normalized, self.capabilities, escalator)
        if fatal is not None:
            return TranslationResult.rejected(fatal, escalator.warnings())
        assert effective is not None

        active_override, fatal = _select_override(override, self.capabilities, escalator)
        if fatal is not None:
            return TranslationResult.rejected(fatal, escalator.warnings())

        sequence = sequence_gurobi_parameters(
            effective,
            () if active_override is None else active_override.gurobi_parameters,
            capabilities=self.capabilities,
        )
        settings = BackendSettings(
            backend=self.capabilities.backend,
            entries=tuple(sequence.as_pairs()),
            ordered=True,
        )
        _log_settings(settings, escalator)
        return TranslationResult(settings=settings, warnings=escalator.warnings(), error=None)


def translator_for(
    backend: BackendFamily | str,
    capabilities: BackendCapabilities | None = None,
) -> BackendTranslator:
    family = BackendFamily(backend)
    caps = capabilities if capabilities is not None else get_backend_capabilities(family)
    if caps.backend is not family:
        raise ValueError(f"capabilities describe '{caps.backend}', not '{family}'")
    if caps.sequential_settings:
        return GurobiTranslator(caps)
    return NativeParameterTranslator(caps)


def translate_parameters(
    parameters: SolveParameters,
    backend: BackendFamily | str,
    *,
    capabilities: BackendCapabilities | None = None,
) -> TranslationResult:
    """Normalize ``parameters`` and translate them for ``backend``.

    Returns either ready-to-apply settings with the recorded warnings, or the
    fatal issue that rejected the request. Nothing is partially applied.
    """
    translator = translator_for(backend, capabilities)
    normalization = normalize_parameters(parameters.common)
    if normalization.error is not None:
        logger.debug("rejected solve parameters: %s", normalization.error.message)
        return TranslationResult.rejected(normalization.error)
    assert normalization.parameters is not None
    return translator.translate(normalization.parameters, parameters.override)


def apply_common_policy(
    normalized: NormalizedParameters,
    capabilities: BackendCapabilities,
    escalator: StrictnessEscalator,
) -> tuple[NormalizedParameters | None, ParameterIssue | None]:
    """Fit ``normalized`` to ``capabilities``, routing every violation through ``escalator``.

    Runs seed clamping, emphasis resolution and direct-field checks in that
    order and returns a new parameter value holding only what the backend can
    take. The first fatal issue stops the walk.
    """
    backend = capabilities.backend.value
    seed = clamp_seed(normalized.random_seed, capabilities.max_random_seed)
    if seed != normalized.random_seed:
        logger.debug(
            "clamped random_seed %s to %s for backend '%s'",
            normalized.random_seed,
            seed,
            backend,
        )
        escalator.note(
            build_parameter_issue(
                code="W_PARAM_SEED_CLAMPED",
                parameter="random_seed",
                message=(
                    f"random_seed {normalized.random_seed} is outside [0, "
                    f"{capabilities.max_random_seed}] for backend '{backend}'; using {seed}"
                ),
                backend=backend,
                witness={
                    "requested": normalized.random_seed,
                    "effective": seed,
                    "max_valid": capabilities.max_random_seed,
                },
            )
        )

    emphasis: dict[str, Emphasis] = {}
    for feature in EMPHASIS_FIELDS:
        resolved, fatal = resolve_emphasis(
            normalized.emphasis(feature),
            capabilities.supports_emphasis(feature),
            escalator,
            feature=feature,
            backend=backend,
        )
        if fatal is not None:
            return (None, fatal)
        assert resolved is not None
        emphasis[feature] = resolved

    threads, fatal = _check_threads(normalized.threads, capabilities, escalator)
    if fatal is not None:
        return (None, fatal)
    lp_algorithm, fatal = _check_lp_algorithm(normalized.lp_algorithm, capabilities, escalator)
    if fatal is not None:
        return (None, fatal)
    enable_output, fatal = _check_output(normalized.enable_output, capabilities, escalator)
    if fatal is not None:
        return (None, fatal)

    return (
        replace(
            normalized,
            random_seed=seed,
            threads=threads,
            lp_algorithm=lp_algorithm,
            enable_output=enable_output,
            **emphasis,
        ),
        None,
    )


def _check_threads(
    threads: int | None,
    capabilities: BackendCapabilities,
    escalator: StrictnessEscalator,
) -> tuple[int | None, ParameterIssue | None]:
    max_threads = capabilities.max_threads
    if threads is None or max_threads is None or threads <= max_threads:
        return (threads, None)
    backend = capabilities.backend.value
    fatal = escalator.escalate(
        build_parameter_issue(
            code="W_PARAM_THREADS_UNSUPPORTED",
            parameter="threads",
            message=f"threads={threads} exceeds the maximum of {max_threads} for backend '{backend}'",
            backend=backend,
            witness={"requested": threads, "max_threads": max_threads},
        )
    )
    return (None, fatal)


def _check_lp_algorithm(
    lp_algorithm: LPAlgorithm,
    capabilities: BackendCapabilities,
    escalator: StrictnessEscalator,
) -> tuple[LPAlgorithm, ParameterIssue | None]:
    if (
        lp_algorithm is LPAlgorithm.UNSPECIFIED
        or capabilities.lp_algorithm_value(lp_algorithm) is not None
    ):
        return (lp_algorithm, None)
    backend = capabilities.backend.value
    fatal = escalator.escalate(
        build_parameter_issue(
            code="W_PARAM_LP_ALGORITHM_UNSUPPORTED",
            parameter="lp_algorithm",
            message=f"lp_algorithm {lp_algorithm.value} is not supported by backend '{backend}'",
            backend=backend,
            witness={
                "requested": lp_algorithm.value,
                "supported": [algorithm.value for algorithm, _ in capabilities.lp_algorithms],
            },
        )
    )
    return (LPAlgorithm.UNSPECIFIED, fatal)


def _check_output(
    enable_output: bool | None,
    capabilities: BackendCapabilities,
    escalator: StrictnessEscalator,
) -> tuple[bool | None, ParameterIssue | None]:
    if enable_output is None or capabilities.output is not None:
        return (enable_output, None)
    if not enable_output:
        # No trace output exists to disable.
        return (None, None)
    backend = capabilities.backend.value
    fatal = escalator.escalate(
        build_parameter_issue(
            code="W_PARAM_OUTPUT_UNSUPPORTED",
            parameter="enable_output",
            message=f"backend '{backend}' has no solver trace output to enable",
            backend=backend,
            witness={"requested": True},
        )
    )
    return (None, fatal)


def _select_override(
    override: BackendOverride | None,
    capabilities: BackendCapabilities,
    escalator: StrictnessEscalator,
) -> tuple[BackendOverride | None, ParameterIssue | None]:
    if override is None or override.is_empty:
        return (None, None)
    expected = OverrideKind(capabilities.backend.value)
    if override.kind is expected:
        return (override, None)
    backend = capabilities.backend.value
    fatal = escalator.escalate(
        build_parameter_issue(
            code="W_PARAM_OVERRIDE_MISMATCH",
            parameter="override",
            message=f"override of kind '{override.kind.value}' cannot be applied to backend '{backend}'",
            backend=backend,
            witness={"override_kind": override.kind.value, "backend": backend},
        )
    )
    return (None, fatal)


def _log_settings(settings: BackendSettings, escalator: StrictnessEscalator) -> None:
    logger.debug(
        "translated %d setting(s) for backend '%s' with %d warning(s)",
        len(settings.entries),
        settings.backend.value,
        len(escalator.warnings()),
    )
