from __future__ import annotations

from collections.abc import Callable
from typing import TypeAlias

from solveparams.params import EMPHASIS_FIELDS, Emphasis, LPAlgorithm, NativeValue, NormalizedParameters

from .capabilities import BackendCapabilities
from .seed import clamp_seed

_Entry: TypeAlias = tuple[str, NativeValue]
_Emitter: TypeAlias = Callable[[NormalizedParameters, BackendCapabilities], _Entry | None]


def map_common_parameters(
    normalized: NormalizedParameters,
    capabilities: BackendCapabilities,
) -> tuple[tuple[str, NativeValue], ...]:
    """Native entries for every set common field, in canonical order.

    Order: threads, seed, time limit, LP algorithm, presolve, cuts, heuristics,
    scaling, output flag. Unset fields and fields the backend has no parameter
    for are omitted.
    """
    entries: list[_Entry] = []
    for emit in _CANONICAL_EMITTERS:
        entry = emit(normalized, capabilities)
        if entry is not None:
            entries.append(entry)
    return tuple(entries)


def _emit_threads(normalized: NormalizedParameters, caps: BackendCapabilities) -> _Entry | None:
    if normalized.threads is None:
        return None
    return (caps.threads_parameter, normalized.threads)


def _emit_seed(normalized: NormalizedParameters, caps: BackendCapabilities) -> _Entry | None:
    seed = clamp_seed(normalized.random_seed, caps.max_random_seed)
    if seed is None:
        return None
    return (caps.random_seed_parameter, seed)


def _emit_time_limit(normalized: NormalizedParameters, caps: BackendCapabilities) -> _Entry | None:
    seconds = normalized.time_limit_seconds
    if seconds is None:
        return None
    return (caps.time_limit_parameter, seconds)


def _emit_lp_algorithm(
    normalized: NormalizedParameters, caps: BackendCapabilities
) -> _Entry | None:
    if normalized.lp_algorithm is LPAlgorithm.UNSPECIFIED or caps.lp_algorithm_parameter is None:
        return None
    value = caps.lp_algorithm_value(normalized.lp_algorithm)
    if value is None:
        return None
    return (caps.lp_algorithm_parameter, value)


def _emphasis_emitter(feature: str) -> _Emitter:
    def emit(normalized: NormalizedParameters, caps: BackendCapabilities) -> _Entry | None:
        requested = normalized.emphasis(feature)
        levels = caps.emphasis_levels(feature)
        if requested is Emphasis.UNSPECIFIED or levels is None:
            return None
        return (levels.parameter, levels.value_for(requested))

    return emit


def _emit_output(normalized: NormalizedParameters, caps: BackendCapabilities) -> _Entry | None:
    if normalized.enable_output is None or caps.output is None:
        return None
    return (caps.output.parameter, caps.output.value_for(normalized.enable_output))


_CANONICAL_EMITTERS: tuple[_Emitter, ...] = (
    _emit_threads,
    _emit_seed,
    _emit_time_limit,
    _emit_lp_algorithm,
    *(_emphasis_emitter(feature) for feature in EMPHASIS_FIELDS),
    _emit_output,
)
