from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from functools import cache
from pathlib import Path
from types import MappingProxyType
from typing import Final, cast

import yaml  # type: ignore[import-untyped]

from solveparams.params import EMPHASIS_FIELDS, EMPHASIS_LEVELS, Emphasis, LPAlgorithm, NativeValue

DEFAULT_CAPABILITIES_PATH = Path(__file__).resolve().parents[1] / "data/backend_capabilities.yaml"
_SCHEMA_ID: Final[str] = "backend_capabilities_v1"


class BackendFamily(StrEnum):
    GSCIP = "gscip"
    GUROBI = "gurobi"
    GLOP = "glop"
    CP_SAT = "cp_sat"


class CapabilityConfigError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


@dataclass(frozen=True, slots=True)
class EmphasisLevels:
    """Native values for one emphasis-style feature, from OFF up to VERY_HIGH.

    String-valued backends declare ``scale`` (their levels in increasing effort);
    numeric and boolean levels are ranked by value. Either way the mapping must
    never decrease as the requested emphasis increases.
    """

    parameter: str
    off: NativeValue
    low: NativeValue
    medium: NativeValue
    high: NativeValue
    very_high: NativeValue
    scale: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.parameter:
            raise ValueError("emphasis parameter name must be non-empty")
        ranks = [self._rank(value) for value in self.ladder()]
        for lower, higher in zip(ranks, ranks[1:], strict=False):
            if higher < lower:
                raise ValueError(
                    f"emphasis levels for '{self.parameter}' must be non-decreasing from OFF to VERY_HIGH"
                )

    def ladder(self) -> tuple[NativeValue, ...]:
        return (self.off, self.low, self.medium, self.high, self.very_high)

    def value_for(self, emphasis: Emphasis) -> NativeValue:
        if emphasis is Emphasis.UNSPECIFIED:
            raise ValueError("UNSPECIFIED emphasis has no native level")
        return self.ladder()[EMPHASIS_LEVELS.index(emphasis)]

    def _rank(self, value: NativeValue) -> float:
        if self.scale:
            if not isinstance(value, str) or value not in self.scale:
                raise ValueError(
                    f"emphasis level {value!r} for '{self.parameter}' is not in its scale"
                )
            return float(self.scale.index(value))
        if isinstance(value, str):
            raise ValueError(
                f"emphasis level {value!r} for '{self.parameter}' needs an explicit scale"
            )
        return float(value)


@dataclass(frozen=True, slots=True)
class OutputControl:
    parameter: str
    inverted: bool = False

    def value_for(self, enabled: bool) -> bool:
        return not enabled if self.inverted else enabled


@dataclass(frozen=True, slots=True)
class BackendCapabilities:
    backend: BackendFamily
    max_random_seed: int
    sequential_settings: bool
    threads_parameter: str
    random_seed_parameter: str
    time_limit_parameter: str
    max_threads: int | None = None
    output: OutputControl | None = None
    lp_algorithm_parameter: str | None = None
    lp_algorithms: tuple[tuple[LPAlgorithm, NativeValue], ...] = ()
    emphasis: tuple[tuple[str, EmphasisLevels], ...] = ()

    def __post_init__(self) -> None:
        if self.max_random_seed < 0:
            raise ValueError(f"{self.backend}: max_random_seed must be >= 0")
        if self.max_threads is not None and self.max_threads < 1:
            raise ValueError(f"{self.backend}: max_threads must be >= 1 when set")
        for name, _ in self.emphasis:
            if name not in EMPHASIS_FIELDS:
                raise ValueError(f"{self.backend}: unknown emphasis feature '{name}'")
        if self.lp_algorithms and self.lp_algorithm_parameter is None:
            raise ValueError(f"{self.backend}: lp_algorithms require lp_algorithm_parameter")
        if any(algorithm is LPAlgorithm.UNSPECIFIED for algorithm, _ in self.lp_algorithms):
            raise ValueError(f"{self.backend}: UNSPECIFIED is not a mappable lp_algorithm")

    def supports_emphasis(self, feature: str) -> bool:
        return self.emphasis_levels(feature) is not None

    def emphasis_levels(self, feature: str) -> EmphasisLevels | None:
        for name, levels in self.emphasis:
            if name == feature:
                return levels
        return None

    def lp_algorithm_value(self, algorithm: LPAlgorithm) -> NativeValue | None:
        for candidate, value in self.lp_algorithms:
            if candidate is algorithm:
                return value
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "backend": self.backend.value,
            "max_random_seed": self.max_random_seed,
            "sequential_settings": self.sequential_settings,
            "max_threads": self.max_threads,
            "output": None if self.output is None else self.output.parameter,
            "lp_algorithms": [algorithm.value for algorithm, _ in self.lp_algorithms],
            "emphasis": {
                feature: self.supports_emphasis(feature) for feature in EMPHASIS_FIELDS
            },
        }


def load_backend_capabilities(
    path: str | Path | None = None,
) -> Mapping[BackendFamily, BackendCapabilities]:
    selected_path = Path(path) if path is not None else DEFAULT_CAPABILITIES_PATH
    return _load_backend_capabilities_cached(str(selected_path.resolve()))


def get_backend_capabilities(
    backend: BackendFamily,
    path: str | Path | None = None,
) -> BackendCapabilities:
    return load_backend_capabilities(path)[backend]


@cache
def _load_backend_capabilities_cached(path: str) -> Mapping[BackendFamily, BackendCapabilities]:
    return capabilities_from_mapping(_read_yaml_file(Path(path)))


def capabilities_from_mapping(
    raw: Mapping[str, object],
) -> Mapping[BackendFamily, BackendCapabilities]:
    schema = raw.get("schema")
    if schema != _SCHEMA_ID:
        raise CapabilityConfigError(
            "E_CAPABILITY_CONFIG_INVALID",
            f"unsupported capability schema {schema!r}; expected '{_SCHEMA_ID}'",
        )
    backends_block = _require_mapping(raw, "backends")
    table: dict[BackendFamily, BackendCapabilities] = {}
    for key in sorted(backends_block):
        try:
            family = BackendFamily(key)
        except ValueError as exc:
            raise CapabilityConfigError(
                "E_CAPABILITY_CONFIG_INVALID", f"unknown backend family '{key}'"
            ) from exc
        table[family] = _parse_backend(family, _require_mapping(backends_block, key))
    missing = [family.value for family in BackendFamily if family not in table]
    if missing:
        raise CapabilityConfigError(
            "E_CAPABILITY_CONFIG_INVALID",
            f"capability table is missing backends: {', '.join(missing)}",
        )
    return MappingProxyType(table)


def _parse_backend(family: BackendFamily, block: dict[str, object]) -> BackendCapabilities:
    parameters = _require_mapping(block, "parameters")
    output_block = _optional_mapping(block, "output")
    lp_block = _optional_mapping(block, "lp_algorithm")
    emphasis_block = _optional_mapping(block, "emphasis") or {}
    max_threads = block.get("max_threads")
    if max_threads is not None and not _is_int(max_threads):
        raise CapabilityConfigError(
            "E_CAPABILITY_CONFIG_INVALID", f"{family}: max_threads must be an integer or null"
        )
    try:
        return BackendCapabilities(
            backend=family,
            max_random_seed=_require_int(block, "max_random_seed"),
            sequential_settings=_require_bool(block, "sequential_settings"),
            threads_parameter=_require_string(parameters, "threads"),
            random_seed_parameter=_require_string(parameters, "random_seed"),
            time_limit_parameter=_require_string(parameters, "time_limit"),
            max_threads=cast(int | None, max_threads),
            output=(
                None
                if output_block is None
                else OutputControl(
                    parameter=_require_string(output_block, "parameter"),
                    inverted=_require_bool(output_block, "inverted"),
                )
            ),
            lp_algorithm_parameter=(
                None if lp_block is None else _require_string(lp_block, "parameter")
            ),
            lp_algorithms=_parse_lp_algorithms(family, lp_block),
            emphasis=tuple(
                (feature, _parse_emphasis(_require_mapping(emphasis_block, feature)))
                for feature in EMPHASIS_FIELDS
                if feature in emphasis_block
            ),
        )
    except ValueError as exc:
        if isinstance(exc, CapabilityConfigError):
            raise
        raise CapabilityConfigError("E_CAPABILITY_CONFIG_INVALID", f"{family}: {exc}") from exc


def _parse_lp_algorithms(
    family: BackendFamily,
    lp_block: dict[str, object] | None,
) -> tuple[tuple[LPAlgorithm, NativeValue], ...]:
    if lp_block is None:
        return ()
    values = _require_mapping(lp_block, "values")
    parsed: list[tuple[LPAlgorithm, NativeValue]] = []
    for name in sorted(values):
        try:
            algorithm = LPAlgorithm(name)
        except ValueError as exc:
            raise CapabilityConfigError(
                "E_CAPABILITY_CONFIG_INVALID", f"{family}: unknown lp_algorithm '{name}'"
            ) from exc
        parsed.append((algorithm, _require_native(values, name)))
    return tuple(parsed)


def _parse_emphasis(block: dict[str, object]) -> EmphasisLevels:
    levels = _require_mapping(block, "levels")
    raw_scale = block.get("scale", [])
    if not isinstance(raw_scale, list) or not all(isinstance(item, str) for item in raw_scale):
        raise CapabilityConfigError(
            "E_CAPABILITY_CONFIG_INVALID", "emphasis scale must be a list of strings"
        )
    return EmphasisLevels(
        parameter=_require_string(block, "parameter"),
        off=_require_native(levels, Emphasis.OFF.value),
        low=_require_native(levels, Emphasis.LOW.value),
        medium=_require_native(levels, Emphasis.MEDIUM.value),
        high=_require_native(levels, Emphasis.HIGH.value),
        very_high=_require_native(levels, Emphasis.VERY_HIGH.value),
        scale=tuple(cast(list[str], raw_scale)),
    )


def _read_yaml_file(path: Path) -> dict[str, object]:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CapabilityConfigError(
            "E_CAPABILITY_CONFIG_READ_FAILED",
            f"unable to read backend capability table '{path}': {exc}",
        ) from exc
    try:
        payload = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise CapabilityConfigError(
            "E_CAPABILITY_CONFIG_PARSE_FAILED",
            f"invalid backend capability yaml in '{path}': {exc}",
        ) from exc
    if not isinstance(payload, dict):
        raise CapabilityConfigError(
            "E_CAPABILITY_CONFIG_INVALID",
            "backend capability table root must be a mapping",
        )
    return cast(dict[str, object], payload)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_mapping(data: Mapping[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return cast(dict[str, object], value)
    raise CapabilityConfigError(
        "E_CAPABILITY_CONFIG_INVALID", f"missing or invalid mapping for key '{key}'"
    )


def _optional_mapping(data: Mapping[str, object], key: str) -> dict[str, object] | None:
    if data.get(key) is None:
        return None
    return _require_mapping(data, key)


def _require_string(data: Mapping[str, object], key: str) -> str:
    value = data.get(key)
    if isinstance(value, str) and value:
        return value
    raise CapabilityConfigError(
        "E_CAPABILITY_CONFIG_INVALID", f"missing or invalid string for key '{key}'"
    )


def _require_int(data: Mapping[str, object], key: str) -> int:
    value = data.get(key)
    if _is_int(value):
        return cast(int, value)
    raise CapabilityConfigError(
        "E_CAPABILITY_CONFIG_INVALID", f"missing or invalid integer for key '{key}'"
    )


def _require_bool(data: Mapping[str, object], key: str) -> bool:
    value = data.get(key)
    if isinstance(value, bool):
        return value
    raise CapabilityConfigError(
        "E_CAPABILITY_CONFIG_INVALID", f"missing or invalid bool for key '{key}'"
    )


def _require_native(data: Mapping[str, object], key: str) -> NativeValue:
    value = data.get(key)
    if isinstance(value, bool | int | float | str):
        return value
    raise CapabilityConfigError(
        "E_CAPABILITY_CONFIG_INVALID", f"missing or invalid native value for key '{key}'"
    )
