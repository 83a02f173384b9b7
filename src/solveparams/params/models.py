from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from enum import StrEnum
from typing import TypeAlias

NativeValue: TypeAlias = bool | int | float | str


class Emphasis(StrEnum):
    UNSPECIFIED = "UNSPECIFIED"
    OFF = "OFF"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"


# Effort ladder used for monotonic level mapping; UNSPECIFIED is not a level.
EMPHASIS_LEVELS: tuple[Emphasis, ...] = (
    Emphasis.OFF,
    Emphasis.LOW,
    Emphasis.MEDIUM,
    Emphasis.HIGH,
    Emphasis.VERY_HIGH,
)


class LPAlgorithm(StrEnum):
    UNSPECIFIED = "UNSPECIFIED"
    PRIMAL_SIMPLEX = "PRIMAL_SIMPLEX"
    DUAL_SIMPLEX = "DUAL_SIMPLEX"
    BARRIER = "BARRIER"


EMPHASIS_FIELDS: tuple[str, ...] = ("presolve", "cuts", "heuristics", "scaling")


@dataclass(frozen=True, slots=True)
class Strictness:
    bad_parameter: bool = False


@dataclass(frozen=True, slots=True)
class CommonParameters:
    """Vendor-neutral parameters of one solve request.

    Every optional scalar uses ``None`` for "unset"; an explicit ``0`` or ``False``
    is a real request and is never collapsed into the unset state.
    """

    strictness: Strictness = field(default_factory=Strictness)
    enable_output: bool | None = None
    time_limit: timedelta | None = None
    threads: int | None = None
    random_seed: int | None = None
    lp_algorithm: LPAlgorithm = LPAlgorithm.UNSPECIFIED
    presolve: Emphasis = Emphasis.UNSPECIFIED
    cuts: Emphasis = Emphasis.UNSPECIFIED
    heuristics: Emphasis = Emphasis.UNSPECIFIED
    scaling: Emphasis = Emphasis.UNSPECIFIED


@dataclass(frozen=True, slots=True)
class NormalizedParameters:
    strictness: Strictness
    enable_output: bool | None
    time_limit: timedelta | None
    threads: int | None
    random_seed: int | None
    lp_algorithm: LPAlgorithm
    presolve: Emphasis
    cuts: Emphasis
    heuristics: Emphasis
    scaling: Emphasis

    def emphasis(self, name: str) -> Emphasis:
        if name not in EMPHASIS_FIELDS:
            raise KeyError(name)
        return getattr(self, name)

    @property
    def time_limit_seconds(self) -> float | None:
        if self.time_limit is None:
            return None
        return self.time_limit.total_seconds()


@dataclass(frozen=True, slots=True)
class GurobiParameter:
    name: str
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("gurobi parameter name must be a non-empty string")
        if not isinstance(self.value, str):
            raise ValueError(f"gurobi parameter '{self.name}' value must be a string")


def _validate_native_value(name: str, value: object) -> NativeValue:
    if isinstance(value, bool | int | float | str):
        return value
    raise ValueError(f"native parameter '{name}' must be a bool, int, float or str")


@dataclass(frozen=True, slots=True)
class NativeParameterBlock:
    """Opaque backend-native parameters, kept in canonical key order."""

    entries: tuple[tuple[str, NativeValue], ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        canonical: list[tuple[str, NativeValue]] = []
        for name, value in self.entries:
            if not name:
                raise ValueError("native parameter name must be non-empty")
            if name in seen:
                raise ValueError(f"duplicate native parameter key: {name}")
            seen.add(name)
            canonical.append((name, _validate_native_value(name, value)))
        object.__setattr__(self, "entries", tuple(sorted(canonical, key=lambda item: item[0])))

    @classmethod
    def from_mapping(cls, values: Mapping[str, NativeValue]) -> NativeParameterBlock:
        return cls(tuple(values.items()))

    def as_dict(self) -> dict[str, NativeValue]:
        return dict(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class OverrideKind(StrEnum):
    NONE = "none"
    GUROBI = "gurobi"
    GSCIP = "gscip"
    GLOP = "glop"
    CP_SAT = "cp_sat"


def _gurobi_parameter(item: object) -> GurobiParameter:
    if isinstance(item, GurobiParameter):
        return item
    if isinstance(item, tuple) and len(item) == 2:
        return GurobiParameter(*item)
    raise ValueError(f"gurobi override entries must be (name, value) pairs, got {item!r}")


_NATIVE_OVERRIDE_KINDS: frozenset[OverrideKind] = frozenset(
    {OverrideKind.GSCIP, OverrideKind.GLOP, OverrideKind.CP_SAT}
)


@dataclass(frozen=True, slots=True)
class BackendOverride:
    """Tagged union of backend-specific parameter blocks.

    ``kind`` selects the active variant. Only the payload belonging to that
    variant may be populated: ``gurobi_parameters`` for ``GUROBI`` and
    ``native`` for the structured backends.
    """

    kind: OverrideKind = OverrideKind.NONE
    gurobi_parameters: tuple[GurobiParameter, ...] = ()
    native: NativeParameterBlock | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "gurobi_parameters",
            tuple(_gurobi_parameter(item) for item in self.gurobi_parameters),
        )
        if self.kind is OverrideKind.NONE:
            if self.gurobi_parameters or self.native is not None:
                raise ValueError("override kind 'none' cannot carry a payload")
        elif self.kind is OverrideKind.GUROBI:
            if self.native is not None:
                raise ValueError("gurobi override cannot carry a native parameter block")
        elif self.kind in _NATIVE_OVERRIDE_KINDS:
            if self.gurobi_parameters:
                raise ValueError(f"{self.kind} override cannot carry gurobi parameters")
            if self.native is None:
                object.__setattr__(self, "native", NativeParameterBlock())
        else:  # pragma: no cover - enum is closed
            raise ValueError(f"unknown override kind: {self.kind}")

    @classmethod
    def empty(cls) -> BackendOverride:
        return cls()

    @classmethod
    def gurobi(cls, parameters: Iterable[GurobiParameter | tuple[str, str]]) -> BackendOverride:
        entries = tuple(_gurobi_parameter(item) for item in parameters)
        return cls(kind=OverrideKind.GUROBI, gurobi_parameters=entries)

    @classmethod
    def native_block(
        cls,
        kind: OverrideKind,
        values: Mapping[str, NativeValue],
    ) -> BackendOverride:
        if kind not in _NATIVE_OVERRIDE_KINDS:
            raise ValueError(f"override kind '{kind}' does not take a native parameter block")
        return cls(kind=kind, native=NativeParameterBlock.from_mapping(values))

    @property
    def is_empty(self) -> bool:
        return self.kind is OverrideKind.NONE


@dataclass(frozen=True, slots=True)
class SolveParameters:
    common: CommonParameters = field(default_factory=CommonParameters)
    override: BackendOverride = field(default_factory=BackendOverride)
