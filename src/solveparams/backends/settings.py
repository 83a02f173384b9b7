from __future__ import annotations

from dataclasses import dataclass

from solveparams.diagnostics import ParameterIssue
from solveparams.params import NativeValue

from .capabilities import BackendFamily


@dataclass(frozen=True, slots=True)
class BackendSettings:
    """Concrete settings ready to hand to one backend.

    ``entries`` are applied in the order given. For ordered backends this is
    the replay sequence and may repeat a name; for the others it is sorted by
    name with one entry per name. Either way a later entry wins on replay.
    """

    backend: BackendFamily
    entries: tuple[tuple[str, NativeValue], ...]
    ordered: bool

    def as_dict(self) -> dict[str, NativeValue]:
        replayed: dict[str, NativeValue] = {}
        for name, value in self.entries:
            replayed[name] = value
        return replayed

    def effective_value(self, name: str) -> NativeValue | None:
        return self.as_dict().get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.entries)


@dataclass(frozen=True, slots=True)
class TranslationResult:
    settings: BackendSettings | None
    warnings: tuple[ParameterIssue, ...]
    error: ParameterIssue | None

    def __post_init__(self) -> None:
        if (self.settings is None) == (self.error is None):
            raise ValueError("translation result requires exactly one of settings or error")
        if self.error is not None and not self.error.is_fatal:
            raise ValueError("translation error must carry error severity")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def rejected(
        cls,
        error: ParameterIssue,
        warnings: tuple[ParameterIssue, ...] = (),
    ) -> TranslationResult:
        return cls(settings=None, warnings=warnings, error=error)
