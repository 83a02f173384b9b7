from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from solveparams.params import GurobiParameter, NativeValue, NormalizedParameters

from .capabilities import BackendCapabilities, BackendFamily, get_backend_capabilities
from .mapping import map_common_parameters


@dataclass(frozen=True, slots=True)
class GurobiParameterSequence:
    """Ordered ``name=value`` settings, applied strictly one at a time.

    The sequence is never deduplicated: when a name repeats, the backend keeps
    the value of the last occurrence. Reordering entries changes the final
    backend state.
    """

    entries: tuple[GurobiParameter, ...]

    def __iter__(self) -> Iterator[GurobiParameter]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def as_pairs(self) -> tuple[tuple[str, str], ...]:
        return tuple((entry.name, entry.value) for entry in self.entries)

    def replay(self) -> dict[str, str]:
        state: dict[str, str] = {}
        for entry in self.entries:
            state[entry.name] = entry.value
        return state

    def effective_value(self, name: str) -> str | None:
        return self.replay().get(name)


def format_gurobi_value(value: NativeValue) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    return value


def sequence_gurobi_parameters(
    normalized: NormalizedParameters,
    overrides: Iterable[GurobiParameter] = (),
    *,
    capabilities: BackendCapabilities | None = None,
) -> GurobiParameterSequence:
    """Common entries in canonical order, then ``overrides`` verbatim."""
    caps = (
        capabilities
        if capabilities is not None
        else get_backend_capabilities(BackendFamily.GUROBI)
    )
    common = tuple(
        GurobiParameter(name=name, value=format_gurobi_value(value))
        for name, value in map_common_parameters(normalized, caps)
    )
    return GurobiParameterSequence(common + tuple(overrides))
