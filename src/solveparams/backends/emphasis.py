from __future__ import annotations

from solveparams.diagnostics import ParameterIssue, build_parameter_issue
from solveparams.params import Emphasis

from .strictness import StrictnessEscalator


def resolve_emphasis(
    requested: Emphasis,
    supported: bool,
    escalator: StrictnessEscalator,
    *,
    feature: str,
    backend: str | None = None,
) -> tuple[Emphasis | None, ParameterIssue | None]:
    """Return the effective emphasis for ``feature`` or the fatal issue.

    UNSPECIFIED keeps the backend default and OFF always disables. Any effort
    level on an unsupported feature is a violation: fatal under strict mode,
    otherwise recorded and resolved as OFF.
    """
    if requested in (Emphasis.UNSPECIFIED, Emphasis.OFF) or supported:
        return (requested, None)

    fatal = escalator.escalate(
        build_parameter_issue(
            code="W_PARAM_EMPHASIS_UNSUPPORTED",
            parameter=feature,
            message=(
                f"{feature} emphasis {requested.value} is not supported"
                + ("" if backend is None else f" by backend '{backend}'")
            ),
            backend=backend,
            witness={"feature": feature, "requested": requested.value, "fallback": "OFF"},
        )
    )
    if fatal is not None:
        return (None, fatal)
    return (Emphasis.OFF, None)
