from __future__ import annotations

from .catalog import CANONICAL_ISSUE_CATALOG
from .models import ParameterIssue


def build_parameter_issue(
    *,
    code: str,
    parameter: str,
    message: str,
    backend: str | None = None,
    witness: object | None = None,
) -> ParameterIssue:
    if not code:
        raise ValueError("issue code must be non-empty")
    if not message:
        raise ValueError("issue message must be non-empty")
    entry = CANONICAL_ISSUE_CATALOG.get(code)
    if entry is None:
        raise ValueError(f"issue code '{code}' is not registered in the issue catalog")
    return ParameterIssue(
        code=code,
        kind=entry.kind,
        severity=entry.severity,
        stage=entry.stage,
        parameter=parameter,
        message=message,
        suggested_action=entry.suggested_action,
        backend=backend,
        witness=witness,
    )
