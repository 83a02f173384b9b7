from __future__ import annotations

import json
from collections.abc import Iterable

from .models import ParameterIssue, Severity, TranslationStage

_SEVERITY_RANK: dict[Severity, int] = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
}

_STAGE_RANK: dict[TranslationStage, int] = {
    TranslationStage.NORMALIZE: 0,
    TranslationStage.TRANSLATE: 1,
    TranslationStage.MERGE: 2,
}


def canonical_witness_json(witness: object | None) -> str:
    if witness is None:
        return ""
    return json.dumps(witness, sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def issue_sort_key(issue: ParameterIssue) -> tuple[int, int, str, str, str, str]:
    return (
        _SEVERITY_RANK[issue.severity],
        _STAGE_RANK[issue.stage],
        issue.code,
        issue.parameter,
        issue.message,
        canonical_witness_json(issue.witness),
    )


def sort_issues(issues: Iterable[ParameterIssue]) -> list[ParameterIssue]:
    return sorted(issues, key=issue_sort_key)
