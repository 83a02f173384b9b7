from __future__ import annotations

from solveparams.diagnostics import IssueKind, ParameterIssue
from solveparams.params import Strictness


class StrictnessEscalator:
    """Single policy point deciding whether a finding rejects the request.

    One escalator lives for exactly one translation call. With
    ``strictness.bad_parameter`` set, ``escalate`` hands back the finding as a
    fatal issue and records nothing; otherwise the finding is appended to the
    warning report and ``None`` is returned so translation continues.
    """

    __slots__ = ("_strictness", "_warnings")

    def __init__(self, strictness: Strictness) -> None:
        self._strictness = strictness
        self._warnings: list[ParameterIssue] = []

    @property
    def strictness(self) -> Strictness:
        return self._strictness

    def escalate(self, issue: ParameterIssue) -> ParameterIssue | None:
        if issue.kind is IssueKind.SEED_OUT_OF_RANGE:
            raise ValueError("seed adjustments are never escalated; record them with note()")
        if issue.is_fatal:
            return issue
        if self._strictness.bad_parameter:
            return issue.promoted()
        self._warnings.append(issue)
        return None

    def note(self, issue: ParameterIssue) -> None:
        if issue.kind is not IssueKind.SEED_OUT_OF_RANGE:
            raise ValueError(f"only seed adjustments may bypass escalation, got '{issue.code}'")
        self._warnings.append(issue)

    def warnings(self) -> tuple[ParameterIssue, ...]:
        return tuple(self._warnings)
