from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .models import IssueKind, Severity, TranslationStage


@dataclass(frozen=True, slots=True)
class IssueCatalogEntry:
    code: str
    kind: IssueKind
    severity: Severity
    stage: TranslationStage
    suggested_action: str

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("issue catalog code must be non-empty")
        if not self.suggested_action:
            raise ValueError(
                f"issue catalog entry '{self.code}' suggested_action must be non-empty"
            )
        if self.kind is IssueKind.INVALID_PARAMETER and self.severity is not Severity.ERROR:
            raise ValueError(f"issue catalog entry '{self.code}' must be an error")
        if self.kind is IssueKind.SEED_OUT_OF_RANGE and self.severity is not Severity.WARNING:
            raise ValueError(f"issue catalog entry '{self.code}' must be a warning")


def _entry(
    code: str,
    kind: IssueKind,
    severity: Severity,
    stage: TranslationStage,
    suggested_action: str,
) -> IssueCatalogEntry:
    return IssueCatalogEntry(
        code=code,
        kind=kind,
        severity=severity,
        stage=stage,
        suggested_action=suggested_action,
    )


def _build_catalog(
    entries: tuple[IssueCatalogEntry, ...],
) -> Mapping[str, IssueCatalogEntry]:
    catalog: dict[str, IssueCatalogEntry] = {}
    for entry in entries:
        if entry.code in catalog:
            raise ValueError(f"duplicate issue catalog code: {entry.code}")
        catalog[entry.code] = entry
    return MappingProxyType(catalog)


_CATALOG_ENTRIES: tuple[IssueCatalogEntry, ...] = (
    _entry(
        "E_PARAM_THREADS_INVALID",
        IssueKind.INVALID_PARAMETER,
        Severity.ERROR,
        TranslationStage.NORMALIZE,
        "set threads to an integer >= 1 or leave it unset",
    ),
    _entry(
        "E_PARAM_SEED_INVALID",
        IssueKind.INVALID_PARAMETER,
        Severity.ERROR,
        TranslationStage.NORMALIZE,
        "set random_seed to an integer or leave it unset",
    ),
    _entry(
        "E_PARAM_TIME_LIMIT_INVALID",
        IssueKind.INVALID_PARAMETER,
        Severity.ERROR,
        TranslationStage.NORMALIZE,
        "set time_limit to a non-negative duration or leave it unset for no limit",
    ),
    _entry(
        "E_PARAM_LP_ALGORITHM_INVALID",
        IssueKind.INVALID_PARAMETER,
        Severity.ERROR,
        TranslationStage.NORMALIZE,
        "set lp_algorithm to one of the LPAlgorithm values",
    ),
    _entry(
        "E_PARAM_EMPHASIS_INVALID",
        IssueKind.INVALID_PARAMETER,
        Severity.ERROR,
        TranslationStage.NORMALIZE,
        "set the emphasis field to one of the Emphasis values",
    ),
    _entry(
        "W_PARAM_EMPHASIS_UNSUPPORTED",
        IssueKind.UNSUPPORTED_FEATURE,
        Severity.WARNING,
        TranslationStage.TRANSLATE,
        "use UNSPECIFIED or OFF for this feature on the selected backend",
    ),
    _entry(
        "W_PARAM_THREADS_UNSUPPORTED",
        IssueKind.UNSUPPORTED_FEATURE,
        Severity.WARNING,
        TranslationStage.TRANSLATE,
        "lower threads to the backend maximum or leave it unset",
    ),
    _entry(
        "W_PARAM_LP_ALGORITHM_UNSUPPORTED",
        IssueKind.UNSUPPORTED_FEATURE,
        Severity.WARNING,
        TranslationStage.TRANSLATE,
        "choose an lp_algorithm supported by the backend or use UNSPECIFIED",
    ),
    _entry(
        "W_PARAM_OUTPUT_UNSUPPORTED",
        IssueKind.UNSUPPORTED_FEATURE,
        Severity.WARNING,
        TranslationStage.TRANSLATE,
        "leave enable_output unset for this backend",
    ),
    _entry(
        "W_PARAM_OVERRIDE_MISMATCH",
        IssueKind.UNSUPPORTED_FEATURE,
        Severity.WARNING,
        TranslationStage.MERGE,
        "send an override block whose kind matches the selected backend",
    ),
    _entry(
        "W_PARAM_SEED_CLAMPED",
        IssueKind.SEED_OUT_OF_RANGE,
        Severity.WARNING,
        TranslationStage.TRANSLATE,
        "choose a random_seed inside the backend's valid range",
    ),
)


CANONICAL_ISSUE_CATALOG: Mapping[str, IssueCatalogEntry] = _build_catalog(_CATALOG_ENTRIES)

REQUIRED_CATALOG_FIELDS: tuple[str, ...] = ("code", "kind", "severity", "stage", "suggested_action")
