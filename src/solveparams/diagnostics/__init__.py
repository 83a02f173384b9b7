from .builders import build_parameter_issue
from .catalog import CANONICAL_ISSUE_CATALOG, REQUIRED_CATALOG_FIELDS, IssueCatalogEntry
from .models import IssueKind, ParameterIssue, Severity, TranslationStage
from .sort import canonical_witness_json, issue_sort_key, sort_issues

__all__ = [
    "CANONICAL_ISSUE_CATALOG",
    "IssueCatalogEntry",
    "IssueKind",
    "ParameterIssue",
    "REQUIRED_CATALOG_FIELDS",
    "Severity",
    "TranslationStage",
    "build_parameter_issue",
    "canonical_witness_json",
    "issue_sort_key",
    "sort_issues",
]
