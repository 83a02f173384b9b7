from __future__ import annotations

from enum import StrEnum
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class IssueKind(StrEnum):
    INVALID_PARAMETER = "invalid_parameter"
    UNSUPPORTED_FEATURE = "unsupported_feature"
    SEED_OUT_OF_RANGE = "seed_out_of_range"


class TranslationStage(StrEnum):
    NORMALIZE = "normalize"
    TRANSLATE = "translate"
    MERGE = "merge"


def _normalize_json(value: object) -> object:
    if value is None or isinstance(value, bool | int | float | str):
        return value
    if isinstance(value, list | tuple):
        return [_normalize_json(item) for item in value]
    if isinstance(value, dict):
        raw_dict = cast(dict[object, object], value)
        string_keys: list[str] = []
        for key in raw_dict:
            if not isinstance(key, str):
                raise ValueError("witness object keys must be strings")
            string_keys.append(key)
        normalized: dict[str, object] = {}
        for key in sorted(string_keys):
            normalized[key] = _normalize_json(raw_dict[key])
        return normalized
    raise ValueError("witness must be JSON-serializable")


class ParameterIssue(BaseModel):
    """A single finding raised while normalizing or translating solve parameters.

    ``severity`` is ERROR for anything that rejects the request and WARNING for
    findings that were recorded while a fallback value was substituted.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    code: str = Field(min_length=1)
    kind: IssueKind
    severity: Severity
    stage: TranslationStage
    parameter: str = Field(min_length=1)
    message: str = Field(min_length=1)
    suggested_action: str = Field(min_length=1)
    backend: str | None = None

    witness: object | None = None

    @field_validator("witness", mode="before")
    @classmethod
    def _validate_and_normalize_witness(cls, witness: object) -> object:
        if witness is None:
            return None
        return _normalize_json(witness)

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.ERROR

    def promoted(self) -> ParameterIssue:
        if self.is_fatal:
            return self
        return self.model_copy(update={"severity": Severity.ERROR})
