from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import timedelta
from pathlib import Path
from typing import Annotated, Literal, cast

import yaml  # type: ignore[import-untyped]
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from .models import (
    EMPHASIS_FIELDS,
    BackendOverride,
    CommonParameters,
    Emphasis,
    GurobiParameter,
    LPAlgorithm,
    OverrideKind,
    SolveParameters,
    Strictness,
)

_ENUM_FIELDS: tuple[str, ...] = ("lp_algorithm", "presolve", "cuts", "heuristics", "scaling")


class ParameterLoadError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


class StrictnessPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    bad_parameter: StrictBool = False


class GurobiParameterPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: StrictStr = Field(min_length=1)
    value: StrictStr


class GurobiOverridePayload(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["gurobi"]
    parameters: list[GurobiParameterPayload] = Field(default_factory=list)


class NativeOverridePayload(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["gscip", "glop", "cp_sat"]
    parameters: dict[str, StrictBool | StrictInt | StrictFloat | StrictStr] = Field(
        default_factory=dict
    )


OverridePayload = Annotated[
    GurobiOverridePayload | NativeOverridePayload,
    Field(discriminator="kind"),
]


class SolveParametersPayload(BaseModel):
    """Request-level parameter schema as received from the request layer."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    strictness: StrictnessPayload = Field(default_factory=StrictnessPayload)
    enable_output: StrictBool | None = None
    time_limit: timedelta | None = None
    threads: StrictInt | None = None
    random_seed: StrictInt | None = None
    lp_algorithm: LPAlgorithm = LPAlgorithm.UNSPECIFIED
    presolve: Emphasis = Emphasis.UNSPECIFIED
    cuts: Emphasis = Emphasis.UNSPECIFIED
    heuristics: Emphasis = Emphasis.UNSPECIFIED
    scaling: Emphasis = Emphasis.UNSPECIFIED
    override: OverridePayload | None = None

    @field_validator(*_ENUM_FIELDS, mode="before")
    @classmethod
    def _canonical_enum_token(cls, value: object, info: ValidationInfo) -> object:
        # YAML 1.1 loads a bare OFF as false.
        if value is False and info.field_name in EMPHASIS_FIELDS:
            return Emphasis.OFF.value
        if isinstance(value, str):
            return value.strip().upper().replace("-", "_")
        return value

    def to_solve_parameters(self) -> SolveParameters:
        common = CommonParameters(
            strictness=Strictness(bad_parameter=self.strictness.bad_parameter),
            enable_output=self.enable_output,
            time_limit=self.time_limit,
            threads=self.threads,
            random_seed=self.random_seed,
            lp_algorithm=self.lp_algorithm,
            presolve=self.presolve,
            cuts=self.cuts,
            heuristics=self.heuristics,
            scaling=self.scaling,
        )
        return SolveParameters(common=common, override=_build_override(self.override))


def _build_override(payload: OverridePayload | None) -> BackendOverride:
    if payload is None:
        return BackendOverride.empty()
    if payload.kind == "gurobi":
        gurobi_payload = cast(GurobiOverridePayload, payload)
        return BackendOverride.gurobi(
            GurobiParameter(name=item.name, value=item.value) for item in gurobi_payload.parameters
        )
    native_payload = cast(NativeOverridePayload, payload)
    return BackendOverride.native_block(OverrideKind(native_payload.kind), native_payload.parameters)


def parse_solve_parameters(payload: Mapping[str, object]) -> SolveParameters:
    try:
        model = SolveParametersPayload.model_validate(dict(payload))
    except ValidationError as exc:
        raise ParameterLoadError(
            "E_PARAM_PAYLOAD_INVALID",
            f"invalid solve parameter payload: {exc.error_count()} error(s): "
            + "; ".join(_format_validation_error(error) for error in exc.errors()),
        ) from exc
    try:
        return model.to_solve_parameters()
    except ValueError as exc:
        raise ParameterLoadError("E_PARAM_PAYLOAD_INVALID", str(exc)) from exc


def load_solve_parameters(path: str | Path) -> SolveParameters:
    target = Path(path)
    try:
        raw_text = target.read_text(encoding="utf-8")
    except OSError as exc:
        raise ParameterLoadError(
            "E_PARAM_PAYLOAD_READ_FAILED",
            f"unable to read solve parameter payload '{target}': {exc}",
        ) from exc
    try:
        if target.suffix.lower() == ".json":
            payload = json.loads(raw_text)
        else:
            payload = yaml.safe_load(raw_text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ParameterLoadError(
            "E_PARAM_PAYLOAD_INVALID",
            f"unable to parse solve parameter payload '{target}': {exc}",
        ) from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ParameterLoadError(
            "E_PARAM_PAYLOAD_INVALID",
            "solve parameter payload root must be a mapping",
        )
    return parse_solve_parameters(cast(dict[str, object], payload))


def _format_validation_error(error: Mapping[str, object]) -> str:
    location = ".".join(str(part) for part in cast(tuple[object, ...], error.get("loc", ())))
    return f"{location or '<root>'}: {error.get('msg', 'invalid value')}"
