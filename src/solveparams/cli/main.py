from __future__ import annotations

import json
import logging
from typing import Final, Literal

import typer

from solveparams.backends import (
    BackendFamily,
    CapabilityConfigError,
    TranslationResult,
    load_backend_capabilities,
    translate_parameters,
)
from solveparams.diagnostics import ParameterIssue, sort_issues
from solveparams.params import ParameterLoadError, load_solve_parameters

app = typer.Typer(help="Solve parameter translation CLI")

_TRANSLATE_OUTPUT_SCHEMA_ID: Final[str] = "translate_output_v1"
_TRANSLATE_OUTPUT_SCHEMA_VERSION: Final[int] = 1
_EXIT_OK: Final[int] = 0
_EXIT_WARNINGS: Final[int] = 1
_EXIT_REJECTED: Final[int] = 2
_BACKEND_CHOICES: tuple[str, ...] = tuple(family.value for family in BackendFamily)


@app.command()
def translate(
    payload: str,
    backend: str = typer.Option(
        ...,
        "--backend",
        help=f"Target backend: {'|'.join(_BACKEND_CHOICES)}",
    ),
    format: Literal["text", "json"] = typer.Option(
        "text",
        "--format",
        help="Output format: text|json",
        show_default=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Translate a solve parameter payload into backend settings."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    family = _parse_backend(backend)
    try:
        parameters = load_solve_parameters(payload)
        result = translate_parameters(parameters, family)
    except (ParameterLoadError, CapabilityConfigError) as exc:
        typer.echo(f"ERROR code={exc.code} message={exc.message}")
        raise typer.Exit(code=_EXIT_REJECTED) from exc

    if format == "json":
        typer.echo(_build_translate_json_output(payload=payload, result=result))
    else:
        _print_translation(result)
    raise typer.Exit(code=_derive_translate_exit_code(result))


@app.command()
def capabilities(
    backend: str | None = typer.Option(None, "--backend", help="Limit output to one backend"),
) -> None:
    """Show the static capability table."""
    families = (
        tuple(BackendFamily) if backend is None else (_parse_backend(backend),)
    )
    try:
        table = load_backend_capabilities()
    except CapabilityConfigError as exc:
        typer.echo(f"ERROR code={exc.code} message={exc.message}")
        raise typer.Exit(code=_EXIT_REJECTED) from exc
    for family in families:
        typer.echo(json.dumps(table[family].to_dict(), ensure_ascii=True, separators=(",", ":")))


def _parse_backend(raw: str) -> BackendFamily:
    normalized = raw.strip().lower().replace("-", "_")
    try:
        return BackendFamily(normalized)
    except ValueError as exc:
        raise typer.BadParameter(
            f"unsupported backend '{raw}'; choose from: {','.join(_BACKEND_CHOICES)}"
        ) from exc


def _derive_translate_exit_code(result: TranslationResult) -> int:
    if not result.ok:
        return _EXIT_REJECTED
    if result.warnings:
        return _EXIT_WARNINGS
    return _EXIT_OK


def _ordered_issues(result: TranslationResult) -> list[ParameterIssue]:
    issues = list(result.warnings)
    if result.error is not None:
        issues.append(result.error)
    return sort_issues(issues)


def _print_translation(result: TranslationResult) -> None:
    if result.settings is not None:
        for index, (name, value) in enumerate(result.settings.entries):
            typer.echo(f"SETTING index={index} name={name} value={json.dumps(value)}")
    for issue in _ordered_issues(result):
        typer.echo(
            "ISSUE"
            f" severity={issue.severity}"
            f" stage={issue.stage}"
            f" code={issue.code}"
            f" parameter={issue.parameter}"
            f" message={issue.message}"
        )
    if not result.ok:
        typer.echo("translation rejected: fatal parameter issue")


def _build_translate_json_output(*, payload: str, result: TranslationResult) -> str:
    settings = result.settings
    document: dict[str, object] = {
        "schema": _TRANSLATE_OUTPUT_SCHEMA_ID,
        "schema_version": _TRANSLATE_OUTPUT_SCHEMA_VERSION,
        "payload": payload,
        "status": "rejected" if not result.ok else ("warn" if result.warnings else "ok"),
        "exit_code": _derive_translate_exit_code(result),
        "backend": None if settings is None else settings.backend.value,
        "ordered": None if settings is None else settings.ordered,
        "settings": (
            [] if settings is None else [[name, value] for name, value in settings.entries]
        ),
        "issues": [
            issue.model_dump(mode="json", exclude_none=True) for issue in _ordered_issues(result)
        ],
    }
    return json.dumps(document, ensure_ascii=True, separators=(",", ":"))
