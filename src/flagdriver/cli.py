"""Typer CLI for flagdriver."""

from __future__ import annotations

import json
import platform
from pathlib import Path
from typing import Any

import pydantic
import typer

from flagdriver.config import _maybe_bool, load_settings
from flagdriver.core.driver import DriverOptions, parse_options
from flagdriver.core.errors import FlagDriverError
from flagdriver.core.evaluator import evaluate
from flagdriver.core.state import select_active
from flagdriver.logging import configure_logging, get_logger

app = typer.Typer(no_args_is_help=True)


def _parse_override(raw: str) -> tuple[str, bool]:
    name, sep, value = raw.partition("=")
    flag = _maybe_bool(value) if sep else True
    if not name or flag is None:
        raise typer.BadParameter(f"Expected NAME or NAME=true|false, got {raw!r}")
    return name, flag


def _load_document(path: Path, overrides: list[str] | None = None) -> DriverOptions:
    try:
        raw: Any = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        typer.echo(f"Cannot read {path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    options = parse_options(raw)
    for item in overrides or []:
        name, value = _parse_override(item)
        # Overriding an undeclared state appends it with the lowest priority.
        options.states[name] = value
    return options


@app.command("evaluate")
def evaluate_command(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with states and flags."),
    set_: list[str] | None = typer.Option(None, "--set", "-s", help="Override a state, e.g. isUploading=true."),
    strict: bool | None = typer.Option(None, "--strict/--no-strict", help="Require real booleans for states."),
    check_names: bool | None = typer.Option(None, "--check-names/--no-check-names", help="Reject unknown state names."),
) -> None:
    """Evaluate a flags document and print the resolved flags."""

    settings = load_settings()
    configure_logging(settings)
    logger = get_logger("cli")

    evaluation = settings.evaluation
    updates: dict[str, bool] = {}
    if strict is not None:
        updates["strict_booleans"] = strict
    if check_names is not None:
        updates["check_state_names"] = check_names
    if updates:
        evaluation = evaluation.model_copy(update=updates)

    try:
        options = _load_document(path, set_)
        result = evaluate(options.states, options.flags, settings=evaluation)
    except FlagDriverError as exc:
        logger.debug(f"Evaluation of {path} failed: {exc}")
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(json.dumps(result, indent=2, default=str))


@app.command()
def active(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with states and flags."),
    set_: list[str] | None = typer.Option(None, "--set", "-s", help="Override a state, e.g. isUploading=true."),
    strict: bool | None = typer.Option(None, "--strict/--no-strict", help="Require real booleans for states."),
) -> None:
    """Print the active state of a flags document."""

    settings = load_settings()
    configure_logging(settings)

    try:
        options = _load_document(path, set_)
        if strict is None:
            strict = settings.evaluation.strict_booleans
        selection = select_active(options.states, strict=strict)
    except FlagDriverError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    info = {
        "active": selection.name,
        "index": selection.index,
        "states": dict(selection.state_enum),
    }
    typer.echo(json.dumps(info, indent=2))


@app.command()
def doctor() -> None:
    """Print environment and evaluation diagnostics."""

    settings = load_settings()
    configure_logging(settings)
    info = {
        "python": platform.python_version(),
        "pydantic": pydantic.VERSION,
        "home": str(settings.paths.base_dir),
        "log_file": str(settings.paths.logs_dir / "flagdriver.log"),
        "log_level": settings.log_level,
        "evaluation": settings.evaluation.model_dump(),
    }
    typer.echo(json.dumps(info, indent=2))


@app.command()
def settings(key: str | None = typer.Argument(None)) -> None:
    """Display current settings or a specific section."""

    data = load_settings().model_dump()
    if key:
        data = data.get(key, {})
    typer.echo(json.dumps(data, indent=2, default=str))
