# src/tracy/cli.py
"""Tracy Command Line Interface.

Entry point for the tracy CLI tool. Reads dependency records as JSON Lines
(one record object per line) and writes the resulting case file as JSON.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from tracy import __version__
from tracy.contracts import InvalidRecordError, SelfCyclePolicy
from tracy.core.config import TracySettings, load_settings
from tracy.core.export import render_case_json
from tracy.core.logging import configure_from_settings
from tracy.engine import EvidenceLocker

__all__ = [
    "app",
]

app = typer.Typer(
    name="tracy",
    help="Tracy: nested dependency case files from flat module dependency records.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tracy version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Tracy: nested dependency case files from flat module dependency records."""


def _echo_validation_errors(e: ValidationError) -> None:
    typer.echo("Configuration errors:", err=True)
    for error in e.errors():
        loc = ".".join(str(x) for x in error["loc"])
        typer.echo(f"  - {loc}: {error['msg']}", err=True)


def _load_cli_settings(
    settings: Path | None,
    policy: SelfCyclePolicy | None,
    log_level: str | None,
    json_logs: bool,
) -> TracySettings:
    """Load settings (file, TRACY_* environment, defaults) and apply command line overrides."""
    try:
        config = load_settings(settings.expanduser() if settings is not None else None)
    except (YamlParserError, YamlScannerError) as e:
        typer.echo(f"YAML syntax error in {settings}: {e.problem}", err=True)
        raise typer.Exit(1) from None
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        _echo_validation_errors(e)
        raise typer.Exit(1) from None

    # Re-validate rather than model_copy so bad overrides are rejected
    overrides = config.model_dump()
    if policy is not None:
        overrides["locker"]["self_cycle_policy"] = policy
    if log_level is not None:
        overrides["logging"]["level"] = log_level
    if json_logs:
        overrides["logging"]["json_output"] = True

    try:
        return TracySettings.model_validate(overrides)
    except ValidationError as e:
        _echo_validation_errors(e)
        raise typer.Exit(1) from None


def _read_records(path: Path) -> Iterator[tuple[int, Any]]:
    """Yield (line_number, decoded_json) for each non-blank line."""
    with path.open("rb") as handle:
        for line_number, raw in enumerate(handle, start=1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                typer.echo(f"Error: {path}:{line_number}: not valid UTF-8: {e.reason}", err=True)
                raise typer.Exit(1) from None
            if not line.strip():
                continue
            try:
                yield line_number, json.loads(line)
            except json.JSONDecodeError as e:
                typer.echo(f"Error: {path}:{line_number}: invalid JSON: {e.msg}", err=True)
                raise typer.Exit(1) from None


def _file_records(locker: EvidenceLocker, path: Path) -> None:
    for line_number, payload in _read_records(path):
        try:
            locker.ingest(payload)
        except InvalidRecordError as e:
            typer.echo(f"Error: {path}:{line_number}: {e}", err=True)
            raise typer.Exit(1) from None


_RECORDS_ARGUMENT = typer.Argument(
    ...,
    exists=True,
    dir_okay=False,
    readable=True,
    help="JSON Lines file of dependency records (suspect, leads, source).",
)
_SETTINGS_OPTION = typer.Option(
    None,
    "--settings",
    "-s",
    help="Path to settings YAML file.",
)
_LOG_LEVEL_OPTION = typer.Option(
    None,
    "--log-level",
    "-l",
    help="Override log level (DEBUG, INFO, WARNING, ERROR).",
)
_JSON_LOGS_OPTION = typer.Option(
    False,
    "--json-logs",
    help="Output structured JSON logs (for machine processing).",
)


@app.command()
def trace(
    records: Path = _RECORDS_ARGUMENT,
    settings: Path | None = _SETTINGS_OPTION,
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the case file here instead of stdout.",
    ),
    policy: SelfCyclePolicy | None = typer.Option(
        None,
        "--policy",
        "-p",
        help="Self-cycle policy: skip_edge or truncate.",
    ),
    log_level: str | None = _LOG_LEVEL_OPTION,
    json_logs: bool = _JSON_LOGS_OPTION,
) -> None:
    """Build the case file for a records file and write it as JSON."""
    config = _load_cli_settings(settings, policy, log_level, json_logs)
    configure_from_settings(config.logging)

    # Leaving the block early (bad input) destroys the run
    with EvidenceLocker(config.locker) as locker:
        _file_records(locker, records)
        case_file = locker.finalize()

    rendered = render_case_json(case_file)
    if output is None:
        typer.echo(rendered)
    else:
        output.write_text(rendered + "\n", encoding="utf-8")


@app.command()
def validate(
    records: Path = _RECORDS_ARGUMENT,
    settings: Path | None = _SETTINGS_OPTION,
    log_level: str | None = _LOG_LEVEL_OPTION,
    json_logs: bool = _JSON_LOGS_OPTION,
) -> None:
    """Check that every record in a records file is well formed."""
    config = _load_cli_settings(settings, None, log_level, json_logs)
    configure_from_settings(config.logging)

    with EvidenceLocker(config.locker) as locker:
        _file_records(locker, records)
        accumulator = locker.accumulator
        typer.echo(
            f"Records valid: {accumulator.records_seen} records, "
            f"{accumulator.node_count} modules, {accumulator.edge_count} edges, "
            f"{len(accumulator.roots)} roots"
        )


if __name__ == "__main__":
    app()
