from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from oztail.apps.report import render_report
from oztail.config.settings import Settings, get_settings
from oztail.core.errors import OztailError
from oztail.core.events import event_dump
from oztail.core.logger_config import setup_logger
from oztail.sdk import ValidationSession, create_source

EXIT_FAILED = 1
EXIT_ERROR = 2

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _load_settings(username: Optional[str], password: Optional[str], debug: Optional[bool]) -> Settings:
    try:
        settings = get_settings()
    except ValueError as exc:
        typer.secho(f"[oztail] invalid configuration: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_ERROR)
    return settings.override(username=username, password=password, debug=debug)


def _open_session(session_id: str, source: str, path: Optional[Path], settings: Settings,
                  verbose: bool) -> ValidationSession:
    setup_logger("oztail", settings.log_file, logging.DEBUG if verbose else settings.log_level)
    if source == "file":
        src = create_source("file", path=path, settings=settings)
    elif source == "http":
        src = create_source("http", settings=settings)
    else:
        raise typer.BadParameter(f"unknown source {source!r}", param_hint="--source")
    return ValidationSession(session_id, src)


# Shared options
SOURCE = typer.Option("http", "--source", "-s", help="Where to read the session from: http | file")
PATH = typer.Option(None, "--path", help="Session JSON file (file source only)")
USERNAME = typer.Option(None, "--username", "-u", help="Tail service user (default: OZTAIL_USERNAME)")
PASSWORD = typer.Option(None, "--password", "-p", help="Tail service password (default: OZTAIL_PASSWORD)")
DEBUG = typer.Option(None, "--debug/--no-debug", help="Use the staging (stail) service")
VERBOSE = typer.Option(False, "--verbose", "-v", help="Log every violation")


@app.command()
def check(
    session_id: str = typer.Argument(..., help="Playback session id"),
    source: str = SOURCE,
    path: Optional[Path] = PATH,
    username: Optional[str] = USERNAME,
    password: Optional[str] = PASSWORD,
    debug: Optional[bool] = DEBUG,
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    verbose: bool = VERBOSE,
) -> None:
    """Fetch a session and validate its meter events."""

    settings = _load_settings(username, password, debug)
    session = _open_session(session_id, source, path, settings, verbose)
    try:
        report = session.run()
    except OztailError as exc:
        typer.secho(f"[oztail] {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_ERROR)
    finally:
        session.close()

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        for line in render_report(report):
            typer.echo(line)

    if not report.passed:
        raise typer.Exit(code=EXIT_FAILED)


@app.command()
def fetch(
    session_id: str = typer.Argument(..., help="Playback session id"),
    source: str = SOURCE,
    path: Optional[Path] = PATH,
    username: Optional[str] = USERNAME,
    password: Optional[str] = PASSWORD,
    debug: Optional[bool] = DEBUG,
    verbose: bool = VERBOSE,
) -> None:
    """Print a session's decoded meter events as JSON."""

    settings = _load_settings(username, password, debug)
    session = _open_session(session_id, source, path, settings, verbose)
    try:
        events = session.fetch()
    except OztailError as exc:
        typer.secho(f"[oztail] {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_ERROR)
    finally:
        session.close()

    typer.echo(json.dumps([event_dump(meter) for meter in events], indent=2))


if __name__ == "__main__":
    app()
