"""Beadwork command-line interface."""

from types import SimpleNamespace
from typing import Annotated, Optional

import typer

from . import __version__
from . import log as beadwork_log
from .commands import list_field_keys as list_field_keys_cmd
from .commands import parse_fields as parse_fields_cmd
from .commands import ready as ready_cmd
from .commands import set_fields as set_fields_cmd
from .io import die

app = typer.Typer(
    help="Readiness filtering and description fields for beads.",
    no_args_is_help=True,
    add_completion=False,
)
fields_app = typer.Typer(
    help="Read and write structured description fields.",
    no_args_is_help=True,
)
app.add_typer(fields_app, name="fields")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _normalize_log_level(value: str) -> str:
    normalized = value.strip().lower()
    if normalized not in beadwork_log.LEVEL_NAMES:
        die(f"--log-level must be one of: {', '.join(beadwork_log.LEVEL_NAMES)}")
    return normalized


@app.callback()
def main(
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="log level (trace|debug|info|success|warning|error)",
        ),
    ] = None,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="disable colorized output"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="show the version and exit",
        ),
    ] = False,
) -> None:
    """Beadwork: find dispatchable work in a beads store."""
    if log_level is not None:
        beadwork_log.set_level(_normalize_log_level(log_level))
    if no_color:
        beadwork_log.set_no_color(True)


@app.command("ready")
def ready(
    beads_dir: Annotated[
        Optional[str],
        typer.Option("--beads-dir", help="beads directory (defaults to BEADS_DIR or ./.beads)"),
    ] = None,
    issues: Annotated[
        Optional[str],
        typer.Option(
            "--issues",
            help="read issues from a JSON file ('-' for stdin) instead of running bd ready",
        ),
    ] = None,
    format: Annotated[
        Optional[str],
        typer.Option("--format", help="output format (table|json)"),
    ] = None,
) -> None:
    """List ready work, hiding formula scaffolds, molecules and wisps."""
    ready_cmd(SimpleNamespace(beads_dir=beads_dir, issues=issues, format=format))


@fields_app.command("parse")
def fields_parse(
    kind: Annotated[str, typer.Argument(help="record kind (agent|attachment|mr)")],
    path: Annotated[
        Optional[str],
        typer.Argument(help="description file ('-' or omitted for stdin)"),
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", help="output format (json|text)"),
    ] = "json",
) -> None:
    """Parse one record kind out of a description."""
    parse_fields_cmd(SimpleNamespace(kind=kind, path=path, format=format))


@fields_app.command("set")
def fields_set(
    kind: Annotated[str, typer.Argument(help="record kind (agent|attachment|mr)")],
    path: Annotated[
        Optional[str],
        typer.Argument(help="description file ('-' or omitted for stdin)"),
    ] = None,
    field: Annotated[
        Optional[list[str]],
        typer.Option("--field", "-f", help="field assignment key=value (repeatable)"),
    ] = None,
    clear: Annotated[
        bool,
        typer.Option("--clear", help="remove every field of this kind"),
    ] = False,
) -> None:
    """Print the description with one record kind replaced."""
    set_fields_cmd(SimpleNamespace(kind=kind, path=path, field=list(field or []), clear=clear))


@fields_app.command("keys")
def fields_keys(
    kind: Annotated[str, typer.Argument(help="record kind (agent|attachment|mr)")],
) -> None:
    """List every key spelling accepted for one record kind."""
    list_field_keys_cmd(SimpleNamespace(kind=kind))


if __name__ == "__main__":
    app()
