"""Typer-based CLI for the attendance tracker scaffold."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.markup import escape

from .config import ScaffoldSettings, SettingsError, save_settings
from .models import ExitCode, ProjectLayout, ScaffoldError, UserAbort
from .prompts import console
from .scaffold import ScaffoldInterrupted, run_scaffold
from .validators import validate_identifier
from .verifier import verify_structure
from . import reporting

app = typer.Typer(help="Bootstrap attendance tracker projects.", add_completion=False)


def _configure_logging(level: str, log_file: Path | None) -> None:
    logger.remove()
    logger.add(
        lambda message: console.print(message, end="", markup=False),
        level=level,
        format="{level}: {message}",
    )
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level="DEBUG")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    workdir: Path = typer.Option(Path("."), "--workdir", file_okay=False, dir_okay=True, help="Directory the project is created in"),
    settings: Optional[Path] = typer.Option(None, "--settings", help="Path to settings YAML"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write a debug log to this file"),
) -> None:
    """Interactively create a new attendance tracker project."""

    _configure_logging(log_level.upper(), log_file)
    if ctx.invoked_subcommand is not None:
        return

    workdir.mkdir(parents=True, exist_ok=True)
    try:
        run_scaffold(settings_path=settings, base_dir=workdir)
    except ScaffoldInterrupted as exc:
        logger.debug("Cleanup result: {}", exc.cleanup)
        raise typer.Exit(code=ExitCode.INTERRUPTED)
    except SettingsError as exc:
        console.print(f"[red]Settings error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=exc.exit_code)
    except UserAbort as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=exc.exit_code)
    except ScaffoldError as exc:
        logger.exception("Provisioning failed")
        console.print(f"[red]Provisioning failed:[/red] {escape(str(exc))}")
        raise typer.Exit(code=exc.exit_code)


@app.command()
def verify(
    identifier: str = typer.Argument(..., help="Project identifier used when the project was created"),
    workdir: Path = typer.Option(Path("."), "--workdir", exists=True, file_okay=False, dir_okay=True),
) -> None:
    """Check that an existing project has every expected file and directory."""

    try:
        layout = ProjectLayout.from_identifier(validate_identifier(identifier), workdir)
    except UserAbort as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=exc.exit_code)

    reporting.print_layout(layout)
    report = verify_structure(layout)
    reporting.print_verification(report)
    raise typer.Exit(code=ExitCode.SUCCESS if report.passed else ExitCode.VERIFICATION_FAILED)


@app.command("init-settings")
def init_settings(path: Path = typer.Argument(..., writable=True, resolve_path=True)) -> None:
    """Write an example settings file to PATH."""

    save_settings(ScaffoldSettings(), path)
    console.print(f"[green]Wrote settings to {path}[/green]")


if __name__ == "__main__":
    app()
