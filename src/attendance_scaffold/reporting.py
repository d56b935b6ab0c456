"""Console output for scaffold runs."""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .models import CleanupResult, ProjectLayout, RuntimeInfo, VerificationReport
from .prompts import console


def print_banner() -> None:
    console.print(
        Panel.fit(
            "AUTOMATED PROJECT BOOTSTRAPPING - ATTENDANCE TRACKER FACTORY",
            style="blue",
        )
    )


def section(title: str) -> None:
    console.print(f"\n[blue]=== {escape(title)} ===[/blue]")


def info(text: str) -> None:
    console.print(f"[blue]{escape(text)}[/blue]")


def ok(text: str) -> None:
    console.print(f"[green]✓ {escape(text)}[/green]")


def fail(text: str) -> None:
    console.print(f"[red]✗ {escape(text)}[/red]")


def warn(text: str) -> None:
    console.print(f"[yellow]{escape(text)}[/yellow]")


def print_layout(layout: ProjectLayout) -> None:
    info(f"Project Name: {layout.project_name}")
    info(f"Project Directory: {layout.relative_dir}")


def print_runtime(runtime: RuntimeInfo) -> None:
    if runtime.found:
        ok(f"Found {runtime.version or runtime.interpreter}")
        return
    fail(f"{runtime.interpreter} not found")
    warn(f"   Warning: {runtime.interpreter} is not installed on this system")
    warn(f"   The attendance tracker requires {runtime.interpreter} to run")


def print_verification(report: VerificationReport) -> None:
    """Render one row per check and the aggregate result."""

    table = Table(title="Project Structure")
    table.add_column("Check")
    table.add_column("Type")
    table.add_column("Status")
    for check in report.checks:
        status = "[green]✓ exists[/green]" if check.passed else "[red]✗ missing[/red]"
        table.add_row(escape(check.label), check.kind.value, status)
    console.print(table)

    if report.passed:
        ok("All files and directories verified successfully")
    else:
        missing = ", ".join(check.label for check in report.failures)
        fail(f"Structure verification failed (missing: {missing})")


def print_summary(layout: ProjectLayout, report: VerificationReport, interpreter: str) -> None:
    if not report.passed:
        console.print("\n[red]Setup completed with warnings. Please review the output above.[/red]")
        return
    console.print(Panel.fit("PROJECT SETUP COMPLETE!", style="green"))
    ok(f"Project created successfully at: {layout.relative_dir}")
    info("To run the attendance tracker:")
    console.print(f"  cd {escape(layout.relative_dir)}")
    console.print(f"  {escape(interpreter)} attendance_checker.py")
    info("To trigger the archive feature:")
    console.print("  Run this tool again and press Ctrl+C during execution")


def print_cleanup(layout: ProjectLayout | None, result: CleanupResult) -> None:
    if result.skipped or layout is None:
        warn("No project directory was created; nothing to archive.")
    else:
        if result.archived:
            ok(f"Archive created successfully: {result.archive_path.name}")
        else:
            fail("Failed to create archive")
        if result.removed:
            ok("Directory removed successfully")
        else:
            fail("Failed to remove directory")
    warn("Setup interrupted. Exiting...")


__all__ = [
    "fail",
    "info",
    "ok",
    "print_banner",
    "print_cleanup",
    "print_layout",
    "print_runtime",
    "print_summary",
    "print_verification",
    "section",
    "warn",
]
