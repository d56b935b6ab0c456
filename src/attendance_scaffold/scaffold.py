"""High level scaffold routine tying the provisioning steps together."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import ScaffoldSettings, ThresholdsConfig, load_settings
from .config_editor import update_config
from .interrupt import InterruptGuard
from .models import (
    CleanupResult,
    ProjectLayout,
    ProvisioningContext,
    ProvisioningInterrupted,
    RuntimeInfo,
    VerificationReport,
)
from .prompts import Ask, ask_line
from .provisioner import create_directory_structure, create_project_files
from .validators import detect_runtime, validate_identifier
from .verifier import verify_structure
from . import reporting


class ScaffoldInterrupted(ProvisioningInterrupted):
    """Raised by :func:`run_scaffold` after the interrupt cleanup has run."""

    def __init__(self, signum: int, cleanup: CleanupResult) -> None:
        super().__init__(signum)
        self.cleanup = cleanup


@dataclass(slots=True)
class ScaffoldResult:
    """Outcome of a completed scaffold run."""

    layout: ProjectLayout
    thresholds: ThresholdsConfig
    runtime: RuntimeInfo
    verification: VerificationReport

    @property
    def verified(self) -> bool:
        return self.verification.passed


def _provision(
    context: ProvisioningContext,
    settings: ScaffoldSettings,
    ask: Ask,
    identifier: Optional[str],
) -> ScaffoldResult:
    context.enter_step("identifier")
    if identifier is None:
        identifier = ask("Enter project identifier (e.g., 'cs101', 'spring2024'): ")
    layout = context.bind(validate_identifier(identifier))
    logger.info("Provisioning {} in {}", layout.project_name, layout.base_dir)
    reporting.print_layout(layout)

    create_directory_structure(context, ask)
    create_project_files(context, settings)
    thresholds = update_config(context, settings.thresholds, ask) or settings.thresholds

    context.enter_step("runtime")
    reporting.section("Environment Validation")
    runtime = detect_runtime(settings.interpreter)
    reporting.print_runtime(runtime)
    if not runtime.found:
        logger.warning("{} is not available; the generated project cannot run here yet", settings.interpreter)

    context.enter_step("verify")
    reporting.section("Verifying Project Structure")
    verification = verify_structure(layout)
    reporting.print_verification(verification)
    context.enter_step("done")
    return ScaffoldResult(layout=layout, thresholds=thresholds, runtime=runtime, verification=verification)


def run_scaffold(
    settings: ScaffoldSettings | None = None,
    *,
    settings_path: Optional[Path] = None,
    base_dir: Path | None = None,
    ask: Ask = ask_line,
    identifier: Optional[str] = None,
    context: ProvisioningContext | None = None,
) -> ScaffoldResult:
    """Provision a new attendance tracker project under ``base_dir``.

    The guard is entered before anything else, including loading settings
    from ``settings_path`` when ``settings`` is not given, and stays active
    through the final summary. On interruption the partial project is
    archived and removed, then :class:`ScaffoldInterrupted` is raised carrying
    the cleanup outcome. ``SettingsError``, ``UserAbort`` and
    ``ProvisioningFailure`` propagate unchanged.
    """

    if context is None:
        context = ProvisioningContext(base_dir=base_dir or Path.cwd())

    with InterruptGuard(context) as guard:
        try:
            if settings is None:
                settings = load_settings(settings_path) if settings_path else ScaffoldSettings()
            reporting.print_banner()
            result = _provision(context, settings, ask, identifier)
        except ProvisioningInterrupted as exc:
            reporting.warn("\nSignal received! Cleaning up...")
            if context.layout is not None and context.claimed:
                reporting.info(f"Creating archive: {context.layout.archive_path.name}")
            cleanup = guard.cleanup()
            reporting.print_cleanup(context.layout, cleanup)
            raise ScaffoldInterrupted(exc.signum, cleanup) from exc

        context.mark_completed()
        reporting.print_summary(result.layout, result.verification, settings.interpreter)
    return result


__all__ = ["ScaffoldInterrupted", "ScaffoldResult", "run_scaffold"]
