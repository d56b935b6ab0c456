"""Creation of the project directory tree and its template files."""

from __future__ import annotations

import shutil
import stat
from pathlib import Path
from typing import Callable, List, Tuple

from loguru import logger

from .config import ScaffoldSettings
from .models import ProjectLayout, ProvisioningContext, ProvisioningFailure, UserAbort
from .prompts import Ask, ask_line, confirm
from .rendering import render_assets, render_checker_script, render_config
from . import reporting

_EXECUTABLE = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def _require_layout(context: ProvisioningContext) -> ProjectLayout:
    if context.layout is None:
        raise RuntimeError("Project layout has not been bound to the provisioning context")
    return context.layout


def _relative(layout: ProjectLayout, path: Path) -> str:
    return path.relative_to(layout.project_dir).as_posix()


def create_directory_structure(context: ProvisioningContext, ask: Ask = ask_line) -> None:
    """Create the project directory and its ``Helpers`` and ``reports`` subdirectories.

    An existing project directory is only replaced after the user confirms;
    declining raises :class:`UserAbort` before anything is touched.
    """

    layout = _require_layout(context)
    context.enter_step("directories")
    reporting.section("Creating Directory Structure")

    if layout.project_dir.exists():
        reporting.warn(f"Warning: Directory {layout.relative_dir} already exists")
        if not confirm("Do you want to overwrite it?", ask):
            reporting.fail("Setup cancelled by user")
            raise UserAbort(f"Overwrite of {layout.relative_dir} declined")
        context.claim()
        reporting.info("Removing existing directory...")
        logger.info("Removing existing project directory {}", layout.project_dir)
        try:
            shutil.rmtree(layout.project_dir)
        except OSError as exc:
            raise ProvisioningFailure(
                f"Failed to remove existing directory {layout.relative_dir}: {exc}",
                layout.project_dir,
            ) from exc

    context.claim()
    for directory in layout.directories():
        display = layout.relative_dir if directory == layout.project_dir else f"{layout.relative_dir}/{directory.name}"
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            reporting.fail(f"Failed to create {display}")
            raise ProvisioningFailure(f"Failed to create {display}: {exc}", directory) from exc
        logger.debug("Created directory {}", directory)
        reporting.ok(f"Created: {display}")


def _make_executable(path: Path) -> None:
    mode = path.stat().st_mode
    path.chmod(mode | _EXECUTABLE)


def _file_plan(layout: ProjectLayout, settings: ScaffoldSettings) -> List[Tuple[Path, Callable[[], str], bool]]:
    return [
        (layout.script_path, lambda: render_checker_script(layout, settings), True),
        (layout.config_path, lambda: render_config(settings), False),
        (layout.assets_path, lambda: render_assets(settings.students), False),
        (layout.log_path, lambda: "", False),
    ]


def create_project_files(context: ProvisioningContext, settings: ScaffoldSettings) -> None:
    """Write the four template files in order; the first failure is fatal."""

    layout = _require_layout(context)
    context.enter_step("files")
    reporting.section("Creating Project Files")

    for path, render, executable in _file_plan(layout, settings):
        name = _relative(layout, path)
        context.enter_step(f"files:{name}")
        try:
            path.write_text(render(), encoding="utf-8")
            if executable:
                _make_executable(path)
        except OSError as exc:
            reporting.fail(f"Failed to create {name}")
            raise ProvisioningFailure(f"Failed to create {name}: {exc}", path) from exc
        logger.debug("Wrote {} ({} bytes)", path, path.stat().st_size)
        reporting.ok(f"Created: {name}")


__all__ = ["create_directory_structure", "create_project_files"]
