"""Rendering of the payload files written into a generated project."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .config import ScaffoldSettings, StudentRecord, dump_config_document
from .models import ProjectLayout

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
SCRIPT_TEMPLATE = "attendance_checker.py.j2"
CSV_HEADER = ["Email", "Names", "Attendance Count", "Absence Count"]


def _environment(template_dir: Path = TEMPLATE_DIR) -> Environment:
    loader = FileSystemLoader(str(template_dir))
    return Environment(
        loader=loader,
        autoescape=False,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render_checker_script(layout: ProjectLayout, settings: ScaffoldSettings) -> str:
    """Render ``attendance_checker.py`` for the given project."""

    template = _environment().get_template(SCRIPT_TEMPLATE)
    return template.render(project_name=layout.project_name, interpreter=settings.interpreter)


def render_config(settings: ScaffoldSettings) -> str:
    """Render the initial ``config.json`` document."""

    return dump_config_document(settings.attendance_config().model_dump())


def render_assets(students: Iterable[StudentRecord]) -> str:
    """Render the sample ``assets.csv`` dataset."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for student in students:
        writer.writerow([student.email, student.name, student.attended, student.absent])
    return buffer.getvalue()


__all__ = ["CSV_HEADER", "render_assets", "render_checker_script", "render_config"]
