"""Post-provisioning structure checks."""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from loguru import logger

from .models import EntryKind, ProjectLayout, VerificationCheck, VerificationReport


def expected_entries(layout: ProjectLayout) -> List[Tuple[str, Path, EntryKind]]:
    """Every path a complete project must contain, in reporting order."""

    return [
        ("project directory", layout.project_dir, EntryKind.DIRECTORY),
        ("Helpers", layout.helpers_dir, EntryKind.DIRECTORY),
        ("reports", layout.reports_dir, EntryKind.DIRECTORY),
        ("attendance_checker.py", layout.script_path, EntryKind.FILE),
        ("config.json", layout.config_path, EntryKind.FILE),
        ("assets.csv", layout.assets_path, EntryKind.FILE),
        ("reports.log", layout.log_path, EntryKind.FILE),
    ]


def _exists(path: Path, kind: EntryKind) -> bool:
    if kind is EntryKind.DIRECTORY:
        return path.is_dir()
    return path.is_file()


def verify_structure(layout: ProjectLayout) -> VerificationReport:
    """Check each expected path independently; nothing is repaired."""

    report = VerificationReport()
    for label, path, kind in expected_entries(layout):
        passed = _exists(path, kind)
        if not passed:
            logger.warning("Missing {} {}", kind.value, path)
        report.checks.append(VerificationCheck(label=label, path=path, kind=kind, passed=passed))
    return report


__all__ = ["expected_entries", "verify_structure"]
