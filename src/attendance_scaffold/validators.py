"""Validation helpers for the scaffold tool."""

from __future__ import annotations

import re
import shutil
import subprocess

from loguru import logger

from .models import RuntimeInfo, UserAbort


_DIGITS = re.compile(r"[0-9]+")


def validate_range(value: str, minimum: int, maximum: int) -> bool:
    """Return True when ``value`` is a plain decimal integer within ``[minimum, maximum]``."""

    if not _DIGITS.fullmatch(value):
        return False
    # int() refuses very long digit strings, so compare lengths first.
    significant = value.lstrip("0") or "0"
    if len(significant) > len(str(maximum)):
        return False
    return minimum <= int(significant) <= maximum


def validate_identifier(value: str) -> str:
    """Normalize a project identifier, aborting the run when it is empty."""

    identifier = value.strip()
    if not identifier:
        raise UserAbort("Project identifier cannot be empty")
    return identifier


def detect_runtime(interpreter: str = "python3", *, timeout: float = 10.0) -> RuntimeInfo:
    """Look for ``interpreter`` on PATH and report its version.

    A missing interpreter is never fatal; the generated project only needs it
    when it is run later.
    """

    executable = shutil.which(interpreter)
    if executable is None:
        logger.debug("Interpreter {} not found on PATH", interpreter)
        return RuntimeInfo(interpreter=interpreter, found=False)

    try:
        completed = subprocess.run(
            [executable, "--version"],
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.warning("Failed to query {} version: {}", interpreter, exc)
        return RuntimeInfo(interpreter=interpreter, found=False)

    if completed.returncode != 0:
        logger.warning("{} --version exited with status {}", interpreter, completed.returncode)
        return RuntimeInfo(interpreter=interpreter, found=False)

    # Python 2 printed its version on stderr.
    version = (completed.stdout or completed.stderr).strip()
    return RuntimeInfo(interpreter=interpreter, found=True, version=version)


__all__ = ["detect_runtime", "validate_identifier", "validate_range"]
