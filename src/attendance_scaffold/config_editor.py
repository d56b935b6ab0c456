"""Interactive editing of the thresholds in a generated ``config.json``."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from loguru import logger
from rich.markup import escape

from .config import (
    THRESHOLD_MAX,
    THRESHOLD_MIN,
    ThresholdsConfig,
    dump_config_document,
    read_config_document,
)
from .models import ProvisioningContext
from .prompts import Ask, ask_line, confirm, console
from .validators import validate_range
from . import reporting


def _prompt_value(label: str, default: int, ask: Ask, *, maximum: int = THRESHOLD_MAX) -> int:
    prompt = escape(f"Enter {label} threshold ({THRESHOLD_MIN}-{THRESHOLD_MAX}) [default: {default}]: ")
    while True:
        raw = ask(prompt).strip()
        if not raw:
            raw = str(default)
        if validate_range(raw, THRESHOLD_MIN, maximum):
            return int(raw.lstrip("0") or "0")
        if validate_range(raw, THRESHOLD_MIN, THRESHOLD_MAX):
            reporting.fail(f"Invalid input. The {label.lower()} threshold cannot exceed {maximum}")
        else:
            reporting.fail(f"Invalid input. Please enter a number between {THRESHOLD_MIN} and {THRESHOLD_MAX}")


def prompt_thresholds(defaults: ThresholdsConfig, ask: Ask = ask_line) -> ThresholdsConfig:
    """Ask for the warning threshold, then a failure threshold no higher than it."""

    warning = _prompt_value("Warning", defaults.warning, ask)
    failure = _prompt_value("Failure", min(defaults.failure, warning), ask, maximum=warning)
    return ThresholdsConfig(warning=warning, failure=failure)


def update_thresholds(path: Path, thresholds: ThresholdsConfig) -> None:
    """Rewrite only the two threshold values, keeping every other field and the key order."""

    data = read_config_document(path)
    data["thresholds"]["warning"] = thresholds.warning
    data["thresholds"]["failure"] = thresholds.failure
    path.write_text(dump_config_document(data), encoding="utf-8")
    logger.info("Updated thresholds in {}: warning={} failure={}", path, thresholds.warning, thresholds.failure)


def update_config(
    context: ProvisioningContext,
    defaults: ThresholdsConfig,
    ask: Ask = ask_line,
) -> Optional[ThresholdsConfig]:
    """Offer to customise the thresholds; returns the new values or None when declined."""

    layout = context.layout
    if layout is None:
        raise RuntimeError("Project layout has not been bound to the provisioning context")
    context.enter_step("config")
    reporting.section("Configuration Setup")

    if not confirm("Would you like to update attendance thresholds?", ask):
        reporting.info(
            f"Using default thresholds (Warning: {defaults.warning}%, Failure: {defaults.failure}%)"
        )
        return None

    thresholds = prompt_thresholds(defaults, ask)
    reporting.info("Updating configuration file...")
    update_thresholds(layout.config_path, thresholds)
    reporting.ok("Configuration updated:")
    console.print(f"   Warning threshold: {thresholds.warning}%")
    console.print(f"   Failure threshold: {thresholds.failure}%")
    return thresholds


__all__ = ["prompt_thresholds", "update_config", "update_thresholds"]
