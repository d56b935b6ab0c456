"""Configuration models for the scaffold tool and the generated project."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .models import ExitCode, ScaffoldError


DEFAULT_WARNING = 75
DEFAULT_FAILURE = 50
THRESHOLD_MIN = 0
THRESHOLD_MAX = 100


class ThresholdsConfig(BaseModel):
    """Attendance percentage cutoffs used by the generated checker."""

    warning: int = Field(default=DEFAULT_WARNING, ge=THRESHOLD_MIN, le=THRESHOLD_MAX)
    failure: int = Field(default=DEFAULT_FAILURE, ge=THRESHOLD_MIN, le=THRESHOLD_MAX)


class AttendanceConfig(BaseModel):
    """Schema of ``Helpers/config.json`` in a generated project."""

    model_config = ConfigDict(extra="allow")

    thresholds: ThresholdsConfig = Field(default_factory=ThresholdsConfig)
    run_mode: str = "live"
    total_sessions: int = Field(default=15, gt=0)

    @property
    def is_live(self) -> bool:
        return self.run_mode == "live"


class StudentRecord(BaseModel):
    """One row of the sample ``assets.csv`` dataset."""

    email: str
    name: str
    attended: int = Field(ge=0)
    absent: int = Field(ge=0)


def _default_students() -> List[StudentRecord]:
    return [
        StudentRecord(email="alice@example.com", name="Alice Johnson", attended=14, absent=1),
        StudentRecord(email="bob@example.com", name="Bob Smith", attended=7, absent=8),
        StudentRecord(email="charlie@example.com", name="Charlie Davis", attended=4, absent=11),
        StudentRecord(email="diana@example.com", name="Diana Prince", attended=15, absent=0),
    ]


class ScaffoldSettings(BaseModel):
    """Tool settings, optionally loaded from a YAML file."""

    interpreter: str = "python3"
    thresholds: ThresholdsConfig = Field(default_factory=ThresholdsConfig)
    run_mode: str = "live"
    total_sessions: int = Field(default=15, gt=0)
    students: List[StudentRecord] = Field(default_factory=_default_students)

    @field_validator("interpreter")
    @classmethod
    def _require_interpreter(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Interpreter name cannot be empty")
        return value

    def attendance_config(self) -> AttendanceConfig:
        """Return the document written to ``config.json`` for a new project."""

        return AttendanceConfig(
            thresholds=self.thresholds.model_copy(),
            run_mode=self.run_mode,
            total_sessions=self.total_sessions,
        )


class SettingsError(ScaffoldError):
    """Raised when a settings file is invalid."""

    exit_code = ExitCode.SETTINGS_ERROR


class ConfigDocumentError(ScaffoldError):
    """Raised when a generated ``config.json`` cannot be read or rewritten."""


def load_settings(path: Path) -> ScaffoldSettings:
    """Load tool settings from a YAML file."""

    try:
        data = yaml.safe_load(path.read_text())
    except FileNotFoundError as exc:
        raise SettingsError(f"Settings file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise SettingsError(f"Failed to parse YAML: {exc}") from exc

    try:
        return ScaffoldSettings.model_validate(data or {})
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings: {exc}") from exc


def save_settings(settings: ScaffoldSettings, path: Path) -> None:
    """Persist settings to disk as YAML."""

    rendered = settings.model_dump()
    path.write_text(yaml.safe_dump(rendered, sort_keys=False))


def dump_config_document(data: Dict[str, Any]) -> str:
    """Serialise a config document the way it is first written."""

    return json.dumps(data, indent=4, ensure_ascii=False) + "\n"


def read_config_document(path: Path) -> Dict[str, Any]:
    """Load and validate a generated ``config.json``, returning the raw mapping."""

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigDocumentError(f"Configuration file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigDocumentError(f"Failed to parse {path.name}: {exc}") from exc

    try:
        AttendanceConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigDocumentError(f"Invalid configuration in {path.name}: {exc}") from exc
    return data


__all__ = [
    "AttendanceConfig",
    "ConfigDocumentError",
    "DEFAULT_FAILURE",
    "DEFAULT_WARNING",
    "ScaffoldSettings",
    "SettingsError",
    "StudentRecord",
    "THRESHOLD_MAX",
    "THRESHOLD_MIN",
    "ThresholdsConfig",
    "dump_config_document",
    "load_settings",
    "read_config_document",
    "save_settings",
]
