"""Shared models for provisioning state and verification results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import List, Optional


PROJECT_PREFIX = "attendance_tracker_"
ARCHIVE_SUFFIX = "_archive.tar.gz"


class ExitCode(IntEnum):
    """Process exit codes returned by the CLI."""

    SUCCESS = 0
    USER_ABORT = 1
    PROVISIONING_FAILURE = 2
    VERIFICATION_FAILED = 3
    SETTINGS_ERROR = 4
    INTERRUPTED = 130


class ScaffoldError(Exception):
    """Base class for errors that end a scaffold run."""

    exit_code: ExitCode = ExitCode.PROVISIONING_FAILURE


class UserAbort(ScaffoldError):
    """Raised when the user declines to continue."""

    exit_code = ExitCode.USER_ABORT


class ProvisioningFailure(ScaffoldError):
    """Raised when a directory or file cannot be created."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ProvisioningInterrupted(ScaffoldError):
    """Raised from the signal handler to unwind the provisioning steps."""

    exit_code = ExitCode.INTERRUPTED

    def __init__(self, signum: int) -> None:
        super().__init__(f"Interrupted by signal {signum}")
        self.signum = signum


class EntryKind(str, Enum):
    """Kind of filesystem entry a verification check expects."""

    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True, slots=True)
class ProjectLayout:
    """Paths of a generated project, derived once from the identifier."""

    identifier: str
    base_dir: Path

    @classmethod
    def from_identifier(cls, identifier: str, base_dir: Path | None = None) -> "ProjectLayout":
        return cls(identifier=identifier, base_dir=base_dir or Path.cwd())

    @property
    def project_name(self) -> str:
        return f"{PROJECT_PREFIX}{self.identifier}"

    @property
    def relative_dir(self) -> str:
        return f"./{self.project_name}"

    @property
    def project_dir(self) -> Path:
        return self.base_dir / self.project_name

    @property
    def helpers_dir(self) -> Path:
        return self.project_dir / "Helpers"

    @property
    def reports_dir(self) -> Path:
        return self.project_dir / "reports"

    @property
    def script_path(self) -> Path:
        return self.project_dir / "attendance_checker.py"

    @property
    def config_path(self) -> Path:
        return self.helpers_dir / "config.json"

    @property
    def assets_path(self) -> Path:
        return self.helpers_dir / "assets.csv"

    @property
    def log_path(self) -> Path:
        return self.reports_dir / "reports.log"

    @property
    def archive_path(self) -> Path:
        return self.base_dir / f"{self.project_name}{ARCHIVE_SUFFIX}"

    def directories(self) -> List[Path]:
        """Directories in creation order."""

        return [self.project_dir, self.helpers_dir, self.reports_dir]

    def files(self) -> List[Path]:
        """Template files in write order."""

        return [self.script_path, self.config_path, self.assets_path, self.log_path]


@dataclass(slots=True)
class ProvisioningContext:
    """State shared between the supervisor, the provisioning steps and the interrupt guard."""

    base_dir: Path
    layout: Optional[ProjectLayout] = None
    interrupted: bool = False
    claimed: bool = False
    completed: bool = False
    current_step: str = "startup"

    def bind(self, identifier: str) -> ProjectLayout:
        if self.layout is not None:
            raise RuntimeError("Project layout is already bound for this run")
        self.layout = ProjectLayout.from_identifier(identifier, self.base_dir)
        return self.layout

    def enter_step(self, name: str) -> None:
        self.current_step = name

    def claim(self) -> None:
        """Record that this run owns the project directory from now on."""

        self.claimed = True

    def mark_interrupted(self) -> None:
        self.interrupted = True

    def mark_completed(self) -> None:
        """Record that every step finished; later signals no longer trigger cleanup."""

        self.completed = True


@dataclass(slots=True)
class RuntimeInfo:
    """Result of looking for the interpreter the generated project needs."""

    interpreter: str
    found: bool
    version: str = ""


@dataclass(slots=True)
class CleanupResult:
    """Outcome of the archive-and-purge transition."""

    archive_path: Optional[Path] = None
    archived: bool = False
    removed: bool = False
    skipped: bool = False
    errors: List[str] = field(default_factory=list)


@dataclass(slots=True)
class VerificationCheck:
    """A single existence check against the project tree."""

    label: str
    path: Path
    kind: EntryKind
    passed: bool


@dataclass(slots=True)
class VerificationReport:
    """Outcome of verifying a project tree."""

    checks: List[VerificationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)

    @property
    def failures(self) -> List[VerificationCheck]:
        return [check for check in self.checks if not check.passed]


__all__ = [
    "ARCHIVE_SUFFIX",
    "CleanupResult",
    "EntryKind",
    "ExitCode",
    "PROJECT_PREFIX",
    "ProjectLayout",
    "ProvisioningContext",
    "ProvisioningFailure",
    "ProvisioningInterrupted",
    "RuntimeInfo",
    "ScaffoldError",
    "UserAbort",
    "VerificationCheck",
    "VerificationReport",
]
