from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pytest

from attendance_scaffold.config import ScaffoldSettings
from attendance_scaffold.models import ProvisioningContext, RuntimeInfo, UserAbort


class ScriptedAnswers:
    """Stand-in for the interactive prompt that replays prepared answers."""

    def __init__(self, answers: Iterable[str]) -> None:
        self._answers: List[str] = list(answers)
        self.prompts: List[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise UserAbort("No input received")
        return self._answers.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._answers)


@pytest.fixture()
def answers():
    def _factory(*values: str) -> ScriptedAnswers:
        return ScriptedAnswers(values)

    return _factory


@pytest.fixture()
def settings() -> ScaffoldSettings:
    return ScaffoldSettings()


@pytest.fixture()
def context(tmp_path: Path) -> ProvisioningContext:
    ctx = ProvisioningContext(base_dir=tmp_path)
    ctx.bind("cs101")
    return ctx


@pytest.fixture()
def fake_runtime(monkeypatch: pytest.MonkeyPatch) -> RuntimeInfo:
    runtime = RuntimeInfo(interpreter="python3", found=True, version="Python 3.12.0")
    monkeypatch.setattr("attendance_scaffold.scaffold.detect_runtime", lambda interpreter: runtime)
    return runtime


def snapshot(root: Path) -> dict[str, bytes | None]:
    """Map every path under ``root`` to its bytes (``None`` for directories)."""

    return {
        path.relative_to(root).as_posix(): (path.read_bytes() if path.is_file() else None)
        for path in sorted(root.rglob("*"))
    }
