from __future__ import annotations

import json
import signal
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from attendance_scaffold.cli import app
from attendance_scaffold.config import load_settings
from .conftest import snapshot

runner = CliRunner()


def _project(tmp_path: Path, identifier: str = "cs101") -> Path:
    return tmp_path / f"attendance_tracker_{identifier}"


def test_default_run_succeeds(tmp_path: Path, fake_runtime) -> None:
    result = runner.invoke(app, ["--workdir", str(tmp_path)], input="cs101\nn\n")

    assert result.exit_code == 0, result.output
    config_text = (_project(tmp_path) / "Helpers" / "config.json").read_text()
    assert '"warning": 75' in config_text
    assert '"failure": 50' in config_text
    assert "PROJECT SETUP COMPLETE" in result.output
    assert not (tmp_path / "attendance_tracker_cs101_archive.tar.gz").exists()


def test_custom_thresholds(tmp_path: Path, fake_runtime) -> None:
    result = runner.invoke(app, ["--workdir", str(tmp_path)], input="cs101\ny\n80\n40\n")

    assert result.exit_code == 0, result.output
    data = json.loads((_project(tmp_path) / "Helpers" / "config.json").read_text())
    assert data == {"thresholds": {"warning": 80, "failure": 40}, "run_mode": "live", "total_sessions": 15}


def test_empty_identifier_aborts(tmp_path: Path, fake_runtime) -> None:
    result = runner.invoke(app, ["--workdir", str(tmp_path)], input="\n")

    assert result.exit_code == 1
    assert list(tmp_path.iterdir()) == []


def test_declined_overwrite_exits_non_zero(tmp_path: Path, fake_runtime) -> None:
    first = runner.invoke(app, ["--workdir", str(tmp_path)], input="cs101\ny\n90\n10\n")
    assert first.exit_code == 0, first.output
    before = snapshot(_project(tmp_path))

    result = runner.invoke(app, ["--workdir", str(tmp_path)], input="cs101\nn\n")

    assert result.exit_code == 1
    assert snapshot(_project(tmp_path)) == before


def test_confirmed_overwrite_restores_defaults(tmp_path: Path, fake_runtime) -> None:
    runner.invoke(app, ["--workdir", str(tmp_path)], input="cs101\ny\n90\n10\n")
    (_project(tmp_path) / "extra.txt").write_text("stale")

    result = runner.invoke(app, ["--workdir", str(tmp_path)], input="cs101\ny\nn\n")

    assert result.exit_code == 0, result.output
    assert not (_project(tmp_path) / "extra.txt").exists()
    data = json.loads((_project(tmp_path) / "Helpers" / "config.json").read_text())
    assert data["thresholds"] == {"warning": 75, "failure": 50}


def test_missing_interpreter_is_only_a_warning(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("attendance_scaffold.validators.shutil.which", lambda name: None)

    result = runner.invoke(app, ["--workdir", str(tmp_path)], input="cs101\nn\n")

    assert result.exit_code == 0, result.output
    assert "not found" in result.output
    assert _project(tmp_path).is_dir()


def test_verification_failure_keeps_exit_code(tmp_path: Path, fake_runtime, monkeypatch: pytest.MonkeyPatch) -> None:
    from attendance_scaffold import scaffold
    from attendance_scaffold.verifier import verify_structure

    def _drop_log_then_verify(layout):
        layout.log_path.unlink()
        return verify_structure(layout)

    monkeypatch.setattr(scaffold, "verify_structure", _drop_log_then_verify)

    result = runner.invoke(app, ["--workdir", str(tmp_path)], input="cs101\nn\n")

    assert result.exit_code == 0, result.output
    assert "completed with warnings" in result.output
    assert "PROJECT SETUP COMPLETE" not in result.output


def test_interrupt_exits_with_archive(tmp_path: Path, fake_runtime, monkeypatch: pytest.MonkeyPatch) -> None:
    def _interrupting_update(context, defaults, ask):
        signal.raise_signal(signal.SIGINT)

    monkeypatch.setattr("attendance_scaffold.scaffold.update_config", _interrupting_update)

    result = runner.invoke(app, ["--workdir", str(tmp_path)], input="cs101\n")

    assert result.exit_code == 130
    assert not _project(tmp_path).exists()
    assert (tmp_path / "attendance_tracker_cs101_archive.tar.gz").is_file()


def test_provisioning_failure_exit_code(tmp_path: Path, fake_runtime, monkeypatch: pytest.MonkeyPatch) -> None:
    def _failing_write(self, *args, **kwargs):
        raise PermissionError("read-only filesystem")

    monkeypatch.setattr(Path, "write_text", _failing_write)

    result = runner.invoke(app, ["--workdir", str(tmp_path)], input="cs101\n")

    assert result.exit_code == 2
    assert _project(tmp_path).is_dir()
    assert not (_project(tmp_path) / "attendance_checker.py").exists()


def test_verify_command(tmp_path: Path, fake_runtime) -> None:
    runner.invoke(app, ["--workdir", str(tmp_path)], input="cs101\nn\n")

    ok = runner.invoke(app, ["verify", "cs101", "--workdir", str(tmp_path)])
    assert ok.exit_code == 0, ok.output

    (_project(tmp_path) / "reports" / "reports.log").unlink()
    failed = runner.invoke(app, ["verify", "cs101", "--workdir", str(tmp_path)])
    assert failed.exit_code == 3


def test_init_settings_round_trip(tmp_path: Path, fake_runtime) -> None:
    settings_path = tmp_path / "settings.yml"
    result = runner.invoke(app, ["init-settings", str(settings_path)])
    assert result.exit_code == 0, result.output

    data = yaml.safe_load(settings_path.read_text())
    data["total_sessions"] = 20
    data["run_mode"] = "dry"
    settings_path.write_text(yaml.safe_dump(data))
    assert load_settings(settings_path).total_sessions == 20

    workdir = tmp_path / "work"
    result = runner.invoke(
        app, ["--workdir", str(workdir), "--settings", str(settings_path)], input="cs101\nn\n"
    )
    assert result.exit_code == 0, result.output
    config = json.loads((_project(workdir) / "Helpers" / "config.json").read_text())
    assert config["total_sessions"] == 20
    assert config["run_mode"] == "dry"


@pytest.mark.parametrize("content", ["thresholds: [", "thresholds:\n  warning: 150\n", "total_sessions: 0\n"])
def test_invalid_settings_exit_code(tmp_path: Path, content: str) -> None:
    settings_path = tmp_path / "settings.yml"
    settings_path.write_text(content)

    result = runner.invoke(app, ["--workdir", str(tmp_path), "--settings", str(settings_path)], input="cs101\n")

    assert result.exit_code == 4
    assert not _project(tmp_path).exists()


def test_oversized_threshold_is_reprompted(tmp_path: Path, fake_runtime) -> None:
    result = runner.invoke(app, ["--workdir", str(tmp_path)], input=f"cs101\ny\n{'9' * 5000}\n80\n40\n")

    assert result.exit_code == 0, result.output
    data = json.loads((_project(tmp_path) / "Helpers" / "config.json").read_text())
    assert data["thresholds"] == {"warning": 80, "failure": 40}


def test_interrupt_while_loading_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    settings_path = tmp_path / "settings.yml"
    settings_path.write_text("run_mode: live\n")

    def _interrupting_load(path):
        signal.raise_signal(signal.SIGINT)

    monkeypatch.setattr("attendance_scaffold.scaffold.load_settings", _interrupting_load)

    result = runner.invoke(app, ["--workdir", str(tmp_path), "--settings", str(settings_path)], input="cs101\n")

    assert result.exit_code == 130
    assert not _project(tmp_path).exists()
