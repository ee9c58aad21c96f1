import json

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required", exc_type=ImportError)

from typer.testing import CliRunner

from dynlist.cli import app

runner = CliRunner()

FAST = ["--min-delay", "0", "--max-delay", "0"]


@pytest.fixture
def settings_file(tmp_path):
    return tmp_path / "settings.json"


def test_simulate_first_batch(settings_file):
    result = runner.invoke(app, ["simulate", "--settings", str(settings_file), *FAST])

    assert result.exit_code == 0, result.output
    assert "20 items, 20 fetched, 0 failed, 0 pending" in result.output
    assert not settings_file.exists()


def test_simulate_jump_scroll(settings_file):
    result = runner.invoke(app, ["simulate", "--settings", str(settings_file), *FAST, "-s", "16", "-s", "55"])

    assert result.exit_code == 0, result.output
    assert "56 items, 56 fetched" in result.output


def test_simulate_reset_returns_to_one_batch(settings_file):
    result = runner.invoke(
        app, ["simulate", "--settings", str(settings_file), *FAST, "-b", "5", "-m", "1", "-s", "30", "--reset"]
    )

    assert result.exit_code == 0, result.output
    assert "5 items, 5 fetched" in result.output


def test_simulate_reports_failures(settings_file):
    result = runner.invoke(
        app, ["simulate", "--settings", str(settings_file), *FAST, "-b", "4", "-m", "1", "--failure-rate", "1"]
    )

    assert result.exit_code == 0, result.output
    assert "4 items, 0 fetched, 4 failed" in result.output


def test_simulate_rejects_invalid_margin(settings_file):
    result = runner.invoke(app, ["simulate", "--settings", str(settings_file), *FAST, "-b", "5", "-m", "5"])

    assert result.exit_code == 1
    assert "prefetch_margin" in result.output


def test_settings_command_uses_file(settings_file):
    settings_file.write_text(json.dumps({"provider": {"batch_size": 42}}), encoding="utf-8")

    result = runner.invoke(app, ["settings", "--settings", str(settings_file)])

    assert result.exit_code == 0, result.output
    assert '"batch_size": 42' in result.output


def test_settings_command_reports_invalid_file(settings_file):
    settings_file.write_text(json.dumps({"provider": {"batch_size": "many"}}), encoding="utf-8")

    result = runner.invoke(app, ["settings", "--settings", str(settings_file)])

    assert result.exit_code == 1
    assert "Error:" in result.output
