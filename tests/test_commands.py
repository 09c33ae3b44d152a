"""Tests for the CLI commands that need no audio hardware."""

import sys

import pytest

from hotword_listener import cli
from hotword_listener.commands import show_config


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "listener:\n"
        "  models:\n"
        "    - file: hey_jarvis\n"
        "      hotwords: [hey jarvis]\n"
        "recorder:\n"
        "  program: arecord\n"
    )
    return path


def test_show_config_prints_resolved_models(config_file, capsys):
    assert show_config.main(str(config_file)) is True

    out = capsys.readouterr().out
    assert "Recording Program: arecord" in out
    assert "0. hey_jarvis -> hey jarvis (sensitivity 0.5)" in out


def test_show_config_missing_file(tmp_path, capsys):
    assert show_config.main(str(tmp_path / "missing.yaml")) is False
    assert "Error loading configuration" in capsys.readouterr().out


def test_cli_config_exit_code(config_file, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["hotword-listener", "config", "--config", str(config_file)])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 0


def test_cli_requires_command(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["hotword-listener"])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 2
