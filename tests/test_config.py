from pathlib import Path

import pytest
from pydantic import ValidationError

from cmdlang.config import Settings, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CMDLANG_CAPTURE_CAPACITY", "CMDLANG_MAX_INPUT_LENGTH", "CMDLANG_GRAMMAR_PATH"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.capture_capacity == 10
    assert settings.max_input_length == 4096
    assert settings.grammar_path is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CMDLANG_CAPTURE_CAPACITY", "16")
    monkeypatch.setenv("CMDLANG_GRAMMAR_PATH", str(tmp_path / "g.yaml"))
    monkeypatch.setenv("CMDLANG_LOG_LEVEL", "warning")
    settings = get_settings()
    assert settings.capture_capacity == 16
    assert settings.grammar_path == tmp_path / "g.yaml"


def test_capture_capacity_has_a_floor() -> None:
    with pytest.raises(ValidationError):
        Settings(capture_capacity=4)
