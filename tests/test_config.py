import pytest
from pydantic import ValidationError

from report_outline.config import Settings

def test_defaults():
    settings = Settings()
    assert settings.log_level == "INFO"
    assert "https://gluwa.github.io" in settings.cors_origins

def test_log_level_from_env(monkeypatch):
    monkeypatch.setenv("REPORT_OUTLINE_LOG_LEVEL", "DEBUG")
    assert Settings().log_level == "DEBUG"

def test_unknown_log_level_is_rejected(monkeypatch):
    monkeypatch.setenv("REPORT_OUTLINE_LOG_LEVEL", "VERBOSE")
    with pytest.raises(ValidationError):
        Settings()
