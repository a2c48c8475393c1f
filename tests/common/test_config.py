"""
Unit tests for environment settings.
"""
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from ledger_import.common.config import DEFAULT_CORS_ORIGINS, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LOG_LEVEL", "LOG_FILE", "HISTORY_DIR", "HISTORY_MAX", "CORS_ORIGINS", "SESSION_TIMEOUT_HOURS"):
        monkeypatch.delenv(f"LEDGER_IMPORT_{name}", raising=False)


def test_defaults():
    settings = Settings()
    assert settings.log_level == logging.INFO
    assert settings.log_file is None
    assert settings.history_dir is None
    assert settings.history_max == 100
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS
    assert settings.session_timeout_hours == 4


def test_reads_prefixed_env(monkeypatch, tmp_path):
    monkeypatch.setenv("LEDGER_IMPORT_LOG_LEVEL", "debug")
    monkeypatch.setenv("LEDGER_IMPORT_HISTORY_DIR", str(tmp_path))
    monkeypatch.setenv("LEDGER_IMPORT_HISTORY_MAX", "25")
    monkeypatch.setenv("LEDGER_IMPORT_CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("LEDGER_IMPORT_SESSION_TIMEOUT_HOURS", "8")

    settings = Settings()

    assert settings.log_level == logging.DEBUG
    assert settings.history_dir == Path(tmp_path)
    assert settings.history_max == 25
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.session_timeout_hours == 8


def test_blank_history_dir_means_memory(monkeypatch):
    monkeypatch.setenv("LEDGER_IMPORT_HISTORY_DIR", "")
    assert Settings().history_dir is None


@pytest.mark.parametrize("name, value", [
    ("HISTORY_MAX", "abc"),
    ("HISTORY_MAX", "0"),
    ("LOG_LEVEL", "loud"),
])
def test_invalid_values_name_the_field(monkeypatch, name, value):
    monkeypatch.setenv(f"LEDGER_IMPORT_{name}", value)
    with pytest.raises(ValidationError, match=name.lower()):
        Settings()
