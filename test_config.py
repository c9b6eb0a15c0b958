"""
Tests for config.py
Run: pytest test_config.py
"""
import os

import pytest

from config import load_settings

_ENV_VARS = [
    "PORTFOLIO_REFRESH_INTERVAL", "PORTFOLIO_CACHE_TTL", "PORTFOLIO_BATCH_SIZE",
    "PORTFOLIO_BATCH_PAUSE", "PORTFOLIO_FAILURE_RATE", "PORTFOLIO_REFRESH_FINANCIALS",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)   # no stray .env


def test_defaults():
    s = load_settings()
    assert s.refresh_interval == 15.0
    assert s.cache_ttl == 30.0
    assert s.batch_size == 5
    assert s.batch_pause == 1.0
    assert s.failure_rate == 0.0
    assert s.refresh_financials is False
    assert s.log_level == "INFO"


def test_env_values(monkeypatch):
    monkeypatch.setenv("PORTFOLIO_REFRESH_INTERVAL", "5")
    monkeypatch.setenv("PORTFOLIO_BATCH_SIZE", "3")
    monkeypatch.setenv("PORTFOLIO_REFRESH_FINANCIALS", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    s = load_settings()
    assert s.refresh_interval == 5.0
    assert s.batch_size == 3
    assert s.refresh_financials is True
    assert s.log_level == "DEBUG"


def test_overrides_beat_env(monkeypatch):
    monkeypatch.setenv("PORTFOLIO_FAILURE_RATE", "0.5")

    s = load_settings(failure_rate=0.1, refresh_interval=None)
    assert s.failure_rate == 0.1
    assert s.refresh_interval == 15.0


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("PORTFOLIO_CACHE_TTL=12\n")
    try:
        assert load_settings().cache_ttl == 12.0
    finally:
        os.environ.pop("PORTFOLIO_CACHE_TTL", None)   # load_dotenv writes to os.environ


@pytest.mark.parametrize("var,value", [
    ("PORTFOLIO_FAILURE_RATE", "1.5"),
    ("PORTFOLIO_BATCH_SIZE", "0"),
    ("PORTFOLIO_REFRESH_INTERVAL", "abc"),
    ("LOG_LEVEL", "LOUD"),
])
def test_invalid_values_rejected(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(ValueError):
        load_settings()
