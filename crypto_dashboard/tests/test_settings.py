from __future__ import annotations

import dataclasses

import pytest

from crypto_dashboard.config import settings as settings_module
from crypto_dashboard.config.settings import Settings, parse_csv, parse_float, parse_int


def test_parse_helpers():
    assert parse_csv(None, ["bitcoin"]) == ["bitcoin"]
    assert parse_csv(" bitcoin , ,ethereum", []) == ["bitcoin", "ethereum"]
    assert parse_int("", 3) == 3
    assert parse_int("7", 3) == 7
    assert parse_float(None, 10.0) == 10.0
    assert parse_float("2.5", 10.0) == 2.5


def test_defaults(monkeypatch):
    for name in (
        "COINGECKO_BASE_URL",
        "COINGECKO_TIMEOUT_SECONDS",
        "COINGECKO_MAX_CONCURRENCY",
        "TOP_N_DEFAULT",
        "WATCHLIST_COINS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()
    assert s.COINGECKO_BASE_URL == "https://api.coingecko.com/api/v3"
    assert s.COINGECKO_TIMEOUT_SECONDS == 10.0
    assert s.COINGECKO_MAX_CONCURRENCY == 8
    assert s.TOP_N_DEFAULT == 20
    assert s.WATCHLIST_COINS == ["bitcoin", "ethereum"]
    assert s.LOG_LEVEL == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("COINGECKO_BASE_URL", "http://localhost:8080/api/v3/")
    monkeypatch.setenv("COINGECKO_TIMEOUT_SECONDS", "3")
    monkeypatch.setenv("TOP_N_DEFAULT", "5")
    monkeypatch.setenv("WATCHLIST_COINS", "solana")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    s = Settings.from_env()
    assert s.COINGECKO_BASE_URL == "http://localhost:8080/api/v3"
    assert s.COINGECKO_TIMEOUT_SECONDS == 3.0
    assert s.TOP_N_DEFAULT == 5
    assert s.WATCHLIST_COINS == ["solana"]
    assert s.LOG_LEVEL == "DEBUG"


def test_get_settings_is_cached(monkeypatch):
    settings_module.reset_settings()
    monkeypatch.setenv("TOP_N_DEFAULT", "11")
    try:
        first = settings_module.get_settings()
        monkeypatch.setenv("TOP_N_DEFAULT", "12")
        assert settings_module.get_settings() is first
        assert first.TOP_N_DEFAULT == 11
    finally:
        settings_module.reset_settings()


def test_settings_are_frozen():
    s = Settings.from_env()
    with pytest.raises(dataclasses.FrozenInstanceError):
        s.TOP_N_DEFAULT = 1
