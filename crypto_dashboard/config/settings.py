# crypto_dashboard/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List


DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"


def parse_csv(value: str | None, default: List[str]) -> List[str]:
    if not value:
        return default
    items = [x.strip() for x in value.split(",")]
    return [x for x in items if x]


def parse_int(value: str | None, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    return int(value)


def parse_float(value: str | None, default: float) -> float:
    if value is None or value.strip() == "":
        return default
    return float(value)


@dataclass(frozen=True)
class Settings:
    COINGECKO_BASE_URL: str
    COINGECKO_TIMEOUT_SECONDS: float
    COINGECKO_MAX_CONCURRENCY: int
    TOP_N_DEFAULT: int
    WATCHLIST_COINS: List[str]
    LOG_LEVEL: str

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            COINGECKO_BASE_URL=os.getenv("COINGECKO_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            COINGECKO_TIMEOUT_SECONDS=parse_float(os.getenv("COINGECKO_TIMEOUT_SECONDS"), 10.0),
            COINGECKO_MAX_CONCURRENCY=parse_int(os.getenv("COINGECKO_MAX_CONCURRENCY"), 8),
            TOP_N_DEFAULT=parse_int(os.getenv("TOP_N_DEFAULT"), 20),
            WATCHLIST_COINS=parse_csv(os.getenv("WATCHLIST_COINS"), ["bitcoin", "ethereum"]),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
