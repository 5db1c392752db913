from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class FlaskSettings:
    secret_key: str = "matka-dev-secret"
    debug: bool = True


@dataclass(frozen=True)
class MarketSettings:
    timezone: str = "Asia/Kolkata"
    buffer_minutes: int = 15


@dataclass(frozen=True)
class AppSettings:
    flask: FlaskSettings
    market: MarketSettings
    database_url: str
    admin_api_key: Optional[str]
    log_level: str = "INFO"


def _int_from_env(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {key} must be an integer, got {value!r}") from exc


@lru_cache(maxsize=1)
def load_settings(dotenv_path: Optional[str] = None) -> AppSettings:
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        load_dotenv()

    flask_settings = FlaskSettings(
        secret_key=os.getenv("FLASK_SECRET_KEY", "matka-dev-secret"),
        debug=os.getenv("FLASK_DEBUG", "1") == "1",
    )

    market_settings = MarketSettings(
        timezone=os.getenv("MARKET_TIMEZONE", "Asia/Kolkata"),
        buffer_minutes=_int_from_env("BETTING_BUFFER_MINUTES", 15),
    )

    database_url = os.getenv("DATABASE_URL", "sqlite:///matka.db")
    admin_api_key = os.getenv("ADMIN_API_KEY")

    return AppSettings(
        flask=flask_settings,
        market=market_settings,
        database_url=database_url,
        admin_api_key=admin_api_key,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
