from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv


def _bool_from_env(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _int_from_env(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    return int(value)


def _require_env(key: str) -> str:
    value = os.getenv(key)
    if value is None or value == "":
        raise RuntimeError(f"Missing required environment variable: {key}")
    return value


def _markets_from_env(value: Optional[str]) -> Tuple[int, ...]:
    if not value:
        return ()
    return tuple(int(part) for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class FeedSettings:
    api_url: str
    markets: Tuple[int, ...] = field(default_factory=tuple)
    poll_interval_seconds: int = 30
    timeout_seconds: int = 10
    run_once: bool = False


def load_from_environment() -> FeedSettings:
    return FeedSettings(
        api_url=_require_env("MATKA_API_URL").rstrip("/"),
        markets=_markets_from_env(os.getenv("FEED_MARKETS")),
        poll_interval_seconds=_int_from_env(os.getenv("POLL_INTERVAL_SECONDS"), 30),
        timeout_seconds=_int_from_env(os.getenv("FEED_TIMEOUT_SECONDS"), 10),
        run_once=_bool_from_env(os.getenv("RUN_ONCE"), False),
    )


@lru_cache(maxsize=1)
def load_config(dotenv_path: Optional[str] = None) -> FeedSettings:
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        default_path = pathlib.Path(".env")
        if default_path.exists():
            load_dotenv(default_path)
    return load_from_environment()
