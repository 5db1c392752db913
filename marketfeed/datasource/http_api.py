from __future__ import annotations

import asyncio
import datetime as dt
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests

from ..types import FeedSnapshot
from .base import MarketStatusSource


@dataclass(frozen=True)
class HttpMarketStatusSourceConfig:
    base_url: str
    timeout_seconds: int = 10


class HttpMarketStatusSource(MarketStatusSource):
    """Read market status from the matka JSON API."""

    def __init__(
        self, config: HttpMarketStatusSourceConfig, session: Optional[requests.Session] = None
    ) -> None:
        self._config = config
        self._session = session or requests.Session()

    async def fetch_status(self, market_id: int) -> FeedSnapshot:
        url = f"{self._config.base_url.rstrip('/')}/markets/{market_id}/status"
        payload = await asyncio.to_thread(self._get_json, url, self._config.timeout_seconds)
        return self._parse_payload(market_id, payload)

    async def close(self) -> None:
        self._session.close()

    def _get_json(self, url: str, timeout_seconds: int) -> Mapping[str, Any]:
        resp = self._session.get(url, timeout=timeout_seconds)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, Mapping):
            raise ValueError("Market status API returned non-object payload")
        return data

    @staticmethod
    def _parse_payload(market_id: int, payload: Mapping[str, Any]) -> FeedSnapshot:
        status = payload.get("status")
        if not isinstance(status, str) or not status:
            raise ValueError(f"Missing status for market {market_id}")

        next_type = None
        next_time = None
        next_event = payload.get("next_event")
        if isinstance(next_event, Mapping):
            next_type = next_event.get("type")
            raw_time = next_event.get("time")
            if isinstance(raw_time, str):
                try:
                    next_time = dt.datetime.fromisoformat(raw_time.replace("Z", "+00:00"))
                except ValueError as exc:
                    raise ValueError("Invalid next_event time format") from exc

        return FeedSnapshot(
            market_id=market_id,
            status=status,
            message=str(payload.get("message") or ""),
            next_event_type=next_type,
            next_event_time=next_time,
        )
