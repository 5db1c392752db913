from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional, Sequence

from matka.rules.market_status import get_current_bet_type, is_betting_allowed

from .config import FeedSettings
from .datasource import MarketStatusSource
from .types import FeedSnapshot, StatusChange


class MarketWatcher:
    """Poll market status and report when a market changes betting phase."""

    def __init__(
        self,
        settings: FeedSettings,
        source: MarketStatusSource,
        markets: Optional[Sequence[int]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._settings = settings
        self._source = source
        self._markets = tuple(markets if markets is not None else settings.markets)
        self._last_status: Dict[int, str] = {}
        self._logger = logger or logging.getLogger("matka.feed")

    @property
    def last_status(self) -> Dict[int, str]:
        return dict(self._last_status)

    async def run_forever(self) -> None:
        interval = self._settings.poll_interval_seconds
        self._logger.info(
            "Market watcher started; markets=%s poll interval=%s", list(self._markets), interval
        )
        try:
            while True:
                await self.poll()
                await asyncio.sleep(interval)
        finally:
            await self._source.close()

    async def run_once(self) -> List[StatusChange]:
        try:
            return await self.poll()
        finally:
            await self._source.close()

    async def poll(self) -> List[StatusChange]:
        changes: List[StatusChange] = []
        for market_id in self._markets:
            try:
                snapshot = await self._source.fetch_status(market_id)
            except Exception as exc:
                self._logger.exception("Status fetch for market %s failed: %s", market_id, exc)
                continue
            change = self._record(snapshot)
            if change is not None:
                changes.append(change)
        return changes

    def _record(self, snapshot: FeedSnapshot) -> Optional[StatusChange]:
        previous = self._last_status.get(snapshot.market_id)
        if previous == snapshot.status:
            self._logger.debug("Market %s still %s", snapshot.market_id, snapshot.status)
            return None

        self._last_status[snapshot.market_id] = snapshot.status
        bet_type = get_current_bet_type(snapshot)
        change = StatusChange(
            market_id=snapshot.market_id,
            previous=previous,
            current=snapshot.status,
            current_bet_type=bet_type.value if bet_type else None,
            betting_allowed=is_betting_allowed(snapshot),
        )
        self._logger.info(
            "Market %s: %s -> %s (betting allowed=%s, current bet type=%s)",
            snapshot.market_id,
            previous,
            snapshot.status,
            change.betting_allowed,
            change.current_bet_type,
        )
        return change
