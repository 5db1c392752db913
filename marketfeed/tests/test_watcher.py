import asyncio
import unittest

from marketfeed.config import FeedSettings
from marketfeed.datasource.base import MarketStatusSource
from marketfeed.monitor import MarketWatcher
from marketfeed.types import FeedSnapshot


class FakeSource(MarketStatusSource):
    def __init__(self, statuses) -> None:
        self._statuses = statuses
        self.closed = False
        self.calls = []

    async def fetch_status(self, market_id: int) -> FeedSnapshot:
        self.calls.append(market_id)
        queue = self._statuses[market_id]
        value = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(value, Exception):
            raise value
        return FeedSnapshot(market_id=market_id, status=value)

    async def close(self) -> None:
        self.closed = True


class MarketWatcherTests(unittest.TestCase):
    def _make_settings(self) -> FeedSettings:
        return FeedSettings(api_url="http://matka.test", markets=(1, 2), poll_interval_seconds=5)

    def test_run_once_reports_initial_status_and_closes_source(self) -> None:
        source = FakeSource({1: ["open_betting"], 2: ["closed"]})
        watcher = MarketWatcher(self._make_settings(), source)

        changes = asyncio.run(watcher.run_once())

        self.assertTrue(source.closed)
        self.assertEqual(source.calls, [1, 2])
        self.assertEqual([c.market_id for c in changes], [1, 2])
        self.assertEqual(changes[0].current_bet_type, "open")
        self.assertTrue(changes[0].betting_allowed)
        self.assertIsNone(changes[1].current_bet_type)
        self.assertFalse(changes[1].betting_allowed)

    def test_only_transitions_are_reported(self) -> None:
        source = FakeSource({1: ["open_betting", "open_betting", "close_betting"]})
        watcher = MarketWatcher(self._make_settings(), source, markets=[1])

        first = asyncio.run(watcher.poll())
        second = asyncio.run(watcher.poll())
        third = asyncio.run(watcher.poll())

        self.assertEqual(len(first), 1)
        self.assertEqual(second, [])
        self.assertEqual(len(third), 1)
        self.assertEqual(third[0].previous, "open_betting")
        self.assertEqual(third[0].current, "close_betting")
        self.assertEqual(third[0].current_bet_type, "close")
        self.assertEqual(watcher.last_status, {1: "close_betting"})

    def test_unknown_status_is_not_bettable(self) -> None:
        source = FakeSource({1: ["suspended"]})
        watcher = MarketWatcher(self._make_settings(), source, markets=[1])

        changes = asyncio.run(watcher.poll())

        self.assertEqual(changes[0].current, "suspended")
        self.assertFalse(changes[0].betting_allowed)
        self.assertIsNone(changes[0].current_bet_type)

    def test_failed_market_does_not_stop_others(self) -> None:
        source = FakeSource({1: [RuntimeError("boom")], 2: ["close_betting"]})
        watcher = MarketWatcher(self._make_settings(), source)

        with self.assertLogs("matka.feed", level="ERROR"):
            changes = asyncio.run(watcher.poll())

        self.assertEqual([c.market_id for c in changes], [2])
        self.assertNotIn(1, watcher.last_status)


if __name__ == "__main__":
    unittest.main()
