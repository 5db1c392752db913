import asyncio
import datetime as dt
import os
import unittest
from unittest import mock

import requests

import marketfeed.config as config_module
from marketfeed.datasource.http_api import HttpMarketStatusSource, HttpMarketStatusSourceConfig
from marketfeed.service import parse_args


def _response(payload, status_code: int = 200) -> mock.Mock:
    resp = mock.Mock()
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    else:
        resp.raise_for_status.return_value = None
    return resp


class HttpMarketStatusSourceTests(unittest.TestCase):
    def _source(self, response) -> tuple:
        session = mock.Mock(spec=requests.Session)
        session.get.return_value = response
        config = HttpMarketStatusSourceConfig(base_url="http://matka.test/", timeout_seconds=3)
        return HttpMarketStatusSource(config, session=session), session

    def test_parses_status_payload(self) -> None:
        source, session = self._source(
            _response(
                {
                    "market_id": 7,
                    "status": "close_betting",
                    "message": "Close betting is active until 11:00",
                    "next_event": {"type": "close_close", "time": "2025-03-14T11:00:00+05:30"},
                }
            )
        )

        snapshot = asyncio.run(source.fetch_status(7))

        session.get.assert_called_once_with("http://matka.test/markets/7/status", timeout=3)
        self.assertEqual(snapshot.status, "close_betting")
        self.assertEqual(snapshot.next_event_type, "close_close")
        self.assertEqual(
            snapshot.next_event_time,
            dt.datetime(2025, 3, 14, 11, 0, tzinfo=dt.timezone(dt.timedelta(hours=5, minutes=30))),
        )

    def test_missing_status_is_rejected(self) -> None:
        source, _ = self._source(_response({"message": "?"}))
        with self.assertRaises(ValueError):
            asyncio.run(source.fetch_status(1))

    def test_non_object_payload_is_rejected(self) -> None:
        source, _ = self._source(_response(["open_betting"]))
        with self.assertRaises(ValueError):
            asyncio.run(source.fetch_status(1))

    def test_http_errors_propagate(self) -> None:
        source, _ = self._source(_response({"error": "market not found"}, status_code=404))
        with self.assertRaises(requests.HTTPError):
            asyncio.run(source.fetch_status(1))

    def test_close_closes_session(self) -> None:
        source, session = self._source(_response({}))
        asyncio.run(source.close())
        session.close.assert_called_once_with()


class FeedConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        config_module.load_config.cache_clear()

    def tearDown(self) -> None:
        config_module.load_config.cache_clear()

    def test_load_from_environment(self) -> None:
        env = {
            "MATKA_API_URL": "http://matka.test/",
            "FEED_MARKETS": "1, 4,9",
            "POLL_INTERVAL_SECONDS": "15",
            "RUN_ONCE": "yes",
        }
        with mock.patch.dict(os.environ, env, clear=False):
            settings = config_module.load_from_environment()
        self.assertEqual(settings.api_url, "http://matka.test")
        self.assertEqual(settings.markets, (1, 4, 9))
        self.assertEqual(settings.poll_interval_seconds, 15)
        self.assertTrue(settings.run_once)

    def test_api_url_is_required(self) -> None:
        with mock.patch.dict(os.environ, {"MATKA_API_URL": ""}, clear=False):
            with self.assertRaises(RuntimeError):
                config_module.load_from_environment()

    def test_cli_arguments(self) -> None:
        args = parse_args(["--once", "--market", "3", "--market", "5", "--verbose"])
        self.assertTrue(args.once)
        self.assertEqual(args.market, [3, 5])
        self.assertTrue(args.verbose)


if __name__ == "__main__":
    unittest.main()
