import datetime as dt
import unittest

from matka.rules.betting_window import (
    check_betting_window,
    derive_market_status,
    parse_market_time,
    time_until_next_betting,
)
from matka.rules.market_status import MarketStatus, is_bet_type_allowed

IST = dt.timezone(dt.timedelta(hours=5, minutes=30))


def at(hour: int, minute: int) -> dt.datetime:
    return dt.datetime(2025, 3, 14, hour, minute, tzinfo=IST)


class DeriveMarketStatusTests(unittest.TestCase):
    def test_phases_through_the_day(self) -> None:
        expected = [
            (at(9, 0), MarketStatus.CLOSED),
            (at(9, 45), MarketStatus.OPEN_BETTING),
            (at(9, 59), MarketStatus.OPEN_BETTING),
            (at(10, 0), MarketStatus.OPEN_CLOSED),
            (at(10, 44), MarketStatus.OPEN_CLOSED),
            (at(10, 45), MarketStatus.CLOSE_BETTING),
            (at(11, 0), MarketStatus.CLOSED),
            (at(23, 0), MarketStatus.CLOSED),
        ]
        for now, status in expected:
            with self.subTest(now=now):
                self.assertEqual(derive_market_status("10:00", "11:00", now).status, status)

    def test_snapshot_carries_next_event(self) -> None:
        snapshot = derive_market_status("10:00", "11:00", at(9, 50))
        self.assertEqual(snapshot.message, "Open betting is active until 10:00")
        self.assertEqual(snapshot.next_event.type, "open_close")
        self.assertEqual(snapshot.next_event.time, at(10, 0))

        closed = derive_market_status("10:00", "11:00", at(12, 0))
        self.assertIsNone(closed.next_event)
        self.assertEqual(closed.to_dict()["status"], "closed")

    def test_custom_buffer(self) -> None:
        self.assertEqual(
            derive_market_status("10:00", "11:00", at(9, 35), buffer_minutes=30).status,
            MarketStatus.OPEN_BETTING,
        )

    def test_derived_status_feeds_the_evaluator(self) -> None:
        snapshot = derive_market_status("10:00", "11:00", at(9, 50))
        self.assertTrue(is_bet_type_allowed("close", snapshot))
        snapshot = derive_market_status("10:00", "11:00", at(10, 30))
        self.assertFalse(is_bet_type_allowed("close", snapshot))

    def test_invalid_time(self) -> None:
        with self.assertRaises(ValueError):
            parse_market_time("25:00", at(9, 0))
        with self.assertRaises(ValueError):
            parse_market_time("ten", at(9, 0))


class CheckBettingWindowTests(unittest.TestCase):
    def test_before_window(self) -> None:
        check = check_betting_window("open", "10:00", "11:00", at(9, 0))
        self.assertFalse(check.allowed)
        self.assertEqual(check.message, "Betting for open will be available from 09:45")
        self.assertEqual(check.next_bet_time, at(9, 45))

    def test_inside_window(self) -> None:
        self.assertTrue(check_betting_window("close", "10:00", "11:00", at(10, 50)).allowed)

    def test_after_target(self) -> None:
        check = check_betting_window("close", "10:00", "11:00", at(11, 0))
        self.assertFalse(check.allowed)
        self.assertEqual(check.message, "Betting for close has ended at 11:00")
        self.assertIsNone(check.next_bet_time)

    def test_time_until_next_betting(self) -> None:
        self.assertEqual(
            time_until_next_betting("close", "10:00", "11:00", at(10, 0)),
            dt.timedelta(minutes=45),
        )
        self.assertIsNone(time_until_next_betting("open", "10:00", "11:00", at(9, 50)))


if __name__ == "__main__":
    unittest.main()
