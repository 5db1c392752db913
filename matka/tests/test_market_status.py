import unittest
from types import SimpleNamespace

from matka.rules.market_status import (
    BetType,
    MarketStatus,
    MarketStatusSnapshot,
    allowed_bet_types,
    get_current_bet_type,
    is_bet_type_allowed,
    is_betting_allowed,
)


class IsBetTypeAllowedTests(unittest.TestCase):
    def test_missing_status_rejects_every_bet_type(self) -> None:
        for bet_type in ("open", "close", "both"):
            self.assertFalse(is_bet_type_allowed(bet_type, None))

    def test_open_only_during_open_betting(self) -> None:
        self.assertTrue(is_bet_type_allowed("open", {"status": "open_betting"}))
        self.assertFalse(is_bet_type_allowed("open", {"status": "close_betting"}))

    def test_close_during_open_and_close_betting(self) -> None:
        self.assertTrue(is_bet_type_allowed("close", {"status": "open_betting"}))
        self.assertTrue(is_bet_type_allowed("close", {"status": "close_betting"}))
        self.assertFalse(is_bet_type_allowed("close", {"status": "result_declared"}))

    def test_both_only_during_open_betting(self) -> None:
        self.assertTrue(is_bet_type_allowed("both", {"status": "open_betting"}))
        self.assertFalse(is_bet_type_allowed("both", {"status": "close_betting"}))

    def test_unknown_inputs_are_not_allowed(self) -> None:
        self.assertFalse(is_bet_type_allowed("jackpot", {"status": "open_betting"}))
        self.assertFalse(is_bet_type_allowed("open", {"status": "OPEN_BETTING"}))
        self.assertFalse(is_bet_type_allowed("open", {}))
        self.assertFalse(is_bet_type_allowed(None, {"status": "open_betting"}))
        self.assertFalse(is_bet_type_allowed("open", {"status": 3}))

    def test_accepts_objects_and_enum_members(self) -> None:
        snapshot = MarketStatusSnapshot(status=MarketStatus.CLOSE_BETTING)
        self.assertTrue(is_bet_type_allowed(BetType.CLOSE, snapshot))
        self.assertFalse(is_bet_type_allowed(BetType.OPEN, snapshot))
        self.assertTrue(is_bet_type_allowed("open", SimpleNamespace(status="open_betting")))


class DerivedQueryTests(unittest.TestCase):
    def test_current_bet_type(self) -> None:
        self.assertEqual(get_current_bet_type({"status": "open_betting"}), BetType.OPEN)
        self.assertEqual(get_current_bet_type({"status": "close_betting"}), BetType.CLOSE)
        self.assertIsNone(get_current_bet_type({"status": "anything_else"}))
        self.assertIsNone(get_current_bet_type(None))

    def test_betting_allowed(self) -> None:
        self.assertTrue(is_betting_allowed({"status": "close_betting"}))
        self.assertTrue(is_betting_allowed({"status": "open_betting"}))
        self.assertFalse(is_betting_allowed({"status": "result_declared"}))
        self.assertFalse(is_betting_allowed(None))

    def test_allowed_bet_types(self) -> None:
        self.assertEqual(
            allowed_bet_types({"status": "open_betting"}),
            [BetType.OPEN, BetType.CLOSE, BetType.BOTH],
        )
        self.assertEqual(allowed_bet_types({"status": "close_betting"}), [BetType.CLOSE])
        self.assertEqual(allowed_bet_types({"status": "closed"}), [])

    def test_repeated_calls_agree(self) -> None:
        status = {"status": "close_betting"}
        self.assertEqual(is_bet_type_allowed("close", status), is_bet_type_allowed("close", status))
        self.assertEqual(get_current_bet_type(status), get_current_bet_type(status))
        self.assertEqual(status, {"status": "close_betting"})

    def test_enum_values_are_wire_strings(self) -> None:
        self.assertEqual(MarketStatus.parse("open_closed"), MarketStatus.OPEN_CLOSED)
        self.assertIsNone(MarketStatus.parse("halted"))
        self.assertEqual(MarketStatus.OPEN_BETTING, "open_betting")


if __name__ == "__main__":
    unittest.main()
