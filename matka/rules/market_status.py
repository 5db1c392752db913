from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional


class MarketStatus(str, Enum):
    OPEN_BETTING = "open_betting"
    OPEN_CLOSED = "open_closed"
    CLOSE_BETTING = "close_betting"
    CLOSED = "closed"
    RESULT_DECLARED = "result_declared"

    @classmethod
    def parse(cls, value: Any) -> Optional["MarketStatus"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class BetType(str, Enum):
    OPEN = "open"
    CLOSE = "close"
    BOTH = "both"

    @classmethod
    def parse(cls, value: Any) -> Optional["BetType"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class NextEvent:
    type: str
    time: dt.datetime


@dataclass(frozen=True)
class MarketStatusSnapshot:
    """Status of a market at one instant, as served to betting clients."""

    status: Any
    message: str = ""
    next_event: Optional[NextEvent] = None

    def to_dict(self) -> dict:
        status = self.status.value if isinstance(self.status, MarketStatus) else self.status
        return {
            "status": status,
            "message": self.message,
            "next_event": (
                {"type": self.next_event.type, "time": self.next_event.time.isoformat()}
                if self.next_event
                else None
            ),
        }


def _status_of(market_status: Any) -> Optional[MarketStatus]:
    if market_status is None:
        return None
    if isinstance(market_status, Mapping):
        raw = market_status.get("status")
    else:
        raw = getattr(market_status, "status", None)
    return MarketStatus.parse(raw)


def is_bet_type_allowed(bet_type: Any, market_status: Any) -> bool:
    """Return whether ``bet_type`` may be placed against a market in ``market_status``.

    ``close`` bets are accepted during ``open_betting`` as well as
    ``close_betting``; ``open`` and ``both`` only during ``open_betting``.
    Missing or unrecognised inputs are never an error, they are simply not
    allowed.
    """
    kind = BetType.parse(bet_type)
    status = _status_of(market_status)
    if kind is None or status is None:
        return False

    if kind is BetType.OPEN or kind is BetType.BOTH:
        return status is MarketStatus.OPEN_BETTING
    if kind is BetType.CLOSE:
        return status in (MarketStatus.OPEN_BETTING, MarketStatus.CLOSE_BETTING)
    return False


def get_current_bet_type(market_status: Any) -> Optional[BetType]:
    status = _status_of(market_status)
    if status is MarketStatus.OPEN_BETTING:
        return BetType.OPEN
    if status is MarketStatus.CLOSE_BETTING:
        return BetType.CLOSE
    return None


def is_betting_allowed(market_status: Any) -> bool:
    return is_bet_type_allowed(BetType.OPEN, market_status) or is_bet_type_allowed(
        BetType.CLOSE, market_status
    )


def allowed_bet_types(market_status: Any) -> List[BetType]:
    return [kind for kind in BetType if is_bet_type_allowed(kind, market_status)]
