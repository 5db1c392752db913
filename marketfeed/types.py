from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FeedSnapshot:
    """Market status as reported by the matka API.

    ``status`` is kept as the raw string so statuses this client does not
    know about still round-trip; the rule layer treats them as closed.
    """

    market_id: int
    status: str
    message: str = ""
    next_event_type: Optional[str] = None
    next_event_time: Optional[dt.datetime] = None


@dataclass(frozen=True)
class StatusChange:
    market_id: int
    previous: Optional[str]
    current: str
    current_bet_type: Optional[str]
    betting_allowed: bool
