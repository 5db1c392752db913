from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Optional
from zoneinfo import ZoneInfo

from .market_status import BetType, MarketStatus, MarketStatusSnapshot, NextEvent

DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_BUFFER_MINUTES = 15


@dataclass(frozen=True)
class WindowCheck:
    allowed: bool
    message: Optional[str] = None
    next_bet_time: Optional[dt.datetime] = None


def now_in_market_timezone(tz_name: str = DEFAULT_TIMEZONE) -> dt.datetime:
    return dt.datetime.now(ZoneInfo(tz_name))


def parse_market_time(value: str, on: dt.datetime) -> dt.datetime:
    """Place an ``HH:MM`` market time on the calendar day of ``on``."""
    try:
        hours_text, minutes_text = value.strip().split(":")
        hours, minutes = int(hours_text), int(minutes_text)
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Invalid market time: {value!r}") from exc
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Invalid market time: {value!r}")
    return on.replace(hour=hours, minute=minutes, second=0, microsecond=0)


def _fmt(moment: dt.datetime) -> str:
    return moment.strftime("%H:%M")


def derive_market_status(
    open_time: str,
    close_time: str,
    now: dt.datetime,
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES,
) -> MarketStatusSnapshot:
    buffer = dt.timedelta(minutes=buffer_minutes)
    open_at = parse_market_time(open_time, now)
    close_at = parse_market_time(close_time, now)
    open_betting_start = open_at - buffer
    close_betting_start = close_at - buffer

    if open_betting_start <= now < open_at:
        return MarketStatusSnapshot(
            status=MarketStatus.OPEN_BETTING,
            message=f"Open betting is active until {_fmt(open_at)}",
            next_event=NextEvent(type="open_close", time=open_at),
        )
    if open_at <= now < close_betting_start:
        return MarketStatusSnapshot(
            status=MarketStatus.OPEN_CLOSED,
            message=f"Open betting closed. Close betting starts at {_fmt(close_betting_start)}",
            next_event=NextEvent(type="close_betting_start", time=close_betting_start),
        )
    if close_betting_start <= now < close_at:
        return MarketStatusSnapshot(
            status=MarketStatus.CLOSE_BETTING,
            message=f"Close betting is active until {_fmt(close_at)}",
            next_event=NextEvent(type="close_close", time=close_at),
        )
    return MarketStatusSnapshot(status=MarketStatus.CLOSED, message="Market is closed for today")


def _target(bet_type: Any, open_time: str, close_time: str, now: dt.datetime):
    kind = BetType.parse(bet_type)
    if kind is BetType.CLOSE:
        return "close", parse_market_time(close_time, now)
    return "open", parse_market_time(open_time, now)


def check_betting_window(
    bet_type: Any,
    open_time: str,
    close_time: str,
    now: dt.datetime,
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES,
) -> WindowCheck:
    label, target = _target(bet_type, open_time, close_time, now)
    window_start = target - dt.timedelta(minutes=buffer_minutes)

    if now < window_start:
        return WindowCheck(
            allowed=False,
            message=f"Betting for {label} will be available from {_fmt(window_start)}",
            next_bet_time=window_start,
        )
    if now >= target:
        return WindowCheck(allowed=False, message=f"Betting for {label} has ended at {_fmt(target)}")
    return WindowCheck(allowed=True)


def time_until_next_betting(
    bet_type: Any,
    open_time: str,
    close_time: str,
    now: dt.datetime,
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES,
) -> Optional[dt.timedelta]:
    _, target = _target(bet_type, open_time, close_time, now)
    window_start = target - dt.timedelta(minutes=buffer_minutes)
    if now < window_start:
        return window_start - now
    return None
