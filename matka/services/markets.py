from __future__ import annotations

import datetime as dt
import logging
from typing import List, Optional

from ..config import load_settings
from ..db import session_scope
from ..models import Market, Result
from ..rules.betting_window import derive_market_status, now_in_market_timezone
from ..rules.market_status import MarketStatus, MarketStatusSnapshot

logger = logging.getLogger("matka.markets")


class MarketNotFound(LookupError):
    def __init__(self, market_id: int) -> None:
        super().__init__(f"market {market_id} not found")
        self.market_id = market_id


class MarketRepository:
    def create_market(
        self, name: str, open_time: str, close_time: str, created_by: str = "admin"
    ) -> Market:
        with session_scope() as session:
            market = Market(
                name=name,
                open_time=open_time,
                close_time=close_time,
                created_by=created_by,
                is_active=True,
            )
            session.add(market)
            session.flush()
            session.refresh(market)
            session.expunge(market)
        logger.info("Market %s created (%s-%s)", name, open_time, close_time)
        return market

    def get_market(self, market_id: int) -> Optional[Market]:
        with session_scope() as session:
            market = session.get(Market, market_id)
            if market:
                session.expunge(market)
            return market

    def get_by_name(self, name: str) -> Optional[Market]:
        with session_scope() as session:
            market = session.query(Market).filter(Market.name == name).one_or_none()
            if market:
                session.expunge(market)
            return market

    def list_markets(self, active_only: bool = False) -> List[Market]:
        with session_scope() as session:
            query = session.query(Market).order_by(Market.open_time, Market.name)
            if active_only:
                query = query.filter(Market.is_active.is_(True))
            markets = query.all()
            for market in markets:
                session.expunge(market)
            return markets

    def set_active(self, market_id: int, is_active: bool) -> Market:
        with session_scope() as session:
            market = session.get(Market, market_id)
            if market is None:
                raise MarketNotFound(market_id)
            market.is_active = is_active
            session.flush()
            session.refresh(market)
            session.expunge(market)
        logger.info("Market %s active=%s", market_id, is_active)
        return market

    def market_status(self, market_id: int, now: Optional[dt.datetime] = None) -> MarketStatusSnapshot:
        market = self.get_market(market_id)
        if market is None:
            raise MarketNotFound(market_id)
        return status_for(market, now)


def status_for(market: Market, now: Optional[dt.datetime] = None) -> MarketStatusSnapshot:
    settings = load_settings()
    if not market.is_active:
        return MarketStatusSnapshot(status=MarketStatus.CLOSED, message="Market is inactive")
    if now is None:
        now = now_in_market_timezone(settings.market.timezone)
    if _close_result_declared(market.id, now.date()):
        return MarketStatusSnapshot(
            status=MarketStatus.RESULT_DECLARED, message="Result declared for today"
        )
    return derive_market_status(
        market.open_time, market.close_time, now, buffer_minutes=settings.market.buffer_minutes
    )


def _close_result_declared(market_id: int, result_date: dt.date) -> bool:
    with session_scope() as session:
        declared = (
            session.query(Result.id)
            .filter(
                Result.market_id == market_id,
                Result.result_date == result_date,
                Result.close_panna.isnot(None),
            )
            .first()
        )
        return declared is not None
