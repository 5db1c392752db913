from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from ..config import load_settings
from ..db import session_scope
from ..models import Market, Result
from ..rules.betting_window import now_in_market_timezone
from ..rules.market_status import BetType
from ..rules.panna import classify_panna, panna_digit_sum
from .markets import MarketNotFound

logger = logging.getLogger("matka.results")


class ResultRejected(ValueError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ResultRepository:
    def declare(
        self,
        market_id: int,
        half: BetType,
        panna: str,
        result_date: Optional[dt.date] = None,
        declared_by: str = "admin",
    ) -> Result:
        """Record the open or close panna of ``market_id`` for one market day.

        The ank is the last digit of the panna's digit sum. A close result
        needs the open result of the same day, and neither half can be
        declared twice.
        """
        if half not in (BetType.OPEN, BetType.CLOSE):
            raise ResultRejected('Result half must be "open" or "close"')
        if classify_panna(panna) is None:
            raise ResultRejected(f"{panna} is not a valid panna")
        ank = panna_digit_sum(panna)
        if result_date is None:
            result_date = now_in_market_timezone(load_settings().market.timezone).date()

        with session_scope() as session:
            if session.get(Market, market_id) is None:
                raise MarketNotFound(market_id)
            result = (
                session.query(Result)
                .filter(Result.market_id == market_id, Result.result_date == result_date)
                .one_or_none()
            )
            if result is None:
                result = Result(market_id=market_id, result_date=result_date, declared_by=declared_by)
                session.add(result)

            declared_at = dt.datetime.utcnow()
            if half is BetType.OPEN:
                if result.open_panna is not None:
                    raise ResultRejected(f"Open result already declared for {result_date}", 409)
                result.open_panna, result.open_ank, result.open_declared_at = panna, ank, declared_at
            else:
                if result.open_panna is None:
                    raise ResultRejected(f"Open result for {result_date} must be declared first", 409)
                if result.close_panna is not None:
                    raise ResultRejected(f"Close result already declared for {result_date}", 409)
                result.close_panna, result.close_ank, result.close_declared_at = panna, ank, declared_at
            session.flush()
            session.refresh(result)
            session.expunge(result)

        logger.info("Market %s %s result %s-%s declared for %s", market_id, half.value, panna, ank, result_date)
        return result

    def get_result(self, market_id: int, result_date: dt.date) -> Optional[Result]:
        with session_scope() as session:
            result = (
                session.query(Result)
                .filter(Result.market_id == market_id, Result.result_date == result_date)
                .one_or_none()
            )
            if result:
                session.expunge(result)
            return result
