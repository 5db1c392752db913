from __future__ import annotations

import datetime as dt
import logging
import secrets
from typing import List, Optional

from sqlalchemy import desc, select, update

from ..config import load_settings
from ..db import session_scope
from ..models import Bet, Player
from ..rules.betting_window import check_betting_window, now_in_market_timezone
from ..rules.games import get_game, is_valid_number
from ..rules.market_status import BetType, MarketStatus, is_bet_type_allowed
from ..schemas import BetPlacementRequest
from .markets import MarketRepository, status_for

logger = logging.getLogger("matka.bets")


class BetRejected(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        next_bet_time: Optional[dt.datetime] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.next_bet_time = next_bet_time

    def to_dict(self) -> dict:
        payload = {"error": self.message}
        if self.next_bet_time is not None:
            payload["next_bet_time"] = self.next_bet_time.isoformat()
        return payload


class BetService:
    def __init__(self, markets: Optional[MarketRepository] = None) -> None:
        self._markets = markets or MarketRepository()

    def place_bet(self, request: BetPlacementRequest, now: Optional[dt.datetime] = None) -> Bet:
        settings = load_settings()
        market = self._markets.get_market(request.market_id)
        if market is None:
            raise BetRejected("Market not found", status_code=404)
        if not market.is_active:
            raise BetRejected(f"Market {market.name} is not active")

        game = get_game(request.game_type)
        if game is None:
            raise BetRejected(f"Unknown game type: {request.game_type}")
        bet_type = BetType.parse(request.bet_type)
        if bet_type is None:
            raise BetRejected('Invalid bet_type. Must be one of "open", "close" or "both"')
        if bet_type not in game.bet_types:
            allowed = ", ".join(sorted(b.value for b in game.bet_types))
            raise BetRejected(f"{game.name} accepts bet types: {allowed}")

        if now is None:
            now = now_in_market_timezone(settings.market.timezone)
        snapshot = status_for(market, now)
        if snapshot.status is MarketStatus.RESULT_DECLARED:
            raise BetRejected(snapshot.message)
        if not is_bet_type_allowed(bet_type, snapshot):
            window = check_betting_window(
                bet_type,
                market.open_time,
                market.close_time,
                now,
                buffer_minutes=settings.market.buffer_minutes,
            )
            raise BetRejected(window.message or snapshot.message, next_bet_time=window.next_bet_time)

        if not any(points > 0 for points in request.numbers.values()):
            raise BetRejected("At least one number must have a bet amount greater than 0")
        invalid = sorted(n for n in request.numbers if not is_valid_number(game, n))
        if invalid:
            raise BetRejected(f"Invalid numbers for {game.name}: {', '.join(invalid)}")

        calculated = sum(request.numbers.values())
        if calculated != request.amount:
            raise BetRejected(f"Amount mismatch. Calculated: {calculated}, Provided: {request.amount}")

        with session_scope() as session:
            debited = session.execute(
                update(Player)
                .where(Player.id == request.player_id, Player.balance >= request.amount)
                .values(balance=Player.balance - request.amount)
            )
            if debited.rowcount == 0:
                balance = session.execute(
                    select(Player.balance).where(Player.id == request.player_id)
                ).scalar_one_or_none()
                if balance is None:
                    raise BetRejected("Player not found", status_code=404)
                raise BetRejected(
                    f"Insufficient balance. You have {balance} but need {request.amount}"
                )

            balance_after = session.execute(
                select(Player.balance).where(Player.id == request.player_id)
            ).scalar_one()
            bet = Bet(
                id=secrets.token_hex(8),
                market_id=market.id,
                player_id=request.player_id,
                game_type=game.name,
                bet_type=bet_type.value,
                amount=request.amount,
                balance_before=balance_after + request.amount,
                balance_after=balance_after,
                status="placed",
            )
            bet.set_numbers({n: p for n, p in request.numbers.items() if p > 0})
            session.add(bet)
            session.flush()
            session.refresh(bet)
            session.expunge(bet)

        logger.info(
            "Bet placed: player %s, market %s, amount %s, game %s, bet type %s",
            request.player_id,
            market.id,
            request.amount,
            game.name,
            bet_type.value,
        )
        return bet

    def list_bets(
        self, player_id: Optional[int] = None, market_id: Optional[int] = None
    ) -> List[dict]:
        with session_scope() as session:
            query = session.query(Bet).order_by(desc(Bet.created_at))
            if player_id is not None:
                query = query.filter(Bet.player_id == player_id)
            if market_id is not None:
                query = query.filter(Bet.market_id == market_id)
            return [bet.to_dict() for bet in query.all()]
