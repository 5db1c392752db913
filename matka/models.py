from __future__ import annotations

import datetime as dt
import json
from typing import Dict

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Market(Base):
    __tablename__ = "markets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False, unique=True)
    open_time = Column(String(5), nullable=False)
    close_time = Column(String(5), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_by = Column(String(64), nullable=False, default="admin")
    created_at = Column(DateTime, default=dt.datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "market_id": self.id,
            "name": self.name,
            "open_time": self.open_time,
            "close_time": self.close_time,
            "is_active": self.is_active,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class Player(Base):
    __tablename__ = "players"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(64), nullable=False, unique=True)
    balance = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=dt.datetime.utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "player_id": self.id,
            "username": self.username,
            "balance": self.balance,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class Bet(Base):
    __tablename__ = "bets"

    id = Column(String(16), primary_key=True)
    market_id = Column(Integer, ForeignKey("markets.id"), nullable=False)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False)
    game_type = Column(String(32), nullable=False)
    bet_type = Column(String(8), nullable=False)
    numbers = Column(Text, nullable=False)
    amount = Column(Integer, nullable=False)
    balance_before = Column(Integer, nullable=False)
    balance_after = Column(Integer, nullable=False)
    status = Column(String(16), nullable=False, default="placed")
    created_at = Column(DateTime, default=dt.datetime.utcnow, nullable=False)

    def set_numbers(self, numbers: Dict[str, int]) -> None:
        self.numbers = json.dumps(numbers, sort_keys=True)

    def get_numbers(self) -> Dict[str, int]:
        return json.loads(self.numbers)

    def to_dict(self) -> dict:
        return {
            "bet_id": self.id,
            "market_id": self.market_id,
            "player_id": self.player_id,
            "game_type": self.game_type,
            "bet_type": self.bet_type,
            "numbers": self.get_numbers(),
            "amount": self.amount,
            "balance_before": self.balance_before,
            "balance_after": self.balance_after,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class Result(Base):
    __tablename__ = "results"
    __table_args__ = (UniqueConstraint("market_id", "result_date", name="uq_results_market_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    market_id = Column(Integer, ForeignKey("markets.id"), nullable=False)
    result_date = Column(Date, nullable=False)
    open_panna = Column(String(3), nullable=True)
    open_ank = Column(Integer, nullable=True)
    open_declared_at = Column(DateTime, nullable=True)
    close_panna = Column(String(3), nullable=True)
    close_ank = Column(Integer, nullable=True)
    close_declared_at = Column(DateTime, nullable=True)
    declared_by = Column(String(64), nullable=False, default="admin")

    @property
    def jodi(self):
        if self.open_ank is None or self.close_ank is None:
            return None
        return f"{self.open_ank}{self.close_ank}"

    def to_dict(self) -> dict:
        return {
            "market_id": self.market_id,
            "result_date": self.result_date.isoformat(),
            "open_panna": self.open_panna,
            "open_ank": self.open_ank,
            "close_panna": self.close_panna,
            "close_ank": self.close_ank,
            "jodi": self.jodi,
            "open_declared_at": self.open_declared_at.isoformat() if self.open_declared_at else None,
            "close_declared_at": self.close_declared_at.isoformat() if self.close_declared_at else None,
        }
