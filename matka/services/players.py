from __future__ import annotations

from typing import Optional

from ..db import session_scope
from ..models import Player


class PlayerRepository:
    def create_player(self, username: str, balance: int = 0) -> Player:
        with session_scope() as session:
            player = Player(username=username, balance=balance)
            session.add(player)
            session.flush()
            session.refresh(player)
            session.expunge(player)
            return player

    def get_player(self, player_id: int) -> Optional[Player]:
        with session_scope() as session:
            player = session.get(Player, player_id)
            if player:
                session.expunge(player)
            return player

    def credit(self, player_id: int, amount: int) -> Optional[Player]:
        with session_scope() as session:
            player = session.get(Player, player_id)
            if not player:
                return None
            player.balance += amount
            session.flush()
            session.refresh(player)
            session.expunge(player)
            return player
