from __future__ import annotations

from flask import Blueprint, jsonify, request

from ..schemas import BetPlacementRequest, BetPlacementResponse
from ..services.bets import BetRejected, BetService

bp = Blueprint("bets", __name__)
bet_service = BetService()


@bp.get("")
def list_bets():
    player_id = request.args.get("player_id", type=int)
    market_id = request.args.get("market_id", type=int)
    return jsonify(bet_service.list_bets(player_id=player_id, market_id=market_id))


@bp.post("")
def place_bet():
    payload = request.get_json(force=True, silent=True) or {}
    data = BetPlacementRequest(**payload)

    try:
        bet = bet_service.place_bet(data)
    except BetRejected as exc:
        return jsonify(exc.to_dict()), exc.status_code

    response = BetPlacementResponse(**bet.to_dict())
    return jsonify(response.model_dump()), 201
