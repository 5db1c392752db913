from __future__ import annotations

import datetime as dt

from flask import Blueprint, jsonify, request

from ..config import load_settings
from ..rules.betting_window import now_in_market_timezone
from ..rules.market_status import allowed_bet_types, get_current_bet_type, is_betting_allowed
from ..schemas import MarketResponse, MarketStatusResponse, ResultResponse
from ..services.markets import MarketNotFound, MarketRepository
from ..services.results import ResultRepository

bp = Blueprint("markets", __name__)
market_repo = MarketRepository()
result_repo = ResultRepository()


@bp.get("")
def list_markets():
    active_only = request.args.get("active", "0").lower() in {"1", "true", "yes"}
    markets = market_repo.list_markets(active_only=active_only)
    return jsonify([MarketResponse(**m.to_dict()).model_dump() for m in markets])


@bp.get("/<int:market_id>")
def get_market(market_id: int):
    market = market_repo.get_market(market_id)
    if not market:
        return jsonify({"error": "market not found"}), 404
    return jsonify(MarketResponse(**market.to_dict()).model_dump())


@bp.get("/<int:market_id>/status")
def get_market_status(market_id: int):
    try:
        snapshot = market_repo.market_status(market_id)
    except MarketNotFound as exc:
        return jsonify({"error": str(exc)}), 404

    current = get_current_bet_type(snapshot)
    response = MarketStatusResponse(
        market_id=market_id,
        current_bet_type=current.value if current else None,
        betting_allowed=is_betting_allowed(snapshot),
        allowed_bet_types=[kind.value for kind in allowed_bet_types(snapshot)],
        **snapshot.to_dict(),
    )
    return jsonify(response.model_dump())


@bp.get("/<int:market_id>/result")
def get_market_result(market_id: int):
    raw_date = request.args.get("date")
    if raw_date:
        try:
            result_date = dt.date.fromisoformat(raw_date)
        except ValueError:
            return jsonify({"error": f"invalid date: {raw_date}"}), 400
    else:
        result_date = now_in_market_timezone(load_settings().market.timezone).date()

    result = result_repo.get_result(market_id, result_date)
    if result is None:
        return jsonify({"error": f"no result declared for {result_date}"}), 404
    return jsonify(ResultResponse(**result.to_dict()).model_dump())
