from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import IntegrityError

from ..config import load_settings
from ..schemas import (
    CreditRequest,
    MarketActiveRequest,
    MarketCreateRequest,
    MarketResponse,
    PlayerCreateRequest,
    ResultDeclarationRequest,
    ResultResponse,
)
from ..rules.market_status import BetType
from ..services.markets import MarketNotFound, MarketRepository
from ..services.players import PlayerRepository
from ..services.results import ResultRejected, ResultRepository

bp = Blueprint("admin", __name__)
market_repo = MarketRepository()
player_repo = PlayerRepository()
result_repo = ResultRepository()


def _require_admin() -> bool:
    settings = load_settings()
    api_key = settings.admin_api_key
    if api_key:
        provided = request.headers.get("X-Admin-Token")
        if provided != api_key:
            return False
    return True


@bp.before_request
def verify_admin():
    if not _require_admin():
        return jsonify({"error": "unauthorized"}), 401
    return None


@bp.post("/markets")
def create_market():
    payload = request.get_json(force=True, silent=True) or {}
    data = MarketCreateRequest(**payload)
    if market_repo.get_by_name(data.name) is not None:
        return jsonify({"error": f"market {data.name} already exists"}), 409

    market = market_repo.create_market(
        name=data.name,
        open_time=data.open_time,
        close_time=data.close_time,
        created_by=data.created_by,
    )
    return jsonify(MarketResponse(**market.to_dict()).model_dump()), 201


@bp.post("/markets/<int:market_id>/active")
def set_market_active(market_id: int):
    payload = request.get_json(force=True, silent=True) or {}
    data = MarketActiveRequest(**payload)
    try:
        market = market_repo.set_active(market_id, data.is_active)
    except MarketNotFound as exc:
        return jsonify({"error": str(exc)}), 404
    return jsonify(MarketResponse(**market.to_dict()).model_dump())


@bp.post("/markets/<int:market_id>/result")
def declare_result(market_id: int):
    payload = request.get_json(force=True, silent=True) or {}
    data = ResultDeclarationRequest(**payload)
    try:
        result = result_repo.declare(
            market_id,
            BetType(data.half),
            data.panna,
            result_date=data.result_date,
            declared_by=data.declared_by,
        )
    except MarketNotFound as exc:
        return jsonify({"error": str(exc)}), 404
    except ResultRejected as exc:
        return jsonify({"error": exc.message}), exc.status_code
    return jsonify(ResultResponse(**result.to_dict()).model_dump()), 201


@bp.post("/players")
def create_player():
    payload = request.get_json(force=True, silent=True) or {}
    data = PlayerCreateRequest(**payload)
    try:
        player = player_repo.create_player(data.username, data.balance)
    except IntegrityError:
        current_app.logger.warning("Duplicate player username: %s", data.username)
        return jsonify({"error": f"player {data.username} already exists"}), 409
    return jsonify(player.to_dict()), 201


@bp.post("/players/<int:player_id>/credit")
def credit_player(player_id: int):
    payload = request.get_json(force=True, silent=True) or {}
    data = CreditRequest(**payload)
    player = player_repo.credit(player_id, data.amount)
    if not player:
        return jsonify({"error": "player not found"}), 404
    current_app.logger.info("Credited player %s with %s points", player_id, data.amount)
    return jsonify(player.to_dict())
