from __future__ import annotations

from flask import Blueprint, jsonify, request

from ..rules.market_status import (
    allowed_bet_types,
    get_current_bet_type,
    is_bet_type_allowed,
    is_betting_allowed,
)
from ..rules.panna import (
    PannaKind,
    classify_panna,
    filter_pannas_by_digits,
    find_valid_numbers,
    jodi_family,
    panna_digit_sum,
    panna_numbers,
)
from ..schemas import (
    EligibilityRequest,
    EligibilityResponse,
    PannaFilterRequest,
    PannaListResponse,
    PannaMatchRequest,
)

bp = Blueprint("rules", __name__)


@bp.post("/rules/eligibility")
def eligibility():
    payload = request.get_json(force=True, silent=True) or {}
    data = EligibilityRequest(**payload)
    status = data.market_status
    current = get_current_bet_type(status)
    response = EligibilityResponse(
        bet_type_allowed=is_bet_type_allowed(data.bet_type, status),
        betting_allowed=is_betting_allowed(status),
        current_bet_type=current.value if current else None,
        allowed_bet_types=[kind.value for kind in allowed_bet_types(status)],
    )
    return jsonify(response.model_dump())


@bp.post("/pannas/match")
def match_pannas():
    payload = request.get_json(force=True, silent=True) or {}
    data = PannaMatchRequest(**payload)
    valid = data.valid_numbers if data.valid_numbers is not None else panna_numbers(data.kind)
    response = PannaListResponse(digits=data.digits, pannas=find_valid_numbers(data.digits, valid))
    return jsonify(response.model_dump())


@bp.post("/pannas/filter")
def filter_pannas():
    payload = request.get_json(force=True, silent=True) or {}
    data = PannaFilterRequest(**payload)
    response = PannaListResponse(
        digits=data.digits, pannas=filter_pannas_by_digits(data.digits, data.kinds)
    )
    return jsonify(response.model_dump())


@bp.get("/pannas/table/<kind>")
def panna_table(kind: str):
    try:
        panna_kind = PannaKind(kind)
    except ValueError:
        return jsonify({"error": f"unknown panna kind: {kind}"}), 404
    return jsonify([str(n).zfill(3) for n in panna_numbers(panna_kind)])


@bp.get("/pannas/classify/<value>")
def classify(value: str):
    kind = classify_panna(value)
    return jsonify(
        {
            "value": value,
            "kind": kind.value if kind else None,
            "digit_sum": panna_digit_sum(value),
        }
    )


@bp.get("/pannas/family/<int:jodi>")
def family(jodi: int):
    members = jodi_family(jodi)
    if not members:
        return jsonify({"error": "jodi must be between 00 and 99"}), 400
    return jsonify({"jodi": jodi, "family": [str(n).zfill(2) for n in members]})
