from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .rules.panna import PannaKind, classify_panna


def _validate_hhmm(value: str) -> str:
    parts = value.split(":")
    if len(parts) != 2 or not all(p.isascii() and p.isdigit() and len(p) == 2 for p in parts):
        raise ValueError("Time must use HH:MM format.")
    hours, minutes = int(parts[0]), int(parts[1])
    if hours > 23 or minutes > 59:
        raise ValueError("Time must use HH:MM format.")
    return value


class MarketCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)
    open_time: str = Field(..., description="Open result time, HH:MM in market timezone.")
    close_time: str = Field(..., description="Close result time, HH:MM in market timezone.")
    created_by: str = "admin"

    @field_validator("open_time", "close_time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return _validate_hhmm(value)

    @model_validator(mode="after")
    def validate_order(self) -> "MarketCreateRequest":
        if self.open_time >= self.close_time:
            raise ValueError("open_time must be earlier than close_time.")
        return self


class MarketActiveRequest(BaseModel):
    is_active: bool


class MarketResponse(BaseModel):
    market_id: int
    name: str
    open_time: str
    close_time: str
    is_active: bool


class MarketStatusResponse(BaseModel):
    market_id: int
    status: str
    message: str
    next_event: Optional[Dict[str, Any]] = None
    current_bet_type: Optional[str] = None
    betting_allowed: bool
    allowed_bet_types: List[str]


class PlayerCreateRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    balance: int = Field(0, ge=0)


class CreditRequest(BaseModel):
    amount: int = Field(..., gt=0)


class BetPlacementRequest(BaseModel):
    market_id: int
    player_id: int
    game_type: str
    bet_type: str
    numbers: Dict[str, int] = Field(..., description="Bet number mapped to points staked on it.")
    amount: int = Field(..., gt=0)

    @field_validator("numbers")
    @classmethod
    def validate_numbers(cls, value: Dict[str, int]) -> Dict[str, int]:
        if not value:
            raise ValueError("At least one number is required.")
        for number, points in value.items():
            if points < 0:
                raise ValueError(f"Points for {number} cannot be negative.")
        return value


class BetPlacementResponse(BaseModel):
    bet_id: str
    market_id: int
    player_id: int
    game_type: str
    bet_type: str
    numbers: Dict[str, int]
    amount: int
    balance_before: int
    balance_after: int
    status: str


class EligibilityRequest(BaseModel):
    bet_type: Optional[str] = None
    market_status: Optional[Dict[str, Any]] = None


class EligibilityResponse(BaseModel):
    bet_type_allowed: bool
    betting_allowed: bool
    current_bet_type: Optional[str] = None
    allowed_bet_types: List[str]


class PannaMatchRequest(BaseModel):
    digits: str = ""
    kind: Optional[PannaKind] = None
    valid_numbers: Optional[List[int]] = None

    @model_validator(mode="after")
    def validate_source(self) -> "PannaMatchRequest":
        if (self.kind is None) == (self.valid_numbers is None):
            raise ValueError("Provide exactly one of kind or valid_numbers.")
        return self


class PannaFilterRequest(BaseModel):
    digits: str = ""
    kinds: List[PannaKind] = Field(default_factory=lambda: [PannaKind.SINGLE])


class PannaListResponse(BaseModel):
    digits: str
    pannas: List[str]


class ResultDeclarationRequest(BaseModel):
    half: str = Field(..., description='"open" or "close" result of the market day.')
    panna: str
    result_date: Optional[dt.date] = None
    declared_by: str = "admin"

    @field_validator("half")
    @classmethod
    def validate_half(cls, value: str) -> str:
        if value not in ("open", "close"):
            raise ValueError('half must be "open" or "close".')
        return value

    @field_validator("panna")
    @classmethod
    def validate_panna(cls, value: str) -> str:
        if classify_panna(value) is None:
            raise ValueError(f"{value} is not a valid panna.")
        return value


class ResultResponse(BaseModel):
    market_id: int
    result_date: str
    open_panna: Optional[str] = None
    open_ank: Optional[int] = None
    close_panna: Optional[str] = None
    close_ank: Optional[int] = None
    jodi: Optional[str] = None
    open_declared_at: Optional[str] = None
    close_declared_at: Optional[str] = None
