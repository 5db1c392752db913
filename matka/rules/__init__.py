from .betting_window import (
    WindowCheck,
    check_betting_window,
    derive_market_status,
    now_in_market_timezone,
    time_until_next_betting,
)
from .games import GAMES, GameRule, NumberKind, get_game, is_valid_number
from .market_status import (
    BetType,
    MarketStatus,
    MarketStatusSnapshot,
    NextEvent,
    allowed_bet_types,
    get_current_bet_type,
    is_bet_type_allowed,
    is_betting_allowed,
)
from .panna import (
    DOUBLE_PANNA,
    SINGLE_PANNA,
    TRIPLE_PANNA,
    PannaKind,
    classify_panna,
    filter_pannas_by_digits,
    find_valid_numbers,
    jodi_family,
    motor_pannas,
    panna_digit_sum,
    panna_numbers,
)

__all__ = [
    "BetType",
    "DOUBLE_PANNA",
    "GAMES",
    "GameRule",
    "MarketStatus",
    "MarketStatusSnapshot",
    "NextEvent",
    "NumberKind",
    "PannaKind",
    "SINGLE_PANNA",
    "TRIPLE_PANNA",
    "WindowCheck",
    "allowed_bet_types",
    "check_betting_window",
    "classify_panna",
    "derive_market_status",
    "filter_pannas_by_digits",
    "find_valid_numbers",
    "get_current_bet_type",
    "get_game",
    "is_bet_type_allowed",
    "is_betting_allowed",
    "is_valid_number",
    "jodi_family",
    "motor_pannas",
    "now_in_market_timezone",
    "panna_digit_sum",
    "panna_numbers",
    "time_until_next_betting",
]
