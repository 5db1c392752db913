from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, Optional, Tuple

from .market_status import BetType
from .panna import PannaKind, classify_panna, is_ascii_digits


class NumberKind(str, Enum):
    DIGIT = "digit"
    JODI = "jodi"
    PANNA = "panna"
    SANGAM = "sangam"


@dataclass(frozen=True)
class GameRule:
    name: str
    number_kind: NumberKind
    bet_types: FrozenSet[BetType]
    panna_kinds: Tuple[PannaKind, ...] = ()


_OPEN_CLOSE = frozenset({BetType.OPEN, BetType.CLOSE})
_BOTH = frozenset({BetType.BOTH})

GAMES = {
    rule.name: rule
    for rule in (
        GameRule("single", NumberKind.DIGIT, _OPEN_CLOSE),
        GameRule("jodi", NumberKind.JODI, _BOTH),
        GameRule("single_panna", NumberKind.PANNA, _OPEN_CLOSE, (PannaKind.SINGLE,)),
        GameRule("double_panna", NumberKind.PANNA, _OPEN_CLOSE, (PannaKind.DOUBLE,)),
        GameRule("triple_panna", NumberKind.PANNA, _OPEN_CLOSE, (PannaKind.TRIPLE,)),
        GameRule("common_sp", NumberKind.PANNA, _OPEN_CLOSE, (PannaKind.SINGLE,)),
        GameRule("common_dp", NumberKind.PANNA, _OPEN_CLOSE, (PannaKind.DOUBLE,)),
        GameRule(
            "common_sp_dp", NumberKind.PANNA, _OPEN_CLOSE, (PannaKind.SINGLE, PannaKind.DOUBLE)
        ),
        GameRule("sp_motor", NumberKind.PANNA, _OPEN_CLOSE, (PannaKind.SINGLE,)),
        GameRule("dp_motor", NumberKind.PANNA, _OPEN_CLOSE, (PannaKind.DOUBLE,)),
        GameRule(
            "cycle_panna",
            NumberKind.PANNA,
            _OPEN_CLOSE,
            (PannaKind.SINGLE, PannaKind.DOUBLE, PannaKind.TRIPLE),
        ),
        GameRule("family_panel", NumberKind.JODI, _BOTH),
        GameRule("half_bracket", NumberKind.JODI, _BOTH),
        GameRule("full_bracket", NumberKind.JODI, _BOTH),
        GameRule("sangam", NumberKind.SANGAM, _BOTH),
    )
}


def get_game(name: Any) -> Optional[GameRule]:
    if not isinstance(name, str):
        return None
    return GAMES.get(name)


def is_valid_number(rule: GameRule, number: str) -> bool:
    """Check a bet key such as ``"7"``, ``"07"``, ``"128"`` or ``"128-37"``."""
    if rule.number_kind is NumberKind.DIGIT:
        return len(number) == 1 and is_ascii_digits(number)
    if rule.number_kind is NumberKind.JODI:
        return len(number) == 2 and is_ascii_digits(number)
    if rule.number_kind is NumberKind.PANNA:
        return classify_panna(number) in rule.panna_kinds
    if rule.number_kind is NumberKind.SANGAM:
        # half sangam "panna-digit", full sangam "panna-panna"
        parts = number.split("-")
        if len(parts) != 2 or classify_panna(parts[0]) is None:
            return False
        other = parts[1]
        return (len(other) == 1 and is_ascii_digits(other)) or classify_panna(other) is not None
    return False
