from __future__ import annotations

from enum import Enum
from itertools import combinations
from typing import Any, Iterable, List, Optional, Sequence, Tuple


class PannaKind(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"


def _rank(digit: str) -> int:
    # Zero sorts after nine on a panna chart.
    return 10 if digit == "0" else int(digit)


def is_ascii_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()


def _normalize(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        if not 0 <= value <= 999:
            return None
        return str(value).zfill(3)
    if isinstance(value, str) and len(value) == 3 and is_ascii_digits(value):
        return value
    return None


def classify_panna(value: Any) -> Optional[PannaKind]:
    text = _normalize(value)
    if text is None:
        return None
    ranks = [_rank(d) for d in text]
    if ranks != sorted(ranks):
        return None
    distinct = len(set(text))
    if distinct == 3:
        return PannaKind.SINGLE
    if distinct == 2:
        return PannaKind.DOUBLE
    if text == "000":
        return None
    return PannaKind.TRIPLE


def _build_table(kind: PannaKind) -> Tuple[int, ...]:
    return tuple(n for n in range(1000) if classify_panna(n) is kind)


SINGLE_PANNA: Tuple[int, ...] = _build_table(PannaKind.SINGLE)
DOUBLE_PANNA: Tuple[int, ...] = _build_table(PannaKind.DOUBLE)
TRIPLE_PANNA: Tuple[int, ...] = _build_table(PannaKind.TRIPLE)

_TABLES = {
    PannaKind.SINGLE: SINGLE_PANNA,
    PannaKind.DOUBLE: DOUBLE_PANNA,
    PannaKind.TRIPLE: TRIPLE_PANNA,
}


def panna_numbers(kind: PannaKind) -> Tuple[int, ...]:
    return _TABLES[PannaKind(kind)]


def find_valid_numbers(input: Optional[str], valid_numbers: Iterable[int]) -> List[str]:
    """Return the 3-character picks from ``input`` that appear in ``valid_numbers``.

    Picks keep the left-to-right order of the characters they are drawn
    from, so ``"1234"`` yields ``123``, ``124``, ``134`` and ``234``.
    Valid numbers are compared as zero-padded strings (``7`` matches
    ``"007"``). The result is deduplicated and sorted.
    """
    if not input or len(input) < 3:
        return []

    valid = {str(n).zfill(3) for n in valid_numbers}
    found = set()
    for pick in combinations(input, 3):
        candidate = "".join(pick)
        if len(candidate) == 3 and candidate in valid:
            found.add(candidate)
    return sorted(found)


def motor_pannas(digits: Optional[str], kind: PannaKind) -> List[str]:
    return find_valid_numbers(digits, panna_numbers(kind))


def filter_pannas_by_digits(digits: Optional[str], kinds: Sequence[PannaKind]) -> List[str]:
    """Pannas of ``kinds`` that contain at least one character of ``digits``."""
    if not digits:
        return []
    wanted = set(digits)
    result = set()
    for kind in kinds:
        for number in panna_numbers(kind):
            text = str(number).zfill(3)
            if wanted.intersection(text):
                result.add(text)
    return sorted(result)


def jodi_family(value: Any) -> List[int]:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 99:
        return []
    tens, units = divmod(value, 10)
    firsts = {tens, (tens + 5) % 10}
    seconds = {units, (units + 5) % 10}
    members = set()
    for a in firsts:
        for b in seconds:
            members.add(a * 10 + b)
            members.add(b * 10 + a)
    return sorted(members)


def panna_digit_sum(value: Any) -> Optional[int]:
    text = _normalize(value)
    if text is None:
        return None
    return sum(int(d) for d in text) % 10
