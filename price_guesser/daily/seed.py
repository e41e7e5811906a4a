from __future__ import annotations

from datetime import date
from typing import Optional

_INT32_MASK = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    value &= _INT32_MASK
    return value - 0x100000000 if value & 0x80000000 else value


def date_string(day: date) -> str:
    return f"{day.year}-{day.month}-{day.day}"


def seed_from_string(text: str) -> int:
    # h * 31 + character code, wrapped to signed 32 bits after every step
    h = 0
    for char in text:
        h = _to_int32(h * 31 + ord(char))
    return abs(h)


def date_seed(day: Optional[date] = None) -> int:
    return seed_from_string(date_string(day or date.today()))


def today_key(day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"{day.year}-{day.month:02d}-{day.day:02d}"
