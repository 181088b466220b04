"""Keystroke filters for the numeric fields of the recording form."""
from __future__ import annotations

import string
from typing import Optional


def filter_integer_input(text: Optional[str]) -> str:
    """Keep digits only."""
    if not text:
        return ""
    return "".join(ch for ch in text if ch in string.digits)


def filter_decimal_input(text: Optional[str]) -> str:
    """Keep digits and the first decimal point; later points are dropped."""
    if not text:
        return ""
    kept = []
    seen_point = False
    for ch in text:
        if ch == ".":
            if seen_point:
                continue
            seen_point = True
            kept.append(ch)
        elif ch in string.digits:
            kept.append(ch)
    return "".join(kept)


def parse_speed(text: Optional[str]) -> Optional[int]:
    cleaned = filter_integer_input(text)
    if not cleaned:
        return None
    return int(cleaned)


def parse_time(text: Optional[str]) -> Optional[float]:
    cleaned = filter_decimal_input(text)
    try:
        return float(cleaned) if cleaned else None
    except ValueError:
        # A lone "." survives filtering but is not a number.
        return None


__all__ = ["filter_decimal_input", "filter_integer_input", "parse_speed", "parse_time"]
