"""
Generic, format-agnostic parsing utilities.

This module must NOT depend on format-specific libraries (like BeautifulSoup)
so cells from HTML tables and CSV exports go through the same coercion.
"""

from __future__ import annotations

import math
import re

SCORE_SENTINEL = "--"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_int(value: str | None) -> int | None:
    """Parse the leading integer of a cell ("12 GP" -> 12, "3.5" -> 3)."""
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def parse_int_or_zero(value: str | None) -> int:
    """Parse a stat cell, defaulting missing or non-numeric values to 0."""
    parsed = parse_int(value)
    return parsed if parsed is not None else 0


def parse_float(value: str | None) -> float | None:
    """Parse the leading decimal of a cell, returning None for non-finite results."""
    if value is None:
        return None
    match = _LEADING_FLOAT.match(str(value))
    if not match:
        return None
    parsed = float(match.group(1))
    if not math.isfinite(parsed):
        return None
    return parsed


def parse_score(value: str | None) -> int | str:
    """Parse a game score, mapping blank or "--" (unplayed) to the sentinel."""
    trimmed = (value or "").strip()
    if trimmed in ("", SCORE_SENTINEL):
        return SCORE_SENTINEL
    parsed = parse_int(trimmed)
    return parsed if parsed is not None else SCORE_SENTINEL
