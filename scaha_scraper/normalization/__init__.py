"""Team and player name normalization for matching across page renderings.

The same team shows up as "Jr. Kings (1)" in a dropdown, "Jr Kings 1" in a
stats table and "jr kings" in a user query; comparisons are done on a
lower-cased, punctuation-free, whitespace-collapsed form.
"""

from __future__ import annotations

import re
from typing import Sequence, TypeVar

from ..models import GoalieStats, PlayerStats

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")

PlayerT = TypeVar("PlayerT", PlayerStats, GoalieStats)


def normalize_name(name: str) -> str:
    """Lower-case, strip punctuation and collapse whitespace."""
    cleaned = _PUNCTUATION.sub("", name.lower())
    return _WHITESPACE.sub(" ", cleaned).strip()


def team_names_match(name1: str, name2: str) -> bool:
    """Check if two team names match after normalization."""
    return normalize_name(name1) == normalize_name(name2)


def find_player(
    players: Sequence[PlayerT],
    *,
    name: str | None = None,
    number: str | None = None,
) -> PlayerT | None:
    """Look a player up by jersey number or name.

    Numbers are compared as raw strings ("7" never matches "07"). Names try
    an exact normalized match first, then a normalized substring match.
    """
    if number:
        return next((p for p in players if p.number == number), None)

    if name:
        wanted = normalize_name(name)
        if not wanted:
            return None
        exact = next((p for p in players if normalize_name(p.name) == wanted), None)
        if exact is not None:
            return exact
        return next((p for p in players if wanted in normalize_name(p.name)), None)

    return None
