"""Resolution of free-text queries against dropdown options."""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from ..models import SelectOption
from ..normalization import normalize_name

_REGULAR_SEASON = re.compile(r"regular season", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def _dedupe(queries: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for query in queries:
        query = query.strip()
        if query and query.lower() not in seen:
            seen.add(query.lower())
            result.append(query)
    return result


def season_query_variants(season: str) -> list[str]:
    """Spellings of a season query: 2024-25 also tries 2024/25 and "SCAHA 2024/25 Season"."""
    normalized = _WHITESPACE.sub(" ", season.replace("-", "/")).strip()
    return _dedupe([season, normalized, f"SCAHA {normalized}", f"SCAHA {normalized} Season"])


def schedule_query_variants(schedule: str) -> list[str]:
    """Try the "Regular Season" spelling first, then the bare division name."""
    bare = _WHITESPACE.sub(" ", _REGULAR_SEASON.sub("", schedule)).strip()
    return _dedupe([f"{bare} Regular Season", schedule, f"{bare} Season", bare])


def find_option(
    options: Sequence[SelectOption],
    query: str,
    *,
    match_normalized: bool = False,
) -> SelectOption | None:
    """Best option for a query: exact label, then label substring (case-insensitive).

    With ``match_normalized`` the same two passes are repeated on names with
    punctuation stripped, so "Jr Kings" resolves "Jr. Kings (1)".
    """
    wanted = query.strip().lower()
    if not wanted:
        return None

    for option in options:
        if option.label.strip().lower() == wanted:
            return option
    for option in options:
        if wanted in option.label.lower():
            return option

    if match_normalized:
        normalized = normalize_name(query)
        if not normalized:
            return None
        for option in options:
            if normalize_name(option.label) == normalized:
                return option
        for option in options:
            if normalized in normalize_name(option.label):
                return option
    return None


def resolve_option(
    options: Sequence[SelectOption],
    queries: Sequence[str],
    *,
    match_normalized: bool = False,
) -> SelectOption | None:
    """First option matched by any query variant, in variant order."""
    for query in queries:
        match = find_option(options, query, match_normalized=match_normalized)
        if match is not None:
            return match
    return None
