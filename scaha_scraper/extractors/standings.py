"""Division standings extraction."""

from __future__ import annotations

from ..logging import logger
from ..models import TeamStats
from ..utils.html_parsing import find_table_by_headers, iter_data_rows, parse_html
from ..utils.parsing import parse_int_or_zero

# GP, W, L, T, Points, GF, GA, GD
_STAT_COLUMNS = 8
_MIN_CELLS = 1 + _STAT_COLUMNS


def _is_label(text: str) -> bool:
    # Header echo or a "Select ..." placeholder; team names may contain "select"
    return text == "Team" or text.startswith("Select")


def _team_offset(cells: list[str]) -> int | None:
    """Index of the team-name cell, or None if the row does not qualify.

    Some renderings put a numeric rank column before the team name.
    """
    if len(cells) > _MIN_CELLS and cells[0].strip().isdigit():
        offset = 1
    else:
        offset = 0
    if len(cells) - offset < _MIN_CELLS:
        return None
    team = cells[offset]
    if not team or _is_label(team):
        return None
    return offset


def extract_standings(html: str) -> list[TeamStats]:
    """Parse every qualifying standings row in a page or fragment."""
    soup = parse_html(html)
    table = find_table_by_headers(soup, "team", "gp")
    root = table if table is not None else soup

    teams: list[TeamStats] = []
    skipped = 0
    for cells in iter_data_rows(root):
        offset = _team_offset(cells)
        if offset is None:
            skipped += 1
            continue
        gp, w, l, t, points, gf, ga, gd = (
            parse_int_or_zero(cell) for cell in cells[offset + 1 : offset + 1 + _STAT_COLUMNS]
        )
        teams.append(
            TeamStats(team=cells[offset], gp=gp, w=w, l=l, t=t, points=points, gf=gf, ga=ga, gd=gd)
        )

    logger.info("standings_extracted", teams=len(teams), skipped_rows=skipped, by_header=table is not None)
    return teams
