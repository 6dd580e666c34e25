"""Player and goalie stat-table extraction from the stats-central page."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from ..jsf.markup import GOALIES_TABLE_MARKER, PLAYERS_TABLE_MARKER
from ..logging import logger
from ..models import GoalieStats, PlayerStats
from ..normalization import team_names_match
from ..utils.html_parsing import find_table_by_id, get_table_ids_on_page, iter_data_rows, parse_html
from ..utils.parsing import parse_float, parse_int_or_zero

_PLAYER_MIN_CELLS = 8
_GOALIE_MIN_CELLS = 9
_HEADER_NAME = "Name"


def _find_stats_table(soup: BeautifulSoup, table_id: str | None, marker: str) -> Tag | None:
    if table_id:
        table = find_table_by_id(soup, table_id)
        if table is not None:
            return table
    return soup.find("table", id=lambda value: bool(value) and marker in value)


def _qualifies(cells: list[str], min_cells: int) -> bool:
    return len(cells) >= min_cells and bool(cells[0]) and bool(cells[1]) and cells[1] != _HEADER_NAME


def _matches_team(row_team: str, team: str | None) -> bool:
    return team is None or team_names_match(row_team, team)


def _stat_rows(html: str, table_id: str | None, marker: str, kind: str):
    soup = parse_html(html)
    table = _find_stats_table(soup, table_id, marker)
    if table is None:
        logger.warning(
            "stats_table_not_found",
            kind=kind,
            table_id=table_id,
            available_tables=get_table_ids_on_page(soup),
        )
        return []
    return list(iter_data_rows(table))


def extract_player_stats(html: str, table_id: str | None = None, team: str | None = None) -> list[PlayerStats]:
    """Skater rows of the player-totals table, optionally limited to one team."""
    players: list[PlayerStats] = []
    for cells in _stat_rows(html, table_id, PLAYERS_TABLE_MARKER, "players"):
        if not _qualifies(cells, _PLAYER_MIN_CELLS) or not _matches_team(cells[2], team):
            continue
        players.append(
            PlayerStats(
                number=cells[0],
                name=cells[1],
                team=cells[2],
                gp=parse_int_or_zero(cells[3]),
                g=parse_int_or_zero(cells[4]),
                a=parse_int_or_zero(cells[5]),
                pts=parse_int_or_zero(cells[6]),
                pims=parse_int_or_zero(cells[7]),
            )
        )
    logger.info("player_stats_extracted", count=len(players), team=team)
    return players


def extract_goalie_stats(html: str, table_id: str | None = None, team: str | None = None) -> list[GoalieStats]:
    """Goalie rows of the goalie-totals table, optionally limited to one team."""
    goalies: list[GoalieStats] = []
    for cells in _stat_rows(html, table_id, GOALIES_TABLE_MARKER, "goalies"):
        if not _qualifies(cells, _GOALIE_MIN_CELLS) or not _matches_team(cells[2], team):
            continue
        goalies.append(
            GoalieStats(
                number=cells[0],
                name=cells[1],
                team=cells[2],
                gp=parse_int_or_zero(cells[3]),
                mins=parse_int_or_zero(cells[4]),
                shots=parse_int_or_zero(cells[5]),
                saves=parse_int_or_zero(cells[6]),
                sv_pct=parse_float(cells[7]),
                gaa=parse_float(cells[8]),
            )
        )
    logger.info("goalie_stats_extracted", count=len(goalies), team=team)
    return goalies
