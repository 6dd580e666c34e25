"""Schedule extraction and the CSV export consumed downstream.

The schedule grid is read from the scoreboard markup once a team is chosen,
serialized to a fixed-header CSV, and parsed back into ``Game`` records. The
header line is byte-exact: consumers decode the payload and match on it.
"""

from __future__ import annotations

import csv
import io
import re
from datetime import datetime, timezone
from typing import Iterable, Sequence

from ..logging import logger
from ..models import Game
from ..utils.html_parsing import find_table_by_headers, iter_data_rows, parse_html
from ..utils.parsing import parse_score

SCHEDULE_CSV_HEADER = (
    "Game #",
    "Date",
    "Time",
    "Type",
    "Status",
    "Home",
    "Score",
    "Away",
    "Score",
    "Venue",
    "Rink",
)
SCHEDULE_FIELD_COUNT = len(SCHEDULE_CSV_HEADER)

_YEAR_PAIR = re.compile(r"(\d{4})[/-]?(\d{2,4})?")
_TIER = re.compile(r"(\d+U)\s*([A-Z]+(?:\s*Div\s*\d+)?)", re.IGNORECASE)
_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9-]+")
_WHITESPACE = re.compile(r"\s+")


def extract_schedule_rows(html: str) -> list[list[str]]:
    """Cell texts of every game row in the schedule grid.

    Rows with fewer than eleven cells (placeholders such as "No records
    found") are skipped.
    """
    soup = parse_html(html)
    table = find_table_by_headers(soup, "game", "date")
    root = table if table is not None else soup

    rows: list[list[str]] = []
    skipped = 0
    for cells in iter_data_rows(root):
        if len(cells) < SCHEDULE_FIELD_COUNT or not cells[0]:
            skipped += 1
            continue
        rows.append(cells[:SCHEDULE_FIELD_COUNT])

    if skipped:
        logger.debug("schedule_rows_skipped", skipped=skipped)
    logger.info("schedule_rows_extracted", rows=len(rows), by_header=table is not None)
    return rows


def build_schedule_csv(rows: Iterable[Sequence[str]]) -> str:
    """Serialize schedule rows under the fixed header, every field double-quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(SCHEDULE_CSV_HEADER)
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()


def _game_to_row(game: Game) -> list[str]:
    return [
        game.game_id,
        game.date,
        game.time,
        game.type,
        game.status,
        game.home,
        str(game.home_score),
        game.away,
        str(game.away_score),
        game.venue,
        game.rink,
    ]


def games_to_csv(games: Iterable[Game]) -> str:
    return build_schedule_csv(_game_to_row(game) for game in games)


def parse_schedule_csv(text: str) -> list[Game]:
    """Parse a schedule CSV into games, skipping the header and short rows."""
    reader = csv.reader(io.StringIO(text.strip()))
    games: list[Game] = []
    for index, fields in enumerate(reader):
        if index == 0:
            continue
        if len(fields) < SCHEDULE_FIELD_COUNT:
            logger.debug("schedule_csv_row_skipped", line=index + 1, fields=len(fields))
            continue
        fields = [field.strip() for field in fields]
        games.append(
            Game(
                game_id=fields[0],
                date=fields[1],
                time=fields[2],
                type=fields[3],
                status=fields[4],
                home=fields[5],
                home_score=parse_score(fields[6]),
                away=fields[7],
                away_score=parse_score(fields[8]),
                venue=fields[9],
                rink=fields[10],
            )
        )
    return games


def _season_slug(season: str) -> str:
    match = _YEAR_PAIR.search(season)
    if not match:
        return "unknown"
    start, end = match.group(1), match.group(2)
    return f"{start}-{end or start[-2:]}"


def _tier_slug(schedule: str) -> str:
    match = _TIER.search(schedule)
    if not match:
        return _WHITESPACE.sub("-", schedule.strip())
    return f"{match.group(1)}-{_WHITESPACE.sub('', match.group(2))}"


def _team_slug(team: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", team).strip("_")


def build_csv_filename(season: str, schedule: str, team: str, now: datetime | None = None) -> str:
    """``SCAHA_2025-26_14U-B_Jr_Kings_1_2025-10-04T18-30-00.csv`` style name."""
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H-%M-%S")
    return f"SCAHA_{_season_slug(season)}_{_tier_slug(schedule)}_{_team_slug(team)}_{stamp}.csv"
