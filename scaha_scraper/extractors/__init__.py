"""Extraction of typed records from navigated page markup and CSV exports."""

from .schedule import (
    SCHEDULE_CSV_HEADER,
    build_csv_filename,
    build_schedule_csv,
    extract_schedule_rows,
    games_to_csv,
    parse_schedule_csv,
)
from .standings import extract_standings
from .stats import extract_goalie_stats, extract_player_stats

__all__ = [
    "SCHEDULE_CSV_HEADER",
    "build_csv_filename",
    "build_schedule_csv",
    "extract_schedule_rows",
    "games_to_csv",
    "parse_schedule_csv",
    "extract_standings",
    "extract_goalie_stats",
    "extract_player_stats",
]
