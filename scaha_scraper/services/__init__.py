"""League queries: navigate, extract and filter, one upstream session per call."""

from .league import (
    get_division_player_stats,
    get_division_standings,
    get_player_stats,
    get_schedule,
    get_schedule_csv,
    get_team_roster,
    get_team_stats,
    list_schedule_options,
)

__all__ = [
    "get_division_player_stats",
    "get_division_standings",
    "get_player_stats",
    "get_schedule",
    "get_schedule_csv",
    "get_team_roster",
    "get_team_stats",
    "list_schedule_options",
]
