"""Typed records shared by the extractors, services and tools."""

from .schemas import (
    Game,
    GoalieStats,
    OptionState,
    PlayerStats,
    ScheduleCSV,
    SelectOption,
    StatCategory,
    TeamRoster,
    TeamStats,
)

__all__ = [
    "SelectOption",
    "OptionState",
    "TeamStats",
    "PlayerStats",
    "GoalieStats",
    "Game",
    "TeamRoster",
    "ScheduleCSV",
    "StatCategory",
]
