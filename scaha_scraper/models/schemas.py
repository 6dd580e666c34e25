"""Pydantic models for the records extracted from scaha.net."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ScoreSentinel = Literal["--"]
StatCategory = Literal["players", "goalies"]


class _Record(BaseModel):
    """Query-scoped value object; never mutated after construction."""

    model_config = ConfigDict(frozen=True)


class SelectOption(_Record):
    value: str  # opaque server-side identifier
    label: str
    selected: bool = False


class OptionState(_Record):
    seasons: list[SelectOption] = Field(default_factory=list)
    schedules: list[SelectOption] = Field(default_factory=list)
    teams: list[SelectOption] = Field(default_factory=list)


class TeamStats(_Record):
    team: str
    gp: int = 0
    w: int = 0
    l: int = 0  # noqa: E741
    t: int = 0
    points: int = 0
    gf: int = 0
    ga: int = 0
    gd: int = 0


class PlayerStats(_Record):
    number: str
    name: str
    team: str
    gp: int = 0
    g: int = 0
    a: int = 0
    pts: int = 0
    pims: int = 0


class GoalieStats(_Record):
    number: str
    name: str
    team: str
    gp: int = 0
    mins: int = 0
    shots: int = 0
    saves: int = 0
    sv_pct: float | None = None
    gaa: float | None = None


class Game(_Record):
    game_id: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM:SS
    type: str
    status: str
    home: str
    away: str
    home_score: int | ScoreSentinel = "--"
    away_score: int | ScoreSentinel = "--"
    venue: str = ""
    rink: str = ""


class TeamRoster(_Record):
    team: str
    division: str
    season: str
    players: list[PlayerStats] = Field(default_factory=list)
    goalies: list[GoalieStats] = Field(default_factory=list)


class ScheduleCSV(_Record):
    filename: str
    mime: str = "text/csv"
    data_base64: str
    size_bytes: int
