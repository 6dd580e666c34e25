"""Argument models of the tool catalogue.

Each model's JSON schema is the input schema advertised for its tool;
validation failures are reported back to the caller as error payloads.
"""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..models import StatCategory

_ISO_DATE = r"^\d{4}-\d{2}-\d{2}$"


def _calendar_date(value: str | None) -> str | None:
    # The pattern admits "2025-13-45"; the calendar does not
    if value is not None:
        datetime.date.fromisoformat(value)
    return value


class _Args(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class ListScheduleOptionsArgs(_Args):
    season: str | None = Field(None, description='Season to select, e.g. "2025/26"')
    schedule: str | None = Field(None, description='Schedule to select, e.g. "14U B Regular Season"')
    team: str | None = Field(None, description='Team to select, e.g. "Jr. Kings (1)"')


class DivisionArgs(_Args):
    season: str = Field(..., min_length=1, description='Season identifier, e.g. "2024-25"')
    division: str = Field(..., min_length=1, description='Division name, e.g. "14U B"')


class TeamArgs(DivisionArgs):
    team_slug: str = Field(..., min_length=1, description='Team name, e.g. "Jr. Kings"')


class PlayerFilter(_Args):
    name: str | None = Field(None, description="Player name")
    number: str | None = Field(None, description='Jersey number, matched exactly ("7" is not "07")')

    @model_validator(mode="after")
    def _require_name_or_number(self) -> PlayerFilter:
        if not self.name and not self.number:
            raise ValueError("player requires a name or a number")
        return self


class PlayerStatsArgs(TeamArgs):
    player: PlayerFilter


class DivisionPlayerStatsArgs(DivisionArgs):
    team_slug: str | None = Field(None, description="Only players of this team")
    category: StatCategory = Field("players", description='"players" for skaters, "goalies" for goalies')
    limit: int | None = Field(None, ge=1, description="Return at most this many players")


class DateRange(_Args):
    start: str = Field(..., pattern=_ISO_DATE, description="First date, YYYY-MM-DD (inclusive)")
    end: str = Field(..., pattern=_ISO_DATE, description="Last date, YYYY-MM-DD (inclusive)")

    @field_validator("start", "end")
    @classmethod
    def _real_dates(cls, value: str) -> str:
        return _calendar_date(value)

    @model_validator(mode="after")
    def _ordered(self) -> DateRange:
        if self.start > self.end:
            raise ValueError(f"date_range start {self.start} is after end {self.end}")
        return self


class ScheduleArgs(_Args):
    season: str = Field(..., min_length=1, description='Season, e.g. "2025/26"')
    schedule: str = Field(..., min_length=1, description='Schedule, e.g. "14U B Regular Season"')
    team: str = Field(..., min_length=1, description='Team, e.g. "Jr. Kings (1)"')


class GetScheduleArgs(ScheduleArgs):
    date: str | None = Field(None, pattern=_ISO_DATE, description="Only games on this date, YYYY-MM-DD")
    date_range: DateRange | None = Field(None, description="Only games within this inclusive range")

    @field_validator("date")
    @classmethod
    def _real_date(cls, value: str | None) -> str | None:
        return _calendar_date(value)
