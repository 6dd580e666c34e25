"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Ensure the package is importable without installation
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

# Set environment variables before any package imports
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("SCAHA_TRANSPORT", "auto")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from scaha_scraper.navigation.base import NavigationTransport  # noqa: E402

FORM_ID = "j_id_4d"
SEASON_SELECT = f"{FORM_ID}:j_id_4kInner"
SCHEDULE_SELECT = f"{FORM_ID}:j_id_4nInner"
TEAM_SELECT = f"{FORM_ID}:teamlistInner"

SEASONS = [("10", "SCAHA 2025/26 Season"), ("9", "SCAHA 2024/25 Season")]
SCHEDULES = [("0", "Select Schedule"), ("101", "14U B Regular Season"), ("102", "12U A Regular Season")]
TEAMS = [("0", "Select Team"), ("201", "Jr. Kings (1)"), ("202", "Heat")]


def render_select(select_id: str, options, selected: str | None = None) -> str:
    rendered = []
    for value, label in options:
        marker = ' selected="selected"' if value == selected else ""
        rendered.append(f'<option value="{value}"{marker}>{label}</option>')
    return f'<select id="{select_id}" name="{select_id}" size="1">{"".join(rendered)}</select>'


def table(table_id: str, headers, rows) -> str:
    head = "".join(f"<th>{h}</th>" for h in headers)
    body = "".join("<tr>" + "".join(f"<td>{c}</td>" for c in row) + "</tr>" for row in rows)
    return f'<table id="{table_id}"><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>'


STANDINGS_TABLE = table(
    f"{FORM_ID}:standings",
    ["Team", "GP", "W", "L", "T", "Points", "GF", "GA", "GD"],
    [
        ["Jr. Kings (1)", "10", "8", "1", "1", "17", "45", "20", "25"],
        ["Heat", "10", "5", "5", "0", "10", "30", "31", "-1"],
    ],
)

SCHEDULE_TABLE = table(
    f"{FORM_ID}:games",
    ["Game #", "Date", "Time", "Type", "Status", "Home", "Score", "Away", "Score", "Venue", "Rink"],
    [
        ["1001", "2025-10-04", "08:00:00", "Game", "Final", "Jr. Kings (1)", "3", "Heat", "2",
         "Toyota Sports Performance Center", "Rink 1"],
        ["1002", "2025-10-18", "13:15:00", "Game", "Scheduled", "Heat", "--", "Jr. Kings (1)", "--",
         "Paramount Iceland", "Main"],
    ],
)

PLAYERS_TABLE = table(
    f"{FORM_ID}:playertotals",
    ["#", "Name", "Team", "GP", "G", "A", "Pts", "PIMS"],
    [
        ["7", "Alex Smith", "Jr. Kings (1)", "10", "5", "7", "12", "2"],
        ["07", "Jordan Lee", "Jr. Kings (1)", "10", "9", "8", "17", "0"],
        ["12", "Sam Park", "Heat", "9", "3", "2", "5", "4"],
    ],
)

GOALIES_TABLE = table(
    f"{FORM_ID}:goalietotals",
    ["#", "Name", "Team", "GP", "Mins", "Shots", "Saves", "SV%", "GAA"],
    [
        ["30", "Chris Keeper", "Jr. Kings (1)", "10", "500", "250", "230", ".920", "2.00"],
        ["31", "Pat Net", "Heat", "2", "0", "0", "0", "--", "--"],
    ],
)

VIEW_STATE_INPUT = '<input type="hidden" name="javax.faces.ViewState" value="vs-1" />'


def scoreboard_form(season: str = "10", schedule: str | None = None, team: str | None = None, body: str = "") -> str:
    return (
        f'<form id="{FORM_ID}" name="{FORM_ID}" method="post">'
        + render_select(SEASON_SELECT, SEASONS, season)
        + render_select(SCHEDULE_SELECT, SCHEDULES, schedule)
        + render_select(TEAM_SELECT, TEAMS, team)
        + body
        + "</form>"
    )


def stats_form(season: str = "10", schedule: str | None = None, body: str = "") -> str:
    return (
        f'<form id="{FORM_ID}" name="{FORM_ID}" method="post">'
        + render_select(SEASON_SELECT, SEASONS, season)
        + render_select(SCHEDULE_SELECT, SCHEDULES, schedule)
        + f'<button id="{FORM_ID}:j_id_4w" name="{FORM_ID}:j_id_4w" type="submit">Players</button>'
        + f'<button id="{FORM_ID}:j_id_4x" name="{FORM_ID}:j_id_4x" type="submit">Goalies</button>'
        + body
        + "</form>"
    )


def full_page(form: str) -> str:
    return f"<html><head><title>SCAHA</title></head><body>{form}{VIEW_STATE_INPUT}</body></html>"


def partial_response(fragment: str, view_state: str = "vs-2", form_id: str = FORM_ID) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?><partial-response><changes>'
        f'<update id="{form_id}"><![CDATA[{fragment}]]></update>'
        f'<update id="{form_id}:javax.faces.ViewState:0"><![CDATA[{view_state}]]></update>'
        "</changes></partial-response>"
    )


class FakeTransport(NavigationTransport):
    """In-memory transport serving canned markup and recording every call."""

    name = "fake"

    def __init__(self, page_html: str, select_responses=None, trigger_responses=None) -> None:
        self.page_html = page_html
        self.select_responses = select_responses or {}
        self.trigger_responses = trigger_responses or {}
        self.loaded: list[str] = []
        self.selects: list[tuple] = []
        self.triggers: list[tuple] = []
        self.closed = False

    def load(self, url: str) -> str:
        self.loaded.append(url)
        return self.page_html

    def select(self, state, control, option) -> str:
        self.selects.append((control, option.value))
        return self.select_responses[(control, option.value)]

    def trigger(self, state, button_id, table_marker) -> str:
        self.triggers.append((button_id, table_marker))
        return self.trigger_responses[table_marker]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def scoreboard_html() -> str:
    return full_page(scoreboard_form())


@pytest.fixture
def scoreboard_transport() -> FakeTransport:
    """Scoreboard with the 2025/26 season active and nothing else chosen."""
    from scaha_scraper.navigation import Control

    return FakeTransport(
        full_page(scoreboard_form()),
        select_responses={
            (Control.SCHEDULE, "101"): scoreboard_form(schedule="101", body=STANDINGS_TABLE),
            (Control.TEAM, "201"): scoreboard_form(schedule="101", team="201", body=SCHEDULE_TABLE),
            (Control.SEASON, "9"): scoreboard_form(season="9"),
        },
    )


@pytest.fixture
def stats_transport() -> FakeTransport:
    """Stats central with the 2025/26 season active."""
    from scaha_scraper.navigation import Control

    return FakeTransport(
        full_page(stats_form()),
        select_responses={
            (Control.SCHEDULE, "101"): stats_form(schedule="101"),
        },
        trigger_responses={
            "playertotals": stats_form(schedule="101", body=PLAYERS_TABLE),
            "goalietotals": stats_form(schedule="101", body=GOALIES_TABLE),
        },
    )
