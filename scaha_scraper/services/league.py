"""Public league queries composed from navigation and extraction.

Each call is one query: it opens its own transport (and therefore its own
upstream session or browser), navigates, extracts and closes the transport
before returning. Nothing is cached between calls. Every function accepts an
explicit ``transport`` so callers can supply a preconfigured one.
"""

from __future__ import annotations

import base64
from typing import Sequence

from ..errors import ExtractionEmptyError, NotFoundError
from ..extractors import (
    build_csv_filename,
    build_schedule_csv,
    extract_goalie_stats,
    extract_player_stats,
    extract_schedule_rows,
    extract_standings,
    parse_schedule_csv,
)
from ..logging import logger
from ..models import (
    Game,
    GoalieStats,
    OptionState,
    PlayerStats,
    ScheduleCSV,
    StatCategory,
    TeamRoster,
    TeamStats,
)
from ..navigation import NavigationTransport, Navigator, Page, make_transport
from ..normalization import find_player, normalize_name


def _navigator(page: Page, preferred: str, transport: NavigationTransport | None) -> Navigator:
    return Navigator(transport or make_transport(preferred), page)


def list_schedule_options(
    season: str | None = None,
    schedule: str | None = None,
    team: str | None = None,
    *,
    transport: NavigationTransport | None = None,
) -> OptionState:
    """Dropdown options of the scoreboard after applying the given selections."""
    with _navigator(Page.SCOREBOARD, "browser", transport) as nav:
        state = nav.navigate(season=season, schedule=schedule, team=team)
        return state.to_option_state()


def get_division_standings(
    season: str,
    division: str,
    *,
    transport: NavigationTransport | None = None,
) -> list[TeamStats]:
    with _navigator(Page.SCOREBOARD, "http", transport) as nav:
        nav.navigate(season=season, schedule=division)
        return extract_standings(nav.html)


def _match_team(teams: Sequence[TeamStats], team_slug: str) -> TeamStats | None:
    wanted = normalize_name(team_slug)
    if not wanted:
        return None
    exact = next((t for t in teams if normalize_name(t.team) == wanted), None)
    if exact is not None:
        return exact
    return next((t for t in teams if wanted in normalize_name(t.team)), None)


def get_team_stats(
    season: str,
    division: str,
    team_slug: str,
    *,
    transport: NavigationTransport | None = None,
) -> TeamStats:
    """Standings row of one team; raises NotFoundError when it is not listed."""
    standings = get_division_standings(season, division, transport=transport)
    team = _match_team(standings, team_slug)
    if team is None:
        raise NotFoundError(
            f'Team "{team_slug}" not found in {division} standings for {season}',
            query=team_slug,
            control="team",
        )
    return team


def _division_stats(
    nav: Navigator,
    season: str,
    division: str,
    category: StatCategory,
    team: str | None,
) -> list[PlayerStats] | list[GoalieStats]:
    if nav.state is None:
        nav.navigate(season=season, schedule=division)
    state = nav.show_stats(category)
    if category == "players":
        return extract_player_stats(state.html, state.layout.players_table_id, team=team)
    return extract_goalie_stats(state.html, state.layout.goalies_table_id, team=team)


def get_division_player_stats(
    season: str,
    division: str,
    team_slug: str | None = None,
    category: StatCategory = "players",
    *,
    transport: NavigationTransport | None = None,
) -> list[PlayerStats] | list[GoalieStats]:
    """Every skater (ranked by points) or goalie in a division, optionally for one team."""
    with _navigator(Page.STATS_CENTRAL, "http", transport) as nav:
        rows = _division_stats(nav, season, division, category, team_slug)
    if category == "players":
        rows = sorted(rows, key=lambda player: player.pts, reverse=True)
    return rows


def get_player_stats(
    season: str,
    division: str,
    team_slug: str,
    *,
    name: str | None = None,
    number: str | None = None,
    transport: NavigationTransport | None = None,
) -> PlayerStats:
    """One skater of a team, looked up by jersey number or by name."""
    if not name and not number:
        raise ValueError("a player name or number is required")

    with _navigator(Page.STATS_CENTRAL, "http", transport) as nav:
        players = _division_stats(nav, season, division, "players", team_slug)

    player = find_player(players, name=name, number=number)
    if player is None:
        query = number or name
        raise NotFoundError(
            f'Player "{query}" not found on team "{team_slug}" in {division} for {season}',
            query=query,
            control="player",
        )
    return player


def get_team_roster(
    season: str,
    division: str,
    team_slug: str,
    *,
    transport: NavigationTransport | None = None,
) -> TeamRoster:
    """Skaters and goalies of one team; raises when the team has neither."""
    with _navigator(Page.STATS_CENTRAL, "browser", transport) as nav:
        players = _division_stats(nav, season, division, "players", team_slug)
        goalies = _division_stats(nav, season, division, "goalies", team_slug)

    if not players and not goalies:
        raise ExtractionEmptyError(
            f'No roster data found for team "{team_slug}" in division "{division}"',
            query=team_slug,
            control="team",
        )

    team_name = players[0].team if players else goalies[0].team
    logger.info("roster_extracted", team=team_name, players=len(players), goalies=len(goalies))
    return TeamRoster(
        team=team_name,
        division=division,
        season=season,
        players=players,
        goalies=goalies,
    )


def _schedule_csv_text(
    season: str,
    schedule: str,
    team: str,
    transport: NavigationTransport | None,
) -> str:
    with _navigator(Page.SCOREBOARD, "browser", transport) as nav:
        nav.navigate(season=season, schedule=schedule, team=team)
        rows = extract_schedule_rows(nav.html)
    return build_schedule_csv(rows)


def get_schedule(
    season: str,
    schedule: str,
    team: str,
    *,
    date: str | None = None,
    date_range: tuple[str, str] | None = None,
    transport: NavigationTransport | None = None,
) -> list[Game]:
    """Games of one team, optionally limited to a date or an inclusive date range.

    Dates compare as ``YYYY-MM-DD`` strings.
    """
    games = parse_schedule_csv(_schedule_csv_text(season, schedule, team, transport))
    if date:
        games = [game for game in games if game.date == date]
    if date_range:
        start, end = date_range
        games = [game for game in games if start <= game.date <= end]
    return games


def get_schedule_csv(
    season: str,
    schedule: str,
    team: str,
    *,
    transport: NavigationTransport | None = None,
) -> ScheduleCSV:
    """The team's schedule as a base64-encoded CSV attachment."""
    payload = _schedule_csv_text(season, schedule, team, transport).encode("utf-8")
    return ScheduleCSV(
        filename=build_csv_filename(season, schedule, team),
        data_base64=base64.b64encode(payload).decode("ascii"),
        size_bytes=len(payload),
    )
