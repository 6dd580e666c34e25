"""Tool catalogue: named operations with validated inputs and JSON payloads.

``call_tool`` never raises. Domain and validation errors come back as
``{"error": message}`` so no traceback crosses the tool boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from .. import services
from ..errors import ScahaError
from ..logging import logger
from .schemas import (
    DivisionArgs,
    DivisionPlayerStatsArgs,
    GetScheduleArgs,
    ListScheduleOptionsArgs,
    PlayerStatsArgs,
    ScheduleArgs,
    TeamArgs,
)


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    args_model: type[BaseModel]
    handler: Callable[[Any], Any]

    def input_schema(self) -> dict[str, Any]:
        return self.args_model.model_json_schema()


def _dump(record: BaseModel) -> dict[str, Any]:
    return record.model_dump(mode="json")


def _list_schedule_options(args: ListScheduleOptionsArgs) -> dict[str, Any]:
    return _dump(services.list_schedule_options(args.season, args.schedule, args.team))


def _division_standings(args: DivisionArgs) -> dict[str, Any]:
    teams = services.get_division_standings(args.season, args.division)
    return {
        "season": args.season,
        "division": args.division,
        "teams": [_dump(team) for team in teams],
        "total_teams": len(teams),
    }


def _team_stats(args: TeamArgs) -> dict[str, Any]:
    return _dump(services.get_team_stats(args.season, args.division, args.team_slug))


def _player_stats(args: PlayerStatsArgs) -> dict[str, Any]:
    player = services.get_player_stats(
        args.season,
        args.division,
        args.team_slug,
        name=args.player.name,
        number=args.player.number,
    )
    return _dump(player)


def _division_player_stats(args: DivisionPlayerStatsArgs) -> dict[str, Any]:
    everyone = services.get_division_player_stats(
        args.season, args.division, args.team_slug, args.category
    )
    returned = everyone[: args.limit] if args.limit else everyone
    return {
        "season": args.season,
        "division": args.division,
        "team_filter": args.team_slug,
        "category": args.category,
        "total_count": len(everyone),
        "returned_count": len(returned),
        "has_more": len(everyone) > len(returned),
        "players": [{"rank": rank, **_dump(player)} for rank, player in enumerate(returned, start=1)],
    }


def _team_roster(args: TeamArgs) -> dict[str, Any]:
    roster = services.get_team_roster(args.season, args.division, args.team_slug)
    return {
        "team": roster.team,
        "division": roster.division,
        "season": roster.season,
        "roster_size": {
            "total": len(roster.players) + len(roster.goalies),
            "players": len(roster.players),
            "goalies": len(roster.goalies),
        },
        "players": [_dump(player) for player in roster.players],
        "goalies": [_dump(goalie) for goalie in roster.goalies],
    }


def _schedule(args: GetScheduleArgs) -> list[dict[str, Any]]:
    date_range = (args.date_range.start, args.date_range.end) if args.date_range else None
    games = services.get_schedule(
        args.season, args.schedule, args.team, date=args.date, date_range=date_range
    )
    return [_dump(game) for game in games]


def _schedule_csv(args: ScheduleArgs) -> dict[str, Any]:
    return _dump(services.get_schedule_csv(args.season, args.schedule, args.team))


TOOLS: dict[str, Tool] = {
    tool.name: tool
    for tool in (
        Tool(
            "list_schedule_options",
            "List the season, schedule and team options of the scoreboard, "
            "optionally after selecting a season, schedule and team.",
            ListScheduleOptionsArgs,
            _list_schedule_options,
        ),
        Tool(
            "get_division_standings",
            "Get the standings table of a division for a season.",
            DivisionArgs,
            _division_standings,
        ),
        Tool(
            "get_team_stats",
            "Get one team's standings record (GP, W, L, T, points, GF, GA, GD).",
            TeamArgs,
            _team_stats,
        ),
        Tool(
            "get_player_stats",
            "Get one skater's stats, looked up by name or jersey number.",
            PlayerStatsArgs,
            _player_stats,
        ),
        Tool(
            "get_division_player_stats",
            "Get every skater (ranked by points) or goalie of a division, optionally for one team.",
            DivisionPlayerStatsArgs,
            _division_player_stats,
        ),
        Tool(
            "get_team_roster",
            "Get a team's roster with skater and goalie stats.",
            TeamArgs,
            _team_roster,
        ),
        Tool(
            "get_schedule",
            "Get a team's games, optionally for one date or an inclusive date range.",
            GetScheduleArgs,
            _schedule,
        ),
        Tool(
            "get_schedule_csv",
            "Download a team's schedule as a base64-encoded CSV file.",
            ScheduleArgs,
            _schedule_csv,
        ),
    )
}


def call_tool(name: str, arguments: dict[str, Any] | None = None) -> Any:
    """Validate arguments, run a tool and return its JSON payload or an error payload."""
    tool = TOOLS.get(name)
    if tool is None:
        return {"error": f"Unknown tool: {name}"}

    try:
        args = tool.args_model.model_validate(arguments or {})
    except ValidationError as exc:
        logger.info("tool_invalid_arguments", tool=name, errors=exc.error_count())
        return {"error": f"Invalid arguments for {name}: {exc}"}

    logger.info("tool_called", tool=name)
    try:
        return tool.handler(args)
    except ScahaError as exc:
        logger.warning("tool_failed", tool=name, error_type=type(exc).__name__, error=str(exc))
        return {"error": str(exc)}
    except Exception:
        logger.exception("tool_unexpected_error", tool=name)
        return {"error": f"{name} failed unexpectedly; see server logs"}


__all__ = ["TOOLS", "Tool", "call_tool"]
