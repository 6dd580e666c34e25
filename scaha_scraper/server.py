"""MCP server exposing the SCAHA tool catalogue over stdio or streamable HTTP.

Usage:
    scaha-mcp                              # stdio, for desktop clients
    scaha-mcp --transport streamable-http  # HTTP on MCP_HOST:MCP_PORT
"""

from __future__ import annotations

import argparse
import threading
from typing import Any

import anyio
from mcp.server.fastmcp import FastMCP

from .config import settings
from .logging import logger
from .navigation import cancellable
from .tools import TOOLS, call_tool

mcp = FastMCP("scaha", host=settings.mcp_host, port=settings.mcp_port)


async def _run(name: str, arguments: dict[str, Any]) -> Any:
    """Run a tool in a worker thread, since navigation blocks (httpx, sync Playwright).

    A cancelled request returns at once. The worker is told to stop and
    closes its transport before the next upstream step.
    """
    cancel_event = threading.Event()

    def work() -> Any:
        with cancellable(cancel_event):
            return call_tool(name, arguments)

    try:
        return await anyio.to_thread.run_sync(work, abandon_on_cancel=True)
    except anyio.get_cancelled_exc_class():
        cancel_event.set()
        logger.info("tool_cancelled", tool=name)
        raise


def _without_none(**arguments: Any) -> dict[str, Any]:
    return {key: value for key, value in arguments.items() if value is not None}


@mcp.tool(description=TOOLS["list_schedule_options"].description)
async def list_schedule_options(
    season: str | None = None,
    schedule: str | None = None,
    team: str | None = None,
) -> Any:
    return await _run(
        "list_schedule_options", _without_none(season=season, schedule=schedule, team=team)
    )


@mcp.tool(description=TOOLS["get_division_standings"].description)
async def get_division_standings(season: str, division: str) -> Any:
    return await _run("get_division_standings", {"season": season, "division": division})


@mcp.tool(description=TOOLS["get_team_stats"].description)
async def get_team_stats(season: str, division: str, team_slug: str) -> Any:
    return await _run(
        "get_team_stats", {"season": season, "division": division, "team_slug": team_slug}
    )


@mcp.tool(description=TOOLS["get_player_stats"].description)
async def get_player_stats(season: str, division: str, team_slug: str, player: dict[str, str]) -> Any:
    return await _run(
        "get_player_stats",
        {"season": season, "division": division, "team_slug": team_slug, "player": player},
    )


@mcp.tool(description=TOOLS["get_division_player_stats"].description)
async def get_division_player_stats(
    season: str,
    division: str,
    team_slug: str | None = None,
    category: str = "players",
    limit: int | None = None,
) -> Any:
    return await _run(
        "get_division_player_stats",
        _without_none(
            season=season, division=division, team_slug=team_slug, category=category, limit=limit
        ),
    )


@mcp.tool(description=TOOLS["get_team_roster"].description)
async def get_team_roster(season: str, division: str, team_slug: str) -> Any:
    return await _run(
        "get_team_roster", {"season": season, "division": division, "team_slug": team_slug}
    )


@mcp.tool(description=TOOLS["get_schedule"].description)
async def get_schedule(
    season: str,
    schedule: str,
    team: str,
    date: str | None = None,
    date_range: dict[str, str] | None = None,
) -> Any:
    return await _run(
        "get_schedule",
        _without_none(season=season, schedule=schedule, team=team, date=date, date_range=date_range),
    )


@mcp.tool(description=TOOLS["get_schedule_csv"].description)
async def get_schedule_csv(season: str, schedule: str, team: str) -> Any:
    return await _run("get_schedule_csv", {"season": season, "schedule": schedule, "team": team})


def main() -> None:
    parser = argparse.ArgumentParser(description="SCAHA MCP server")
    parser.add_argument(
        "--transport",
        choices=("stdio", "streamable-http"),
        default="stdio",
        help="Protocol transport (default: stdio)",
    )
    args = parser.parse_args()

    logger.info(
        "server_starting",
        transport=args.transport,
        navigation=settings.transport_mode,
        tools=sorted(TOOLS),
    )
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
