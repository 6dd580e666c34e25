"""Markup heuristics for the scaha.net JSF pages.

The JSF runtime generates control ids (``j_id_4d:j_id_4kInner``) that drift
between deployments, so the season, schedule and team dropdowns and the
players/goalies buttons are identified by what they contain rather than by
id. Detection never fails: when nothing matches confidently it degrades to a
positional fallback, and the Navigator reports queries that cannot be
resolved against what was found.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from ..logging import logger
from ..models import SelectOption
from ..utils.html_parsing import parse_html

DEFAULT_FORM_ID = "j_id_4d"

SEASON_LABEL_PATTERN = re.compile(r"\d{4}[/-]\d{2}")
SCHEDULE_LABEL_PATTERN = re.compile(r"regular season|schedule", re.IGNORECASE)
PLAYERS_TABLE_MARKER = "playertotals"
GOALIES_TABLE_MARKER = "goalietotals"


@dataclass(frozen=True)
class SelectNode:
    """A <select> element with its parsed options."""

    id: str
    name: str
    form_id: str
    options: tuple[SelectOption, ...]

    @property
    def field(self) -> str:
        """Form field name submitted for this control."""
        return self.name or self.id


@dataclass(frozen=True)
class ButtonNode:
    id: str
    text: str


@dataclass(frozen=True)
class FormLayout:
    """Where the navigation controls live in the current rendering of the page."""

    form_id: str
    submit_field: str
    season_select_id: str
    season_field: str
    schedule_select_id: str
    schedule_field: str
    team_select_id: str | None
    team_field: str | None
    players_button_id: str
    goalies_button_id: str
    players_table_id: str
    goalies_table_id: str


@dataclass(frozen=True)
class ParsedPage:
    layout: FormLayout
    seasons: tuple[SelectOption, ...]
    schedules: tuple[SelectOption, ...]
    teams: tuple[SelectOption, ...]
    select_count: int


def parse_select_options(select: Tag) -> list[SelectOption]:
    """Parse the <option> children of a dropdown.

    A single-choice select with no ``selected`` attribute reports its first
    option as selected, which is what a browser shows as the active choice.
    """
    options: list[SelectOption] = []
    for option in select.find_all("option"):
        label = option.get_text(strip=True)
        value = option.get("value")
        options.append(
            SelectOption(
                value=value if value is not None else label,
                label=label,
                selected=option.has_attr("selected"),
            )
        )

    if options and not select.has_attr("multiple") and not any(o.selected for o in options):
        options[0] = options[0].model_copy(update={"selected": True})
    return options


def collect_selects(soup: BeautifulSoup) -> list[SelectNode]:
    """Every <select> in document order with its id, name and enclosing form id."""
    nodes: list[SelectNode] = []
    for select in soup.find_all("select"):
        form = select.find_parent("form")
        nodes.append(
            SelectNode(
                id=select.get("id", ""),
                name=select.get("name", ""),
                form_id=form.get("id", "") if form else "",
                options=tuple(parse_select_options(select)),
            )
        )
    return nodes


def _is_button(tag: Tag) -> bool:
    if tag.name == "button":
        return True
    return tag.name == "input" and tag.get("type", "").lower() == "submit"


def collect_buttons(soup: BeautifulSoup) -> list[ButtonNode]:
    """Buttons and submit inputs in document order, keyed by id (or name)."""
    nodes: list[ButtonNode] = []
    for tag in soup.find_all(_is_button):
        text = tag.get_text(strip=True) or tag.get("value", "")
        nodes.append(ButtonNode(id=tag.get("id") or tag.get("name") or "", text=text.strip()))
    return nodes


def _find_index(nodes: list[SelectNode], predicate, exclude: set[int]) -> int | None:
    for index, node in enumerate(nodes):
        if index not in exclude and predicate(node):
            return index
    return None


def _classify_selects(nodes: list[SelectNode]) -> tuple[int | None, int | None, int | None]:
    """Assign the season, schedule and team roles to select indexes."""
    if not nodes:
        return None, None, None

    season = _find_index(
        nodes,
        lambda node: any(SEASON_LABEL_PATTERN.search(o.label) for o in node.options),
        set(),
    )
    if season is None:
        season = 0

    schedule = _find_index(
        nodes,
        lambda node: any(SCHEDULE_LABEL_PATTERN.search(o.label) for o in node.options),
        {season},
    )
    if schedule is None and len(nodes) > 1 and season != 1:
        schedule = 1
    if schedule is None:
        schedule = _find_index(nodes, lambda node: True, {season})

    claimed = {season, schedule}
    team = _find_index(nodes, lambda node: True, claimed)
    if team is None and (len(nodes) - 1) not in claimed:
        team = len(nodes) - 1

    return season, schedule, team


def _pick_button(buttons: list[ButtonNode], keyword: str, fallback_index: int) -> ButtonNode | None:
    for button in buttons:
        if keyword in button.text.lower():
            return button
    if len(buttons) > fallback_index:
        return buttons[fallback_index]
    return buttons[0] if buttons else None


def _find_table_id(soup: BeautifulSoup, marker: str) -> str | None:
    table = soup.find("table", id=lambda value: bool(value) and marker in value)
    return table.get("id") if table else None


def detect_form_layout(
    soup: BeautifulSoup,
    default_form_id: str = DEFAULT_FORM_ID,
) -> tuple[FormLayout, list[SelectNode], tuple[int | None, int | None, int | None]]:
    """Infer the control layout of a scoreboard or stats-central rendering.

    Returns the layout, the select nodes found and the (season, schedule,
    team) indexes into them. Selects outside any <form>, as in a postback
    fragment, are attributed to ``default_form_id``.
    """
    nodes = collect_selects(soup)
    season_idx, schedule_idx, team_idx = _classify_selects(nodes)
    season = nodes[season_idx] if season_idx is not None else None
    schedule = nodes[schedule_idx] if schedule_idx is not None else None
    team = nodes[team_idx] if team_idx is not None else None

    form_id = next(
        (node.form_id for node in (season, schedule, team) if node and node.form_id),
        default_form_id,
    )

    buttons = collect_buttons(soup)
    players_button = _pick_button(buttons, "players", 0)
    goalies_button = _pick_button(buttons, "goalies", 1)

    default_season_id = f"{form_id}:j_id_4kInner"
    default_schedule_id = f"{form_id}:j_id_4nInner"

    layout = FormLayout(
        form_id=form_id,
        submit_field=f"{form_id}_SUBMIT",
        season_select_id=(season.id if season and season.id else default_season_id),
        season_field=(season.field if season and season.field else default_season_id),
        schedule_select_id=(schedule.id if schedule and schedule.id else default_schedule_id),
        schedule_field=(schedule.field if schedule and schedule.field else default_schedule_id),
        team_select_id=(team.id or None) if team else None,
        team_field=(team.field or None) if team else None,
        players_button_id=(players_button.id if players_button and players_button.id else f"{form_id}:j_id_4w"),
        goalies_button_id=(goalies_button.id if goalies_button and goalies_button.id else f"{form_id}:j_id_4x"),
        players_table_id=_find_table_id(soup, PLAYERS_TABLE_MARKER) or f"{form_id}:{PLAYERS_TABLE_MARKER}",
        goalies_table_id=_find_table_id(soup, GOALIES_TABLE_MARKER) or f"{form_id}:{GOALIES_TABLE_MARKER}",
    )

    logger.debug(
        "jsf_layout_detected",
        form_id=form_id,
        select_count=len(nodes),
        season_select=layout.season_select_id,
        schedule_select=layout.schedule_select_id,
        team_select=layout.team_select_id,
    )
    return layout, nodes, (season_idx, schedule_idx, team_idx)


def parse_page(html: str, default_form_id: str = DEFAULT_FORM_ID) -> ParsedPage:
    """Parse a page or fragment into its layout and the three option lists."""
    soup = parse_html(html)
    layout, nodes, (season_idx, schedule_idx, team_idx) = detect_form_layout(soup, default_form_id)

    def options_at(index: int | None) -> tuple[SelectOption, ...]:
        return nodes[index].options if index is not None else ()

    return ParsedPage(
        layout=layout,
        seasons=options_at(season_idx),
        schedules=options_at(schedule_idx),
        teams=options_at(team_idx),
        select_count=len(nodes),
    )
