"""Shared interfaces for navigation transports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum

from ..config import settings
from ..jsf.markup import FormLayout, parse_page
from ..models import OptionState, SelectOption


class Control(str, Enum):
    """Dropdowns of the season -> schedule -> team selection protocol, in order."""

    SEASON = "season"
    SCHEDULE = "schedule"
    TEAM = "team"


class Page(str, Enum):
    SCOREBOARD = "scoreboard"
    STATS_CENTRAL = "statscentral"

    @property
    def url(self) -> str:
        if self is Page.SCOREBOARD:
            return settings.upstream.scoreboard_url
        return settings.upstream.stats_central_url


@dataclass(frozen=True)
class NavigationState:
    """Option lists and control layout of the most recent page rendering."""

    layout: FormLayout
    seasons: tuple[SelectOption, ...]
    schedules: tuple[SelectOption, ...]
    teams: tuple[SelectOption, ...]
    html: str

    @classmethod
    def from_html(cls, html: str, previous: NavigationState | None = None) -> NavigationState:
        """Re-detect layout and options from a page or postback fragment.

        A fragment that re-renders no dropdowns keeps the previous options,
        and one without its <form> wrapper keeps the previous form id.
        """
        if previous is None:
            parsed = parse_page(html)
        else:
            parsed = parse_page(html, default_form_id=previous.layout.form_id)
        if parsed.select_count == 0 and previous is not None:
            return replace(previous, html=html)
        return cls(
            layout=parsed.layout,
            seasons=parsed.seasons,
            schedules=parsed.schedules,
            teams=parsed.teams,
            html=html,
        )

    def options_for(self, control: Control) -> tuple[SelectOption, ...]:
        if control is Control.SEASON:
            return self.seasons
        if control is Control.SCHEDULE:
            return self.schedules
        return self.teams

    def selected(self, control: Control) -> SelectOption | None:
        return next((opt for opt in self.options_for(control) if opt.selected), None)

    def field_for(self, control: Control) -> str | None:
        """Form field name submitted for a control."""
        if control is Control.SEASON:
            return self.layout.season_field
        if control is Control.SCHEDULE:
            return self.layout.schedule_field
        return self.layout.team_field

    def select_id_for(self, control: Control) -> str | None:
        if control is Control.SEASON:
            return self.layout.season_select_id
        if control is Control.SCHEDULE:
            return self.layout.schedule_select_id
        return self.layout.team_select_id

    def to_option_state(self) -> OptionState:
        return OptionState(
            seasons=list(self.seasons),
            schedules=list(self.schedules),
            teams=list(self.teams),
        )


class NavigationTransport(ABC):
    """Abstract base class for the ways of driving the upstream pages.

    A transport is owned by one query and must be closed on every exit path;
    use it as a context manager.
    """

    name: str

    def __enter__(self) -> NavigationTransport:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @abstractmethod
    def load(self, url: str) -> str:
        """Open the page and return its markup."""
        raise NotImplementedError

    @abstractmethod
    def select(self, state: NavigationState, control: Control, option: SelectOption) -> str:
        """Choose an option in a dropdown and return the refreshed markup."""
        raise NotImplementedError

    @abstractmethod
    def trigger(self, state: NavigationState, button_id: str, table_marker: str) -> str:
        """Press a button that renders a result table and return the refreshed markup.

        ``table_marker`` is a substring of the id of the table the button renders.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release network or browser resources."""
