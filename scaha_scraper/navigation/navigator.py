"""Season -> schedule -> team navigation over any transport."""

from __future__ import annotations

import threading

from ..config import settings
from ..errors import HistoricalDataUnavailableError, NotFoundError, QueryCancelledError
from ..jsf.markup import GOALIES_TABLE_MARKER, PLAYERS_TABLE_MARKER
from ..logging import logger
from ..models import SelectOption, StatCategory
from .base import Control, NavigationState, NavigationTransport, Page
from .cancellation import current_cancel_event
from .queries import resolve_option, schedule_query_variants, season_query_variants


class Navigator:
    """Drives one page through the dependent dropdowns.

    Controls are always applied in season, schedule, team order because each
    postback re-populates the dropdowns below it. Choosing the option that is
    already selected issues no postback. The navigator owns its transport and
    closes it on exit.

    A set ``cancel_event`` (by default the one bound with ``cancellable``)
    stops the navigation before its next upstream step.
    """

    def __init__(
        self,
        transport: NavigationTransport,
        page: Page,
        *,
        allow_season_switch: bool | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self.transport = transport
        self.page = page
        self.cancel_event = cancel_event if cancel_event is not None else current_cancel_event()
        self.allow_season_switch = (
            settings.allow_season_switch if allow_season_switch is None else allow_season_switch
        )
        self.state: NavigationState | None = None

    def __enter__(self) -> Navigator:
        return self

    def __exit__(self, *exc_info) -> None:
        self.transport.close()

    @property
    def html(self) -> str:
        return self._require_state().html

    def _require_state(self) -> NavigationState:
        if self.state is None:
            raise RuntimeError("Navigator.load() must be called first")
        return self.state

    def _check_cancelled(self, step: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            logger.info("navigator_cancelled", page=self.page.value, step=step)
            raise QueryCancelledError(f"Query cancelled before {step}")

    def load(self) -> NavigationState:
        self._check_cancelled(f"loading {self.page.value}")
        html = self.transport.load(self.page.url)
        self.state = NavigationState.from_html(html)
        logger.info(
            "navigator_loaded",
            page=self.page.value,
            transport=self.transport.name,
            seasons=len(self.state.seasons),
            schedules=len(self.state.schedules),
            teams=len(self.state.teams),
        )
        return self.state

    def _resolve(self, control: Control, query: str) -> SelectOption:
        state = self._require_state()
        options = state.options_for(control)
        if control is Control.SEASON:
            option = resolve_option(options, season_query_variants(query))
        elif control is Control.SCHEDULE:
            option = resolve_option(options, schedule_query_variants(query))
        else:
            option = resolve_option(options, [query], match_normalized=True)

        if option is None:
            available = ", ".join(o.label for o in options[:10]) or "none"
            raise NotFoundError(
                f'No {control.value} matching "{query}" (available: {available})',
                query=query,
                control=control.value,
            )
        return option

    def select(self, control: Control, query: str) -> NavigationState:
        """Resolve a query against one dropdown and select the matching option."""
        state = self._require_state()
        option = self._resolve(control, query)
        current = state.selected(control)

        if current is not None and current.value == option.value:
            logger.debug("navigator_skip_selected", control=control.value, label=option.label)
            return state

        if control is Control.SEASON and not self.allow_season_switch:
            raise HistoricalDataUnavailableError(query, current.label if current else None)

        logger.info(
            "navigator_select",
            control=control.value,
            query=query,
            label=option.label,
            transport=self.transport.name,
        )
        self._check_cancelled(f"selecting {control.value}")
        html = self.transport.select(state, control, option)
        self.state = NavigationState.from_html(html, previous=state)
        return self.state

    def navigate(
        self,
        season: str | None = None,
        schedule: str | None = None,
        team: str | None = None,
    ) -> NavigationState:
        """Load the page if needed and apply the given selections in order."""
        if self.state is None:
            self.load()
        for control, query in (
            (Control.SEASON, season),
            (Control.SCHEDULE, schedule),
            (Control.TEAM, team),
        ):
            if query:
                self.select(control, query)
        return self._require_state()

    def show_stats(self, category: StatCategory) -> NavigationState:
        """Press the players or goalies button and return the state with its table."""
        state = self._require_state()
        if category == "players":
            button_id, marker = state.layout.players_button_id, PLAYERS_TABLE_MARKER
        else:
            button_id, marker = state.layout.goalies_button_id, GOALIES_TABLE_MARKER

        logger.info("navigator_show_stats", category=category, button=button_id)
        self._check_cancelled(f"loading {category}")
        html = self.transport.trigger(state, button_id, marker)
        self.state = NavigationState.from_html(html, previous=state)
        return self.state
