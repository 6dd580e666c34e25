"""Raw HTTP transport: replays the JSF partial-ajax postbacks with httpx."""

from __future__ import annotations

from ..jsf.session import JSFClient, JSFSession, extract_updated_fragment
from ..logging import logger
from ..models import SelectOption
from .base import Control, NavigationState, NavigationTransport

# Value the page submits for a dropdown that has no choice yet
UNSELECTED_VALUE = "0"

_CONTROL_ORDER = (Control.SEASON, Control.SCHEDULE, Control.TEAM)


def build_postback_fields(
    state: NavigationState,
    control: Control,
    option: SelectOption,
) -> dict[str, str]:
    """Form fields for changing one dropdown.

    Controls upstream of the changed one keep their current selection, the
    changed one carries the target value and the ones downstream are reset,
    since the server re-populates them from the new choice.
    """
    layout = state.layout
    fields: dict[str, str] = {}
    changed_index = _CONTROL_ORDER.index(control)
    for index, current in enumerate(_CONTROL_ORDER):
        field = state.field_for(current)
        if not field:
            continue
        if index < changed_index:
            selected = state.selected(current)
            fields[field] = selected.value if selected else UNSELECTED_VALUE
        elif index == changed_index:
            fields[field] = option.value
        else:
            fields[field] = UNSELECTED_VALUE

    source = state.select_id_for(control) or state.field_for(control) or layout.form_id
    fields.update(_ajax_markers(layout.form_id, source))
    fields[layout.submit_field] = "1"
    return fields


def build_trigger_fields(state: NavigationState, button_id: str) -> dict[str, str]:
    """Form fields for pressing a button with the current selections."""
    layout = state.layout
    fields: dict[str, str] = {}
    for control in _CONTROL_ORDER:
        field = state.field_for(control)
        if not field:
            continue
        selected = state.selected(control)
        fields[field] = selected.value if selected else UNSELECTED_VALUE
    fields[button_id] = button_id
    fields.update(_ajax_markers(layout.form_id, button_id))
    fields[layout.submit_field] = "1"
    return fields


def _ajax_markers(form_id: str, source: str) -> dict[str, str]:
    return {
        "javax.faces.partial.ajax": "true",
        "javax.faces.source": source,
        "javax.faces.partial.execute": form_id,
        "javax.faces.partial.render": form_id,
    }


class HttpTransport(NavigationTransport):
    """Navigates with plain HTTP requests and parses the returned fragments.

    Cheap and fast, but only sees what the server renders; data filled in by
    client-side script after a postback is invisible to it.
    """

    name = "http"

    def __init__(self, client: JSFClient | None = None) -> None:
        self.client = client or JSFClient()
        self.session: JSFSession | None = None
        self.url: str | None = None

    def load(self, url: str) -> str:
        self.session, html = self.client.open_session(url)
        self.url = url
        return html

    def _postback(self, state: NavigationState, fields: dict[str, str]) -> str:
        if self.session is None or self.url is None:
            raise RuntimeError("HttpTransport.load() must be called before a postback")
        body = self.client.submit_postback(self.url, self.session, fields)
        fragment = extract_updated_fragment(body, state.layout.form_id)
        if fragment is None:
            logger.debug("jsf_postback_no_fragment", url=self.url, form_id=state.layout.form_id)
            return body
        return fragment

    def select(self, state: NavigationState, control: Control, option: SelectOption) -> str:
        return self._postback(state, build_postback_fields(state, control, option))

    def trigger(self, state: NavigationState, button_id: str, table_marker: str) -> str:
        return self._postback(state, build_trigger_fields(state, button_id))

    def close(self) -> None:
        self.client.close()
