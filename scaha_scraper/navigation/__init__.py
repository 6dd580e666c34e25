"""Navigation of the scoreboard and stats-central pages.

Two transports implement the same season -> schedule -> team protocol: raw
HTTP postbacks (fast, sees only server-rendered markup) and a headless
browser (slow, sees client-rendered tables).
"""

from __future__ import annotations

from typing import Literal

from ..config import settings
from .base import Control, NavigationState, NavigationTransport, Page
from .browser_transport import BrowserTransport
from .cancellation import cancellable, current_cancel_event
from .http_transport import HttpTransport
from .navigator import Navigator
from .queries import find_option, resolve_option, schedule_query_variants, season_query_variants

TransportKind = Literal["http", "browser"]


def make_transport(preferred: TransportKind) -> NavigationTransport:
    """Build the transport for an operation.

    ``preferred`` is the operation's natural transport; SCAHA_TRANSPORT=http
    or =browser overrides it for every operation.
    """
    mode = settings.transport_mode
    kind = preferred if mode == "auto" else mode
    if kind == "browser":
        return BrowserTransport()
    return HttpTransport()


__all__ = [
    "Control",
    "Page",
    "NavigationState",
    "NavigationTransport",
    "Navigator",
    "HttpTransport",
    "BrowserTransport",
    "make_transport",
    "cancellable",
    "current_cancel_event",
    "find_option",
    "resolve_option",
    "season_query_variants",
    "schedule_query_variants",
]
