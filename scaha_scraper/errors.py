"""Exceptions raised while navigating and scraping the upstream site."""

from __future__ import annotations


class ScahaError(RuntimeError):
    """Base class for every error surfaced to the tool boundary."""


class TransportError(ScahaError):
    """Raised on a non-success HTTP status or a network failure upstream.

    Not retried automatically.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamTimeoutError(TransportError):
    """Raised when a page load, postback or selector wait exceeds its bound."""


class NotFoundError(ScahaError):
    """Raised when a season/schedule/team/player query matches nothing."""

    def __init__(self, message: str, query: str | None = None, control: str | None = None) -> None:
        super().__init__(message)
        self.query = query
        self.control = control


class ExtractionEmptyError(NotFoundError):
    """Raised when navigation succeeded but a required result came back empty."""


class HistoricalDataUnavailableError(ScahaError):
    """Raised instead of returning another season's cached data.

    The upstream application answers an AJAX season switch with whatever
    season it cached last, so only the season selected by default is safe.
    """

    def __init__(self, requested: str, active: str | None) -> None:
        active_label = active or "unknown"
        super().__init__(
            f'Season "{requested}" is not the active season ("{active_label}"). '
            "Historical seasons cannot be retrieved reliably through the postback path "
            "because the site returns cached data for the previous season. "
            "Use full-page browser navigation or consult scaha.net directly."
        )
        self.requested = requested
        self.active = active


class QueryCancelledError(ScahaError):
    """Raised inside a query whose caller has gone away.

    Checked between upstream steps, so a step already in flight finishes
    (or times out) before the query stops and its transport is closed.
    """
