"""Cooperative cancellation of a running query.

Tool calls run in worker threads. The caller binds a ``threading.Event`` to
the worker's context with :func:`cancellable`; every navigator created there
checks it before each upstream step.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

_cancel_event: ContextVar[threading.Event | None] = ContextVar("scaha_cancel_event", default=None)


@contextmanager
def cancellable(event: threading.Event) -> Iterator[threading.Event]:
    """Bind ``event`` as the cancellation signal for queries run in this context."""
    token = _cancel_event.set(event)
    try:
        yield event
    finally:
        _cancel_event.reset(token)


def current_cancel_event() -> threading.Event | None:
    return _cancel_event.get()
