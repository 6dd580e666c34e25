"""Fail-fast environment validation for the SCAHA scraper service."""

from __future__ import annotations

import os
from functools import lru_cache
from urllib.parse import urlparse

ALLOWED_ENVIRONMENTS = {"development", "staging", "production"}
ALLOWED_TRANSPORTS = {"auto", "http", "browser"}

DEFAULT_BASE_URL = "https://www.scaha.net"


def validate_environment_value(environment: str) -> None:
    """Ensure ENVIRONMENT is one of the allowed values."""
    if environment not in ALLOWED_ENVIRONMENTS:
        allowed = ", ".join(sorted(ALLOWED_ENVIRONMENTS))
        raise RuntimeError(f"ENVIRONMENT must be one of: {allowed}.")


def validate_transport_value(transport: str) -> None:
    """Ensure SCAHA_TRANSPORT names a known navigation strategy."""
    if transport not in ALLOWED_TRANSPORTS:
        allowed = ", ".join(sorted(ALLOWED_TRANSPORTS))
        raise RuntimeError(f"SCAHA_TRANSPORT must be one of: {allowed}.")


def validate_non_local_url(name: str, value: str) -> None:
    """Ensure a URL does not point to localhost in production."""
    parsed = urlparse(value)
    host = parsed.hostname
    if not host:
        raise RuntimeError(f"{name} must be a valid URL (missing hostname).")
    if host in {"localhost", "127.0.0.1"}:
        raise RuntimeError(f"{name} must not point to localhost in production.")


@lru_cache(maxsize=1)
def validate_env() -> None:
    """Validate environment variables before settings are built.

    Nothing is strictly required: every variable has a default. Values that
    are present must be well-formed, and production must talk to a real
    upstream host.
    """
    environment = (os.getenv("ENVIRONMENT") or "development").strip()
    validate_environment_value(environment)

    transport = (os.getenv("SCAHA_TRANSPORT") or "auto").strip()
    validate_transport_value(transport)

    base_url = (os.getenv("SCAHA_BASE_URL") or DEFAULT_BASE_URL).strip()
    if environment == "production":
        validate_non_local_url("SCAHA_BASE_URL", base_url)
