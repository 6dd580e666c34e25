"""Stateful HTTP conversation with the upstream JSF application.

A JSF page keeps its UI state server-side. Replaying a browser's dropdown
changes therefore needs two pieces of state carried across requests: the
session cookie issued on the first GET and the view-state token, which the
server replaces on every round trip.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import httpx

from ..config import settings
from ..errors import TransportError, UpstreamTimeoutError
from ..logging import logger
from ..utils.html_parsing import parse_html

_CDATA_FRAGMENT = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)


@dataclass
class JSFSession:
    """Session state for one logical query.

    Owned by a single caller and mutated in place: ``view_state`` always holds
    the token from the most recent server response. Postbacks against one
    session must be serialized.
    """

    session_cookie: str
    view_state: str


def extract_updated_fragment(response_body: str, form_id: str) -> str | None:
    """Pull the HTML for ``form_id`` out of a JSF partial-response payload.

    Falls back to concatenating every CDATA fragment when no update is tagged
    with the form id, and returns None when the payload has no fragments.
    """
    targeted = re.search(
        rf'<update id="{re.escape(form_id)}"><!\[CDATA\[(.*?)\]\]></update>',
        response_body,
        re.DOTALL,
    )
    if targeted and targeted.group(1):
        return targeted.group(1)

    fragments = _CDATA_FRAGMENT.findall(response_body)
    return "".join(fragments) if fragments else None


class JSFClient:
    """httpx-backed client for JSF page loads and postbacks."""

    def __init__(self, client: httpx.Client | None = None, timeout_seconds: float | None = None) -> None:
        upstream = settings.upstream
        timeout = timeout_seconds or upstream.request_timeout_seconds
        self.client = client or httpx.Client(
            timeout=timeout,
            headers={
                "User-Agent": upstream.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.5",
            },
            follow_redirects=True,
        )
        self.cookie_name = upstream.session_cookie_name
        self.view_state_field = upstream.view_state_field
        self._cookie_pattern = re.compile(rf"{re.escape(self.cookie_name)}=([^;]+)")
        self._view_state_update = re.compile(
            rf'<update id="[^"]*{re.escape(self.view_state_field)}[^"]*"><!\[CDATA\[(.*?)\]\]></update>',
            re.DOTALL,
        )

    def __enter__(self) -> JSFClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise UpstreamTimeoutError(f"Timed out contacting {url}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc

        if not response.is_success:
            raise TransportError(
                f"HTTP {response.status_code}: {response.reason_phrase} ({url})",
                status_code=response.status_code,
            )
        return response

    def _view_state_from_html(self, html: str) -> str:
        field = parse_html(html).find("input", attrs={"name": self.view_state_field})
        return field.get("value", "") if field else ""

    def open_session(self, url: str) -> tuple[JSFSession, str]:
        """Load a page, capturing its session cookie and view-state token."""
        logger.info("jsf_session_open", url=url)
        response = self._send("GET", url)

        set_cookie = "; ".join(response.headers.get_list("set-cookie"))
        cookie_match = self._cookie_pattern.search(set_cookie)
        session_cookie = cookie_match.group(1) if cookie_match else ""

        html = response.text
        session = JSFSession(session_cookie=session_cookie, view_state=self._view_state_from_html(html))
        if not session.session_cookie or not session.view_state:
            logger.warning(
                "jsf_session_incomplete",
                url=url,
                has_cookie=bool(session.session_cookie),
                has_view_state=bool(session.view_state),
            )
        return session, html

    def submit_postback(
        self,
        url: str,
        session: JSFSession,
        form_fields: dict[str, str],
        *,
        partial: bool = True,
    ) -> str:
        """POST form fields with the current view state and return the response body.

        On success the view-state token in ``session`` is replaced with the one
        carried by the response.
        """
        body = {**form_fields, self.view_state_field: session.view_state}
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        target = url
        if session.session_cookie:
            target = f"{url};jsessionid={session.session_cookie}"
            headers["Cookie"] = f"{self.cookie_name}={session.session_cookie}"
        if partial:
            headers["Faces-Request"] = "partial/ajax"

        logger.info("jsf_postback_submitted", url=url, fields=sorted(form_fields))
        response = self._send("POST", target, data=body, headers=headers)
        text = response.text

        match = self._view_state_update.search(text)
        if match and match.group(1):
            session.view_state = match.group(1)
        else:
            refreshed = self._view_state_from_html(text)
            if refreshed:
                session.view_state = refreshed
        return text
