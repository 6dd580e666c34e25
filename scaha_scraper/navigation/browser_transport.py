"""Playwright-backed transport that drives the pages in headless Chromium.

The upstream pages re-render the schedule grid and the rosters with client
script after each postback, so operations that read those need a real browser.
Each instance owns one browser process for one query; always close it.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from ..config import BrowserConfig, settings
from ..errors import NotFoundError, TransportError, UpstreamTimeoutError
from ..logging import logger
from ..models import SelectOption
from .base import Control, NavigationState, NavigationTransport


def _id_selector(element_id: str) -> str:
    # JSF ids contain ":" which a plain "#id" selector would misread
    return f'[id="{element_id}"]'


class BrowserTransport(NavigationTransport):
    """Navigates by driving the live page, waiting for each postback to settle."""

    name = "browser"

    def __init__(
        self,
        config: BrowserConfig | None = None,
        playwright_factory: Callable | None = None,
    ) -> None:
        self.config = config or settings.browser
        self._factory = playwright_factory or sync_playwright
        self._playwright = None
        self._browser = None
        self.page = None

    def _start(self) -> None:
        cfg = self.config
        launch_kwargs: dict = {"headless": cfg.headless, "args": list(cfg.launch_args)}
        if cfg.executable_path:
            launch_kwargs["executable_path"] = cfg.executable_path

        with self._browser_errors("launching browser"):
            self._playwright = self._factory().start()
            self._browser = self._playwright.chromium.launch(**launch_kwargs)
            context = self._browser.new_context(
                user_agent=cfg.user_agent,
                viewport={"width": cfg.viewport_width, "height": cfg.viewport_height},
            )
            self.page = context.new_page()
        logger.info("browser_started", headless=cfg.headless, executable_path=cfg.executable_path)

    @contextmanager
    def _browser_errors(self, step: str) -> Iterator[None]:
        try:
            yield
        except PlaywrightTimeoutError as exc:
            logger.warning("browser_step_timeout", step=step)
            raise UpstreamTimeoutError(f"Timed out {step}") from exc
        except PlaywrightError as exc:
            raise TransportError(f"Browser failure while {step}: {exc}") from exc

    def load(self, url: str) -> str:
        if self.page is None:
            self._start()
        with self._browser_errors(f"loading {url}"):
            response = self.page.goto(
                url,
                wait_until="networkidle",
                timeout=self.config.page_load_timeout_ms,
            )
            if response is not None and not response.ok:
                raise TransportError(
                    f"HTTP {response.status}: {response.status_text} ({url})",
                    status_code=response.status,
                )
            return self.page.content()

    def _await_postback(self, action: Callable[[], None]) -> None:
        """Run an action that fires an AJAX postback and wait for the page to settle."""
        timeout = self.config.network_idle_timeout_ms
        with self.page.expect_response(lambda r: r.request.method == "POST", timeout=timeout):
            action()
        self.page.wait_for_load_state("networkidle", timeout=timeout)

    def _require_page(self) -> None:
        if self.page is None:
            raise RuntimeError("BrowserTransport.load() must be called before interacting")

    def select(self, state: NavigationState, control: Control, option: SelectOption) -> str:
        self._require_page()
        select_id = state.select_id_for(control)
        field = state.field_for(control)
        if select_id:
            selector = _id_selector(select_id)
        elif field:
            selector = f'select[name="{field}"]'
        else:
            raise NotFoundError(f"No {control.value} dropdown on the page", control=control.value)

        logger.debug("browser_select", control=control.value, selector=selector, value=option.value)
        with self._browser_errors(f"selecting {control.value} {option.label!r}"):
            self._await_postback(
                lambda: self.page.select_option(
                    selector, option.value, timeout=self.config.selector_timeout_ms
                )
            )
            return self.page.content()

    def trigger(self, state: NavigationState, button_id: str, table_marker: str) -> str:
        self._require_page()
        timeout = self.config.selector_timeout_ms
        with self._browser_errors(f"loading {table_marker} table"):
            self._await_postback(lambda: self.page.click(_id_selector(button_id), timeout=timeout))
            self.page.wait_for_selector(f'table[id*="{table_marker}"] tr', timeout=timeout)
            return self.page.content()

    def close(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._browser = self._playwright = self.page = None
        try:
            if browser is not None:
                browser.close()
        except PlaywrightError as exc:
            logger.warning("browser_close_failed", error=str(exc))
        finally:
            if playwright is not None:
                playwright.stop()
