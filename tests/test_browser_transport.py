"""Tests for navigation/browser_transport.py with a mocked Playwright driver."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from conftest import full_page, scoreboard_form
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from scaha_scraper.config import BrowserConfig
from scaha_scraper.errors import TransportError, UpstreamTimeoutError
from scaha_scraper.navigation import Control, NavigationState
from scaha_scraper.navigation.browser_transport import BrowserTransport

URL = "https://www.scaha.net/scaha/scoreboard.xhtml"


@pytest.fixture
def driver():
    """Mock sync_playwright() factory wired to a mock browser and page."""
    factory = MagicMock()
    playwright = factory.return_value.start.return_value
    browser = playwright.chromium.launch.return_value
    page = browser.new_context.return_value.new_page.return_value
    page.goto.return_value = MagicMock(ok=True, status=200)
    page.content.return_value = full_page(scoreboard_form())
    return factory, playwright, browser, page


def _transport(driver, **config) -> BrowserTransport:
    factory = driver[0]
    return BrowserTransport(config=BrowserConfig(**config), playwright_factory=factory)


class TestLoad:
    """Tests for BrowserTransport.load."""

    def test_launch_and_goto(self, driver):
        _, playwright, browser, page = driver
        transport = _transport(driver, executable_path="/usr/bin/chromium")
        html = transport.load(URL)

        assert "j_id_4d" in html
        launch_kwargs = playwright.chromium.launch.call_args.kwargs
        assert launch_kwargs["headless"] is True
        assert launch_kwargs["executable_path"] == "/usr/bin/chromium"
        context_kwargs = browser.new_context.call_args.kwargs
        assert context_kwargs["viewport"] == {"width": 1280, "height": 720}
        page.goto.assert_called_once_with(URL, wait_until="networkidle", timeout=30000)

    def test_no_executable_path_by_default(self, driver):
        _, playwright, _, _ = driver
        _transport(driver).load(URL)
        assert "executable_path" not in playwright.chromium.launch.call_args.kwargs

    def test_error_status_raises(self, driver):
        page = driver[3]
        page.goto.return_value = MagicMock(ok=False, status=502, status_text="Bad Gateway")
        with pytest.raises(TransportError) as exc_info:
            _transport(driver).load(URL)
        assert exc_info.value.status_code == 502

    def test_timeout_maps_to_upstream_timeout(self, driver):
        driver[3].goto.side_effect = PlaywrightTimeoutError("Timeout 30000ms exceeded")
        with pytest.raises(UpstreamTimeoutError):
            _transport(driver).load(URL)

    def test_browser_error_maps_to_transport_error(self, driver):
        driver[3].goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")
        with pytest.raises(TransportError) as exc_info:
            _transport(driver).load(URL)
        assert not isinstance(exc_info.value, UpstreamTimeoutError)


class TestInteractions:
    """Tests for BrowserTransport.select and trigger."""

    def test_select_targets_control_by_id(self, driver):
        page = driver[3]
        transport = _transport(driver)
        state = NavigationState.from_html(transport.load(URL))
        transport.select(state, Control.SCHEDULE, state.schedules[1])

        page.select_option.assert_called_once_with('[id="j_id_4d:j_id_4nInner"]', "101", timeout=15000)
        page.expect_response.assert_called_once()
        page.wait_for_load_state.assert_called_with("networkidle", timeout=15000)

    def test_trigger_waits_for_table_rows(self, driver):
        page = driver[3]
        transport = _transport(driver)
        state = NavigationState.from_html(transport.load(URL))
        transport.trigger(state, "j_id_4d:j_id_4w", "playertotals")

        page.click.assert_called_once_with('[id="j_id_4d:j_id_4w"]', timeout=15000)
        page.wait_for_selector.assert_called_once_with('table[id*="playertotals"] tr', timeout=15000)

    def test_selector_timeout(self, driver):
        page = driver[3]
        page.wait_for_selector.side_effect = PlaywrightTimeoutError("Timeout 15000ms exceeded")
        transport = _transport(driver)
        state = NavigationState.from_html(transport.load(URL))
        with pytest.raises(UpstreamTimeoutError):
            transport.trigger(state, "j_id_4d:j_id_4x", "goalietotals")

    def test_interaction_before_load_is_an_error(self, driver):
        state = NavigationState.from_html(full_page(scoreboard_form()))
        with pytest.raises(RuntimeError):
            _transport(driver).select(state, Control.SEASON, state.seasons[0])


class TestClose:
    """Tests for BrowserTransport.close."""

    def test_close_releases_browser_and_driver(self, driver):
        _, playwright, browser, _ = driver
        with _transport(driver) as transport:
            transport.load(URL)
        browser.close.assert_called_once()
        playwright.stop.assert_called_once()
        assert transport.page is None

    def test_close_without_load(self, driver):
        _transport(driver).close()

    def test_driver_stopped_even_if_browser_close_fails(self, driver):
        _, playwright, browser, _ = driver
        browser.close.side_effect = PlaywrightError("Target closed")
        transport = _transport(driver)
        transport.load(URL)
        transport.close()
        playwright.stop.assert_called_once()

    def test_default_driver_is_sync_playwright(self):
        assert BrowserTransport()._factory is sync_playwright
