"""Unit tests for the Playwright wrapper.

Playwright itself is never launched: pages and the driver are ``MagicMock``
objects, and the tests check that Playwright failures are translated into the
pipeline's own exceptions.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from pagebinder.capture.browser import (
    PageSession,
    PlaywrightBrowser,
    launch_browser,
    open_session,
    release_session,
)
from pagebinder.capture.errors import NavigationError, NavigationTimeout, RenderError
from pagebinder.config import Settings


class TestPageSession:
    def test_navigate_waits_for_network_idle(self) -> None:
        page = MagicMock()
        PageSession(page).navigate("https://a.example/", 60_000)
        page.goto.assert_called_once_with(
            "https://a.example/", wait_until="networkidle", timeout=60_000
        )

    def test_timeout_is_classified(self) -> None:
        page = MagicMock()
        page.goto.side_effect = PlaywrightTimeoutError("Timeout 60000ms exceeded.")
        with pytest.raises(NavigationTimeout):
            PageSession(page).navigate("https://a.example/", 60_000)

    def test_other_navigation_error(self) -> None:
        page = MagicMock()
        page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")
        with pytest.raises(NavigationError):
            PageSession(page).navigate("https://a.example/", 60_000)

    def test_inject_style(self) -> None:
        page = MagicMock()
        PageSession(page).inject_style("body { max-width: none; }")
        page.add_style_tag.assert_called_once_with(content="body { max-width: none; }")

    def test_render_to_file(self, tmp_path) -> None:
        page = MagicMock()
        PageSession(page).render_to_file(tmp_path / "page_0.pdf", "A4")
        page.pdf.assert_called_once_with(path=str(tmp_path / "page_0.pdf"), format="A4")

    def test_render_failure(self, tmp_path) -> None:
        page = MagicMock()
        page.pdf.side_effect = PlaywrightError("Target closed")
        with pytest.raises(RenderError):
            PageSession(page).render_to_file(Path("x.pdf"), "A4")

    def test_extract_links_drops_empty_hrefs(self) -> None:
        page = MagicMock()
        page.eval_on_selector_all.return_value = ["https://a.example/1", "", "https://a.example/2"]
        links = PageSession(page).extract_links("nav a")
        assert links == ["https://a.example/1", "https://a.example/2"]
        assert page.eval_on_selector_all.call_args.args[0] == "nav a"


class TestSessionRelease:
    def test_release_swallows_close_errors(self) -> None:
        session = MagicMock()
        session.close.side_effect = PlaywrightError("already closed")
        release_session(session)
        session.close.assert_called_once()

    def test_open_session_closes_on_error(self) -> None:
        page = MagicMock()
        chromium = MagicMock()
        chromium.new_page.return_value = page

        with pytest.raises(RuntimeError):
            with open_session(PlaywrightBrowser(chromium)):
                raise RuntimeError("boom")

        page.close.assert_called_once()


class TestLaunchBrowser:
    def test_browser_and_driver_stopped_on_error(self) -> None:
        driver = MagicMock()
        with patch("pagebinder.capture.browser.sync_playwright") as mock_sync:
            mock_sync.return_value.start.return_value = driver
            with pytest.raises(RuntimeError):
                with launch_browser(Settings(headless=True)):
                    raise RuntimeError("merge failed")

        driver.chromium.launch.assert_called_once_with(headless=True)
        driver.chromium.launch.return_value.close.assert_called_once()
        driver.stop.assert_called_once()

    def test_yields_session_factory(self) -> None:
        driver = MagicMock()
        with patch("pagebinder.capture.browser.sync_playwright") as mock_sync:
            mock_sync.return_value.start.return_value = driver
            with launch_browser(Settings(headless=True)) as browser:
                session = browser.open_session()

        assert isinstance(session, PageSession)
        driver.chromium.launch.return_value.new_page.assert_called_once()
