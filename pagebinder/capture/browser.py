"""Playwright-backed rendering capability.

A single Chromium process is held open for a whole run (see
:func:`launch_browser`); every navigation gets its own :class:`PageSession`,
which wraps one Playwright page and translates Playwright failures into the
pipeline's error taxonomy.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Protocol

from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from pagebinder.capture.errors import NavigationError, NavigationTimeout, RenderError
from pagebinder.config import Settings

_EXTRACT_HREFS = "anchors => anchors.map(a => a.href)"


class Session(Protocol):
    def navigate(self, url: str, timeout_ms: int) -> None: ...

    def inject_style(self, css: str) -> None: ...

    def render_to_file(self, path: Path, page_format: str) -> None: ...

    def extract_links(self, selector: str) -> List[str]: ...

    def close(self) -> None: ...


class Browser(Protocol):
    def open_session(self) -> Session: ...


class PageSession:
    """One browser tab, used for exactly one navigation."""

    def __init__(self, page: Page) -> None:
        self._page = page

    def navigate(self, url: str, timeout_ms: int) -> None:
        """Load *url* and wait for network idle.

        Raises:
            NavigationTimeout: If the page is not idle within *timeout_ms*.
            NavigationError: For any other navigation failure.
        """
        try:
            self._page.goto(url, wait_until="networkidle", timeout=timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise NavigationTimeout(f"{url} not idle after {timeout_ms} ms") from exc
        except PlaywrightError as exc:
            raise NavigationError(f"navigation to {url} failed: {exc}") from exc

    def inject_style(self, css: str) -> None:
        try:
            self._page.add_style_tag(content=css)
        except PlaywrightError as exc:
            raise RenderError(f"style injection failed: {exc}") from exc

    def render_to_file(self, path: Path, page_format: str) -> None:
        try:
            self._page.pdf(path=str(path), format=page_format)
        except PlaywrightError as exc:
            raise RenderError(f"PDF output to {path} failed: {exc}") from exc

    def extract_links(self, selector: str) -> List[str]:
        """Return the resolved ``href`` of every anchor matching *selector*."""
        try:
            hrefs = self._page.eval_on_selector_all(selector, _EXTRACT_HREFS)
        except PlaywrightError as exc:
            raise NavigationError(f"link extraction failed: {exc}") from exc
        return [href for href in hrefs if href]

    def close(self) -> None:
        self._page.close()


class PlaywrightBrowser:
    """Owner of the Chromium process; hands out fresh sessions."""

    def __init__(self, browser) -> None:
        self._browser = browser

    def open_session(self) -> PageSession:
        return PageSession(self._browser.new_page())


def release_session(session: Session) -> None:
    """Close *session*, logging instead of raising if the close itself fails."""
    try:
        session.close()
    except Exception as exc:  # noqa: BLE001
        logger.warning(f"Failed to close browser session: {exc}")


@contextmanager
def open_session(browser: Browser) -> Iterator[Session]:
    """Yield a fresh session that is released on every exit path."""
    session = browser.open_session()
    try:
        yield session
    finally:
        release_session(session)


@contextmanager
def launch_browser(settings: Settings) -> Iterator[PlaywrightBrowser]:
    """Start Chromium for the duration of a run.

    The browser and the Playwright driver are shut down on the way out, even
    when discovery, capture or merge raised.
    """
    playwright = sync_playwright().start()
    chromium = None
    try:
        chromium = playwright.chromium.launch(headless=settings.headless)
        logger.debug(f"Chromium launched (headless={settings.headless})")
        yield PlaywrightBrowser(chromium)
    finally:
        if chromium is not None:
            try:
                chromium.close()
            except PlaywrightError as exc:
                logger.warning(f"Failed to close browser: {exc}")
        playwright.stop()
