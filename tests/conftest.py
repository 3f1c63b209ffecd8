"""Shared browser doubles for the capture pipeline tests.

``FakeBrowser`` stands in for the Playwright-backed browser: every session it
hands out records what was asked of it, and per-URL scripts decide whether a
navigation succeeds, times out, or errors.  ``render_to_file`` writes a real
one-page PDF whose page width identifies the URL, so merge order can be
checked on the output document.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from pypdf import PdfWriter


def write_pdf(path: Path, width: float, height: float = 100) -> Path:
    """Write a single blank page of the given size to *path*."""
    writer = PdfWriter()
    writer.add_blank_page(width=width, height=height)
    with open(path, "wb") as fh:
        writer.write(fh)
    return path


class FakeSession:
    def __init__(self, browser: "FakeBrowser") -> None:
        self.browser = browser
        self.url: Optional[str] = None
        self.styles: List[str] = []
        self.close_calls = 0

    def navigate(self, url: str, timeout_ms: int) -> None:
        self.url = url
        self.browser.navigations.append((url, timeout_ms))
        script = self.browser.failures.get(url)
        if script:
            exc = script.pop(0)
            if exc is not None:
                raise exc

    def inject_style(self, css: str) -> None:
        self.styles.append(css)

    def render_to_file(self, path: Path, page_format: str) -> None:
        self.browser.formats.append(page_format)
        if self.url in self.browser.render_failures:
            Path(path).write_bytes(b"%PDF-1.4 truncated")
            raise self.browser.render_failures[self.url]
        write_pdf(Path(path), width=self.browser.widths.get(self.url, 100))

    def extract_links(self, selector: str) -> List[str]:
        self.browser.selectors.append(selector)
        return list(self.browser.links.get(self.url, []))

    def close(self) -> None:
        self.close_calls += 1
        if self.browser.close_error is not None:
            raise self.browser.close_error


class FakeBrowser:
    def __init__(self) -> None:
        self.sessions: List[FakeSession] = []
        self.navigations: List[tuple] = []
        self.selectors: List[str] = []
        self.formats: List[str] = []
        self.failures: Dict[str, list] = {}
        self.render_failures: Dict[str, Exception] = {}
        self.links: Dict[str, List[str]] = {}
        self.widths: Dict[str, float] = {}
        self.close_error: Optional[Exception] = None
        self.launched = 0
        self.shut_down = 0

    def open_session(self) -> FakeSession:
        session = FakeSession(self)
        self.sessions.append(session)
        return session

    @property
    def navigated_urls(self) -> List[str]:
        return [url for url, _ in self.navigations]

    def factory(self):
        """A ``launch_browser`` replacement that yields this fake."""

        @contextmanager
        def _launch(cfg):
            self.launched += 1
            try:
                yield self
            finally:
                self.shut_down += 1

        return _launch


@pytest.fixture
def browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def make_pdf():
    return write_pdf


@pytest.fixture
def no_sleep():
    """A recording stand-in for ``time.sleep``."""
    calls: List[float] = []

    def _sleep(seconds: float) -> None:
        calls.append(seconds)

    _sleep.calls = calls
    return _sleep
