"""Page renderer: one attempt at turning a URL into a PDF capture."""

from __future__ import annotations

from loguru import logger

from pagebinder.capture.browser import Browser, open_session
from pagebinder.capture.models import CaptureArtifact, CaptureJob
from pagebinder.capture.store import ArtifactStore


class PageRenderer:
    """Navigate, widen the layout, and print one page into the store.

    None of the steps is retried here; retry is the controller's job.  A
    failed attempt leaves no file behind and registers nothing.
    """

    def __init__(
        self,
        browser: Browser,
        store: ArtifactStore,
        *,
        timeout_ms: int,
        css: str,
        page_format: str = "A4",
    ) -> None:
        self.browser = browser
        self.store = store
        self.timeout_ms = timeout_ms
        self.css = css
        self.page_format = page_format

    def capture(self, job: CaptureJob) -> CaptureArtifact:
        path = self.store.path_for(job.index)
        try:
            with open_session(self.browser) as session:
                session.navigate(job.url, self.timeout_ms)
                session.inject_style(self.css)
                session.render_to_file(path, self.page_format)
        except Exception:
            self.store.discard(job.index)
            raise

        artifact = self.store.register(job)
        logger.debug(f"Captured {job.url} -> {artifact.path}")
        return artifact
