"""Run orchestration: discover targets, capture them one by one, merge.

Execution is strictly sequential.  One browser process is held for the
discovery and capture phases and is closed before the merge, whatever
happened before it.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, ContextManager, List, Sequence

from loguru import logger

from pagebinder.capture.aggregator import merge_artifacts
from pagebinder.capture.browser import Browser, launch_browser
from pagebinder.capture.links import discover_targets, read_seed_file, seed_targets
from pagebinder.capture.models import CaptureJob, JobOutcome, RunReport
from pagebinder.capture.renderer import PageRenderer
from pagebinder.capture.retry import RetryController
from pagebinder.capture.store import ArtifactStore
from pagebinder.config import Settings, settings as default_settings

BrowserFactory = Callable[[Settings], ContextManager[Browser]]
Discover = Callable[[Browser], List[str]]


def capture_targets(
    targets: Sequence[str],
    renderer: PageRenderer,
    controller: RetryController,
) -> List[JobOutcome]:
    """Capture every target in order; one outcome per target, same order."""
    outcomes: List[JobOutcome] = []
    total = len(targets)
    for index, url in enumerate(targets):
        logger.info(f"Processing: {url} ({index + 1}/{total})")
        job = CaptureJob(url=url, index=index)
        outcomes.append(controller.run(job, renderer.capture))
    return outcomes


def report_outcomes(outcomes: Sequence[JobOutcome]) -> None:
    """Log a single summary over all job outcomes."""
    failed = [o for o in outcomes if not o.succeeded]
    logger.info(
        f"Captured {len(outcomes) - len(failed)}/{len(outcomes)} page(s)"
    )
    for outcome in failed:
        logger.warning(
            f"Skipped #{outcome.job.index} {outcome.job.url} "
            f"after {outcome.job.attempts} attempt(s): {outcome.error}"
        )


def _run(
    discover: Discover,
    output: str | Path,
    *,
    store: ArtifactStore,
    cfg: Settings,
    css: str,
    browser_factory: BrowserFactory,
    sleep: Callable[[float], None],
) -> RunReport:
    controller = RetryController(
        max_attempts=cfg.max_attempts,
        timeout_delay=cfg.timeout_retry_delay,
        success_cooldown=cfg.success_cooldown,
        sleep=sleep,
    )

    with browser_factory(cfg) as browser:
        targets = discover(browser)
        report = RunReport(targets=list(targets))
        if targets:
            store.ensure()
            renderer = PageRenderer(
                browser,
                store,
                timeout_ms=cfg.navigation_timeout_ms,
                css=css,
                page_format=cfg.page_format,
            )
            report.outcomes = capture_targets(targets, renderer, controller)

    report_outcomes(report.outcomes)
    report.output_path = merge_artifacts(store.artifacts(), output)
    return report


def bind_seed_file(
    input_file: str | Path,
    output: str | Path,
    *,
    expand: bool = False,
    store: ArtifactStore | None = None,
    cfg: Settings | None = None,
    browser_factory: BrowserFactory = launch_browser,
    sleep: Callable[[float], None] = time.sleep,
) -> RunReport:
    """Capture the URLs listed in *input_file* and merge them into *output*.

    The file is read before the browser starts, so an unreadable file fails
    fast with :class:`~pagebinder.capture.errors.InputFileError`.
    """
    cfg = cfg or default_settings
    seeds = read_seed_file(input_file)
    store = store or ArtifactStore(cfg.temp_dir)

    def discover(browser: Browser) -> List[str]:
        return seed_targets(
            browser,
            seeds,
            expand=expand,
            timeout_ms=cfg.navigation_timeout_ms,
            selector=cfg.link_selector,
        )

    return _run(
        discover,
        output,
        store=store,
        cfg=cfg,
        css=cfg.widen_css,
        browser_factory=browser_factory,
        sleep=sleep,
    )


def bind_base_url(
    base_url: str,
    output: str | Path,
    *,
    store: ArtifactStore | None = None,
    cfg: Settings | None = None,
    browser_factory: BrowserFactory = launch_browser,
    sleep: Callable[[float], None] = time.sleep,
) -> RunReport:
    """Capture every page linked from the navigation of *base_url*.

    Unlike seed-file runs, only the content container is widened
    (``crawl_widen_selector``); ``body`` keeps its own layout.
    """
    cfg = cfg or default_settings
    store = store or ArtifactStore(cfg.temp_dir)

    def discover(browser: Browser) -> List[str]:
        return discover_targets(
            browser,
            base_url,
            timeout_ms=cfg.navigation_timeout_ms,
            selector=cfg.nav_selector,
        )

    return _run(
        discover,
        output,
        store=store,
        cfg=cfg,
        css=cfg.crawl_widen_css,
        browser_factory=browser_factory,
        sleep=sleep,
    )
