"""Link source: decide which pages a run captures, and in what order."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from loguru import logger

from pagebinder.capture.browser import Browser, open_session
from pagebinder.capture.errors import DiscoveryError, InputFileError
from pagebinder.capture.models import LinkSet


def read_seed_file(path: str | Path) -> List[str]:
    """Return the non-blank lines of *path*, stripped, in file order.

    Raises:
        InputFileError: If the file cannot be read.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputFileError(f"Error reading input file {path}: {exc}") from exc
    return [line.strip() for line in text.splitlines() if line.strip()]


def seed_targets(
    browser: Browser,
    seeds: Sequence[str],
    *,
    expand: bool,
    timeout_ms: int,
    selector: str = "a",
) -> List[str]:
    """Targets for an explicit seed list.

    Without *expand* the seeds come back untouched: same order, duplicates
    kept.  With *expand* every anchor found on each seed page is added, the
    whole set is deduplicated and returned in lexicographic order.  A seed
    whose page cannot be loaded is logged and skipped.
    """
    if not expand:
        return list(seeds)

    links = LinkSet(seeds)
    for seed in seeds:
        try:
            with open_session(browser) as session:
                session.navigate(seed, timeout_ms)
                found = session.extract_links(selector)
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Error scraping sublinks from {seed}: {exc}")
            continue
        logger.debug(f"{seed}: {len(found)} sublink(s)")
        links.update(found)

    logger.info(f"Expanded {len(seeds)} seed(s) to {len(links)} unique link(s)")
    return links.sorted()


def discover_targets(
    browser: Browser,
    base_url: str,
    *,
    timeout_ms: int,
    selector: str = "nav a",
) -> List[str]:
    """Targets found in the navigation of *base_url*, scoped to its subtree.

    Raises:
        DiscoveryError: If the base page cannot be loaded or read.  Nothing
            here is retried.
    """
    try:
        with open_session(browser) as session:
            session.navigate(base_url, timeout_ms)
            found = session.extract_links(selector)
    except Exception as exc:  # noqa: BLE001
        raise DiscoveryError(f"Could not discover links under {base_url}: {exc}") from exc

    links = LinkSet(href for href in found if href.startswith(base_url))
    logger.info(f"Discovered {len(links)} page(s) under {base_url}")
    return links.sorted()
