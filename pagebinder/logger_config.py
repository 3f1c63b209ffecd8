"""Loguru sink configuration shared by the CLI and the capture pipeline."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger


def configure_logging(level: str = "INFO", log_dir: Path | None = None) -> None:
    """Route pipeline logs to stderr and, optionally, to rotating log files.

    Args:
        level: Minimum level for the stderr sink (``"DEBUG"``, ``"INFO"`` …).
        log_dir: When given, a ``pagebinder_{time}.log`` file sink is added
            there at ``DEBUG`` level.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "pagebinder_{time}.log",
            rotation="256 MB",  # split once a file reaches 256 MB
            retention="10 days",
            compression="zip",
            encoding="utf-8",
            level="DEBUG",
        )
