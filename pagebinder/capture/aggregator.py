"""Merge the per-page captures into the final document."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from loguru import logger
from pypdf import PdfWriter

from pagebinder.capture.errors import AggregationError
from pagebinder.capture.models import CaptureArtifact


def merge_artifacts(artifacts: Iterable[CaptureArtifact], output_path: str | Path) -> Path:
    """Concatenate *artifacts* in ascending index order into *output_path*.

    Pages are appended as-is; nothing is re-rendered.  Gaps left by exhausted
    jobs are not filled.

    The document is written beside *output_path* and moved into place, so a
    failed write never leaves a truncated file at the destination.

    Args:
        artifacts: Captures actually produced by the run.
        output_path: Destination PDF; parent directories are created.

    Returns:
        The path of the written document.

    Raises:
        AggregationError: If there is nothing to merge, or a capture cannot be
            read, or the output cannot be written.
    """
    ordered = sorted(artifacts, key=lambda a: a.index)
    if not ordered:
        raise AggregationError("No pages were captured; nothing to merge.")

    out = Path(output_path)
    partial = out.with_name(f".{out.name}.part")
    writer = PdfWriter()
    try:
        for artifact in ordered:
            writer.append(str(artifact.path))
        out.parent.mkdir(parents=True, exist_ok=True)
        with partial.open("wb") as fh:
            writer.write(fh)
        partial.replace(out)
    except Exception as exc:  # noqa: BLE001
        partial.unlink(missing_ok=True)
        raise AggregationError(f"Failed to merge into {out}: {exc}") from exc

    logger.info(f"Merged {len(ordered)} page capture(s) into {out}")
    return out
