"""Scratch directory holding one PDF per captured page."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Dict, List

from loguru import logger

from pagebinder.capture.models import CaptureArtifact, CaptureJob


class ArtifactStore:
    """Owns the per-run scratch directory and the artifacts written into it.

    File names derive from the job's sequence index only, so they are stable
    across runs and never collide.  The store never removes its directory on
    its own; :meth:`dispose` is the caller's decision.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self._artifacts: Dict[int, CaptureArtifact] = {}

    def ensure(self) -> Path:
        """Create the scratch directory if it is absent."""
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def path_for(self, index: int) -> Path:
        return self.root / f"page_{index}.pdf"

    def register(self, job: CaptureJob) -> CaptureArtifact:
        """Record the file written for *job* as a finished artifact."""
        path = self.path_for(job.index)
        if not path.is_file():
            raise FileNotFoundError(f"No capture written for job {job.index}: {path}")
        artifact = CaptureArtifact(index=job.index, url=job.url, path=path)
        self._artifacts[job.index] = artifact
        return artifact

    def discard(self, index: int) -> None:
        """Drop whatever a failed render left behind for *index*."""
        self._artifacts.pop(index, None)
        self.path_for(index).unlink(missing_ok=True)

    def artifacts(self) -> List[CaptureArtifact]:
        """Registered artifacts in ascending sequence-index order."""
        return [self._artifacts[i] for i in sorted(self._artifacts)]

    def dispose(self) -> None:
        """Delete the scratch directory and everything in it."""
        if self.root.exists():
            shutil.rmtree(self.root)
        self._artifacts.clear()
        logger.info(f"Removed scratch directory {self.root}")
