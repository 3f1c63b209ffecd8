"""Data models for the capture pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional


class LinkSet:
    """Insertion-idempotent collection of target URLs.

    Built incrementally during discovery and converted once, via
    :meth:`sorted`, into the ordered sequence the capture loop consumes.
    """

    def __init__(self, urls: Iterable[str] = ()) -> None:
        self._urls: set[str] = set()
        self.update(urls)

    def add(self, url: str) -> None:
        if url:
            self._urls.add(url)

    def update(self, urls: Iterable[str]) -> None:
        for url in urls:
            self.add(url)

    def sorted(self) -> List[str]:
        """Return the URLs in ordinary lexicographic order."""
        return sorted(self._urls)

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __len__(self) -> int:
        return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        return iter(self.sorted())


@dataclass
class CaptureJob:
    """One target URL and its fixed position in the run."""

    url: str
    index: int
    attempts: int = 0


@dataclass(frozen=True)
class CaptureArtifact:
    """A rendered page on scratch storage, owned by the artifact store."""

    index: int
    url: str
    path: Path


class Phase(str, Enum):
    PENDING = "pending"
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


class FailureKind(str, Enum):
    TIMEOUT = "timeout"
    OTHER = "other"


@dataclass
class JobOutcome:
    """Final result of a job once the retry controller is done with it."""

    job: CaptureJob
    phase: Phase
    artifact: Optional[CaptureArtifact] = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.phase is Phase.SUCCEEDED


@dataclass
class RunReport:
    """Everything the caller needs once a run has merged its output."""

    targets: List[str]
    outcomes: List[JobOutcome] = field(default_factory=list)
    output_path: Optional[Path] = None

    @property
    def captured(self) -> List[JobOutcome]:
        return [o for o in self.outcomes if o.succeeded]

    @property
    def failed(self) -> List[JobOutcome]:
        return [o for o in self.outcomes if not o.succeeded]
