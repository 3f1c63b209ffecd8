"""Capture package: link discovery, page capture with retry, and merging."""

from pagebinder.capture.aggregator import merge_artifacts
from pagebinder.capture.errors import (
    AggregationError,
    CaptureError,
    DiscoveryError,
    InputFileError,
    NavigationError,
    NavigationTimeout,
    PageBinderError,
    RenderError,
)
from pagebinder.capture.models import CaptureArtifact, CaptureJob, JobOutcome, LinkSet, RunReport
from pagebinder.capture.pipeline import bind_base_url, bind_seed_file
from pagebinder.capture.store import ArtifactStore

__all__ = [
    "bind_seed_file",
    "bind_base_url",
    "merge_artifacts",
    "ArtifactStore",
    "CaptureArtifact",
    "CaptureJob",
    "JobOutcome",
    "LinkSet",
    "RunReport",
    "PageBinderError",
    "InputFileError",
    "DiscoveryError",
    "CaptureError",
    "NavigationTimeout",
    "NavigationError",
    "RenderError",
    "AggregationError",
]
