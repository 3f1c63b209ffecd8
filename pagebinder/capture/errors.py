"""Domain-specific exceptions for the capture pipeline."""


class PageBinderError(Exception):
    """Base class for all pagebinder errors."""


class InputFileError(PageBinderError):
    """The seed URL file could not be read."""


class DiscoveryError(PageBinderError):
    """Navigation-link discovery under the base URL failed."""


class CaptureError(PageBinderError):
    """A single capture attempt failed."""


class NavigationTimeout(CaptureError):
    """Navigation did not reach network idle before its deadline."""


class NavigationError(CaptureError):
    """Navigation failed for a reason other than the deadline."""


class RenderError(CaptureError):
    """Style injection or PDF output failed after navigation."""


class AggregationError(PageBinderError):
    """The per-page captures could not be merged into the output document."""


class RetryStateError(PageBinderError):
    """A retry state machine was driven through an illegal transition."""
