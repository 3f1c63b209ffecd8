"""Bounded-retry state machine for a single capture job.

Each job gets its own :class:`RetryState`.  The controller drives it through
``PENDING -> ATTEMPTING -> {SUCCEEDED | ATTEMPTING | EXHAUSTED}`` and decides,
from the kind of failure, how long to wait before the next attempt.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger

from pagebinder.capture.errors import NavigationTimeout, RetryStateError
from pagebinder.capture.models import (
    CaptureArtifact,
    CaptureJob,
    FailureKind,
    JobOutcome,
    Phase,
)

MAX_ATTEMPTS = 3
TIMEOUT_RETRY_DELAY = 30.0
SUCCESS_COOLDOWN = 10.0


def classify_failure(exc: BaseException) -> FailureKind:
    """Map an attempt failure onto the backoff policy's two kinds."""
    if isinstance(exc, NavigationTimeout):
        return FailureKind.TIMEOUT
    return FailureKind.OTHER


@dataclass
class RetryState:
    """Per-job attempt bookkeeping.  Lives only while the job is processed."""

    max_attempts: int = MAX_ATTEMPTS
    phase: Phase = Phase.PENDING
    attempts: int = 0
    last_failure: Optional[FailureKind] = None

    @property
    def terminal(self) -> bool:
        return self.phase in (Phase.SUCCEEDED, Phase.EXHAUSTED)

    def begin_attempt(self) -> int:
        """Enter ``ATTEMPTING`` and return the 1-based attempt number."""
        if self.terminal:
            raise RetryStateError(f"cannot attempt from {self.phase.value}")
        if self.phase is Phase.ATTEMPTING and self.last_failure is None:
            raise RetryStateError("previous attempt has not been resolved")
        self.phase = Phase.ATTEMPTING
        self.attempts += 1
        self.last_failure = None
        return self.attempts

    def succeed(self) -> None:
        if self.phase is not Phase.ATTEMPTING:
            raise RetryStateError(f"cannot succeed from {self.phase.value}")
        self.phase = Phase.SUCCEEDED

    def fail(self, kind: FailureKind) -> Phase:
        """Record a failed attempt; return ``ATTEMPTING`` or ``EXHAUSTED``."""
        if self.phase is not Phase.ATTEMPTING or self.last_failure is not None:
            raise RetryStateError(f"cannot fail from {self.phase.value}")
        self.last_failure = kind
        if self.attempts >= self.max_attempts:
            self.phase = Phase.EXHAUSTED
        return self.phase


class RetryController:
    """Runs one job's attempts until success or exhaustion.

    Args:
        max_attempts: Total attempts allowed per job.
        timeout_delay: Seconds to wait after a timed-out attempt.
        success_cooldown: Seconds to wait after a successful attempt, to keep
            the request rate against the target origin down.
        sleep: Injected for tests; defaults to :func:`time.sleep`.
    """

    def __init__(
        self,
        max_attempts: int = MAX_ATTEMPTS,
        timeout_delay: float = TIMEOUT_RETRY_DELAY,
        success_cooldown: float = SUCCESS_COOLDOWN,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.timeout_delay = timeout_delay
        self.success_cooldown = success_cooldown
        self._sleep = sleep

    def run(
        self,
        job: CaptureJob,
        attempt: Callable[[CaptureJob], CaptureArtifact],
    ) -> JobOutcome:
        """Call *attempt* for *job* under the retry policy.

        Failures never escape: an exhausted job is reported through the
        returned :class:`JobOutcome` with no artifact.
        """
        state = RetryState(max_attempts=self.max_attempts)
        last_error: Optional[BaseException] = None

        while not state.terminal:
            number = state.begin_attempt()
            job.attempts = number
            try:
                artifact = attempt(job)
            except Exception as exc:  # noqa: BLE001
                last_error = exc
                kind = classify_failure(exc)
                logger.error(
                    f"Error processing {job.url}, attempt {number}/{self.max_attempts}: {exc}"
                )
                if state.fail(kind) is Phase.EXHAUSTED:
                    logger.error(
                        f"Failed to process {job.url} after {self.max_attempts} attempts. "
                        "Continuing with the next link."
                    )
                    break
                if kind is FailureKind.TIMEOUT:
                    logger.info(
                        f"Timeout occurred, retrying in {self.timeout_delay:g} seconds..."
                    )
                    self._sleep(self.timeout_delay)
                else:
                    logger.info("Non-timeout error occurred, retrying immediately...")
                continue

            state.succeed()
            self._sleep(self.success_cooldown)
            return JobOutcome(job=job, phase=state.phase, artifact=artifact)

        return JobOutcome(job=job, phase=state.phase, error=last_error)
