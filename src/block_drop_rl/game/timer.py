from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .core import BeginAutoDrop, Effect, EndAutoDrop

logger = logging.getLogger(__name__)


@dataclass
class _Job:
    duration_ms: int
    next_due_ms: int


class AutoDropTimer:
    """Host-side periodic TICK source; holds at most one job.

    ``clock`` returns the current time in milliseconds, e.g.
    ``pygame.time.get_ticks``.
    """

    def __init__(self, clock: Callable[[], int]) -> None:
        self.clock = clock
        self._job: Optional[_Job] = None

    @property
    def active(self) -> bool:
        return self._job is not None

    @property
    def duration_ms(self) -> Optional[int]:
        return self._job.duration_ms if self._job is not None else None

    def start(self, duration_ms: int) -> None:
        if self._job is not None:
            raise RuntimeError("auto-drop job already active")
        if duration_ms <= 0:
            raise ValueError(f"duration must be positive, got {duration_ms}")
        self._job = _Job(duration_ms=int(duration_ms), next_due_ms=self.clock() + int(duration_ms))
        logger.debug("Interval started: %d ms", duration_ms)

    def cancel(self) -> None:
        job, self._job = self._job, None
        if job is None:
            logger.debug("Cancel requested with no active job")

    def restart(self) -> None:
        """Re-arm the active job so the next TICK is a full period away."""
        if self._job is None:
            return
        duration = self._job.duration_ms
        self.cancel()
        self.start(duration)

    def handle(self, effects: Iterable[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, BeginAutoDrop):
                self.start(effect.duration_ms)
            elif isinstance(effect, EndAutoDrop):
                self.cancel()

    def due_ticks(self) -> int:
        """Number of periods elapsed since the last call; advances the job."""
        if self._job is None:
            return 0
        now = self.clock()
        ticks = 0
        while now >= self._job.next_due_ms:
            self._job.next_due_ms += self._job.duration_ms
            ticks += 1
        return ticks
