# vfi_models/core/timing.py
"""
Wall-clock timing for grid construction and solver stages.

Example:
    >>> from vfi_models.core.timing import Timer
    >>> with Timer("ar1") as t:
    ...     build_grids()
    >>> print(f"{t.elapsed:.3f}s")
"""

import logging
import time
from typing import Optional

logger = logging.getLogger(__name__)


class Timer:
    """
    Accumulating wall-clock stopwatch.

    Can be driven explicitly with ``start``/``stop`` or used as a context
    manager, in which case the elapsed time is logged on exit.  Repeated
    start/stop cycles accumulate.

    Args:
        label: Name used in the log line.
        log_level: Level of the log line emitted by the context manager.
    """

    def __init__(self, label: str = "timer", log_level: int = logging.INFO) -> None:
        self.label = label
        self.log_level = log_level
        self._total = 0.0
        self._started_at: Optional[float] = None

    @property
    def running(self) -> bool:
        """True between ``start`` and ``stop``."""
        return self._started_at is not None

    @property
    def elapsed(self) -> float:
        """Seconds accumulated so far, including a running interval."""
        if self._started_at is None:
            return self._total
        return self._total + (time.time() - self._started_at)

    def start(self) -> "Timer":
        """Start the clock; raises ``RuntimeError`` if already running."""
        if self._started_at is not None:
            raise RuntimeError(f"Timer '{self.label}' is already running.")
        self._started_at = time.time()
        return self

    def stop(self) -> float:
        """Stop the clock and return the accumulated seconds."""
        if self._started_at is None:
            raise RuntimeError(f"Timer '{self.label}' is not running.")
        self._total += time.time() - self._started_at
        self._started_at = None
        return self._total

    def reset(self) -> None:
        """Discard accumulated time and stop the clock."""
        self._total = 0.0
        self._started_at = None

    def __enter__(self) -> "Timer":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
        logger.log(self.log_level, f"{self.label}: {self._total:.4f} s")
