"""Duration and throughput logging for generation steps."""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

DEFAULT_LOGGER = "finsynth.timer"


class Timer:
    """Counts the units handled while a ``timeit`` block runs."""

    def __init__(self, label: str, unit: str, total: Optional[int] = None) -> None:
        self.label = label
        self.unit = unit
        self.total = total
        self.count = 0
        self._started = time.perf_counter()
        self._stopped: Optional[float] = None

    def add(self, amount: int = 1) -> None:
        self.count += amount

    @property
    def elapsed(self) -> float:
        end = self._stopped if self._stopped is not None else time.perf_counter()
        return end - self._started

    def stop(self) -> float:
        self._stopped = time.perf_counter()
        return self.elapsed

    def summary(self, *, rate: bool) -> str:
        processed = self.total if self.total is not None else self.count
        if not processed:
            return ""
        text = f" ({processed:,} {self.unit}"
        if rate and self.elapsed > 0:
            text += f" @ {processed / self.elapsed:,.0f} {self.unit}/s"
        return text + ")"


@contextmanager
def timeit(
    label: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO,
    unit: str = "items",
    total: Optional[int] = None,
) -> Iterator[Timer]:
    """Log how long the block took and how many ``unit`` it handled.

    ``total`` fixes the reported count up front; otherwise the count fed
    through ``Timer.add`` is used. Failures are logged at ERROR and re-raised.
    """

    log = logger or logging.getLogger(DEFAULT_LOGGER)
    timer = Timer(label, unit, total)
    try:
        yield timer
    except Exception:
        elapsed = timer.stop()
        log.error("%s failed after %.1fms%s", label, elapsed * 1000, timer.summary(rate=False))
        raise
    elapsed = timer.stop()
    log.log(level, "%s completed in %.1fms%s", label, elapsed * 1000, timer.summary(rate=True))
