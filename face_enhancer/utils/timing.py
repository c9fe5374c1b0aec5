"""
Timing utilities.

Helpers for measuring and reporting per-stage durations.
"""

import time
from contextlib import contextmanager
from typing import Dict, Iterator


def format_elapsed(seconds: float) -> str:
    """
    Format a duration in human-readable form.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string (e.g., "850.0ms", "2.35s", "1m 05s")
    """
    if seconds < 1:
        return f'{seconds * 1000:.1f}ms'
    if seconds < 60:
        return f'{seconds:.2f}s'

    minutes, secs = divmod(int(seconds), 60)
    return f'{minutes}m {secs:02d}s'


class StageTimer:
    """Accumulates wall-clock time per named stage."""

    def __init__(self):
        self.timings: Dict[str, float] = {}

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.timings[name] = self.timings.get(name, 0.0) + time.perf_counter() - start

    @property
    def total(self) -> float:
        return sum(self.timings.values())

    def summary(self) -> str:
        return ', '.join(f'{name}={format_elapsed(t)}' for name, t in self.timings.items())
