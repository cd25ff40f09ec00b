import time
from typing import Optional


class Timer:
    """
    A timer class to record execution time using the time module.

    Usage:
        with Timer() as timer:
            compose_metrics(spec, status)
        print(timer.elapsed_time)       # e.g., 0.004
    """

    def __init__(self):
        self._elapsed_time: Optional[float] = None
        self._start_time: Optional[float] = None
        self.start()

    @property
    def elapsed_time(self) -> Optional[float]:
        """Return the last recorded elapsed time, rounded to milliseconds."""
        return round(self._elapsed_time, 3) if self._elapsed_time is not None else None

    def start(self) -> None:
        """Start or restart the timer."""
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        """Stop the timer and store the elapsed time."""
        now = time.perf_counter()
        if self._start_time is not None:
            self._elapsed_time = now - self._start_time

    def __enter__(self) -> 'Timer':
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
        return None
