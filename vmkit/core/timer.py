"""
Elapsed time measurement with chainable calls.

Usage:
    timer = ElapsedTimer().start()
    do_work()
    timer.end().log_elapsed("do_work")
"""
from datetime import datetime, timedelta
from typing import Optional
from loguru import logger


class ElapsedTimer:
    """Measures elapsed time from start() to end()."""

    def __init__(self):
        self._start_time: Optional[datetime] = None
        self._end_time: Optional[datetime] = None
        self._elapsed = timedelta(0)

    def start(self) -> "ElapsedTimer":
        self._start_time = datetime.now()
        self._end_time = None
        return self

    def end(self) -> "ElapsedTimer":
        self._end_time = datetime.now()
        if self._start_time is not None:
            self._elapsed = self._end_time - self._start_time
        return self

    @property
    def start_time(self) -> Optional[datetime]:
        return self._start_time

    @property
    def end_time(self) -> Optional[datetime]:
        return self._end_time

    @property
    def elapsed(self) -> timedelta:
        return self._elapsed

    def elapsed_string(self, header: Optional[str] = None) -> str:
        """Elapsed time with start and end stamps, optionally prefixed by `header`."""
        s = f"ElapsedTime:{self._elapsed}; Started:{self._start_time}; Ended:{self._end_time}"
        if header is not None:
            s = f"{header}: {s}"
        return s

    def log_elapsed(self, header: str) -> "ElapsedTimer":
        logger.debug(self.elapsed_string(header))
        return self
