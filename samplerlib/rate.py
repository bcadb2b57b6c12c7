import threading
import time
from typing import Dict, Callable


class RateLimiter:
    """Mandatory pause before each recursive visit.

    Every call waits at least `delay_seconds`; calls for the same host from
    different threads are additionally spaced `delay_seconds` apart.
    """

    def __init__(self, delay_seconds: float, now: Callable[[], float] | None = None, sleep: Callable[[float], None] | None = None):
        self.delay_seconds = delay_seconds
        self._host_next_time: Dict[str, float] = {}
        self._lock = threading.Lock()
        self._now = now or time.time
        self._sleep = sleep or time.sleep

    def wait_turn(self, netloc: str) -> None:
        if self.delay_seconds <= 0:
            return
        with self._lock:
            now = self._now()
            next_allowed = self._host_next_time.get(netloc, 0.0)
            sleep_for = max(self.delay_seconds, next_allowed - now)
            self._host_next_time[netloc] = now + sleep_for + self.delay_seconds
        self._sleep(sleep_for)
