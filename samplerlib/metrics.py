import threading
import time
from dataclasses import dataclass


@dataclass
class Totals:
    pages: int = 0
    bytes: int = 0
    errors: int = 0
    fetch_ms_sum: float = 0.0
    validations: int = 0
    invalid: int = 0
    accepted: int = 0
    rejected: int = 0


class Metrics:
    def __init__(self):
        self._totals = Totals()
        self._lock = threading.Lock()
        self._start = time.time()

    def record_fetch(self, ok: bool, bytes_read: int, fetch_ms: float) -> None:
        with self._lock:
            self._totals.pages += 1
            self._totals.bytes += max(0, bytes_read)
            if not ok:
                self._totals.errors += 1
            self._totals.fetch_ms_sum += fetch_ms

    def record_validation(self, valid: bool) -> None:
        with self._lock:
            self._totals.validations += 1
            if not valid:
                self._totals.invalid += 1

    def record_admission(self, accepted: bool) -> None:
        with self._lock:
            if accepted:
                self._totals.accepted += 1
            else:
                self._totals.rejected += 1

    def snapshot(self) -> tuple[Totals, float]:
        with self._lock:
            t = Totals(**vars(self._totals))
        elapsed = max(1e-6, time.time() - self._start)
        return t, elapsed


class StatsLogger(threading.Thread):
    daemon = True

    def __init__(self, metrics: Metrics, interval_s: float, log_fn):
        super().__init__(name="stats-logger")
        self._metrics = metrics
        self._interval = max(0.5, interval_s)
        self._log = log_fn
        self._stop_event = threading.Event()

    def run(self) -> None:
        while not self._stop_event.is_set():
            self._stop_event.wait(self._interval)
            if self._stop_event.is_set():
                break
            totals, elapsed = self._metrics.snapshot()
            avg_ms = (totals.fetch_ms_sum / max(1, totals.pages))
            self._log(
                "Progress: accepted=%d, rejected=%d, checked=%d, invalid=%d, pages=%d, errors=%d, avg_fetch_ms=%.1f, elapsed=%.0fs",
                totals.accepted,
                totals.rejected,
                totals.validations,
                totals.invalid,
                totals.pages,
                totals.errors,
                avg_ms,
                elapsed,
            )

    def stop(self) -> None:
        self._stop_event.set()
