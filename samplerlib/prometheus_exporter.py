import logging
import threading
from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, start_http_server

from .metrics import Metrics


logger = logging.getLogger(__name__)


class PrometheusExporter:
    def __init__(self, metrics: Metrics, port: int = 8000, registry: CollectorRegistry | None = None) -> None:
        self.metrics = metrics
        self.port = port
        self.registry = registry or CollectorRegistry()
        self._server_thread: threading.Thread | None = None
        self._stop_event = threading.Event()

        self.pages_total = Counter('sampler_pages_total', 'Total number of pages fetched for links', registry=self.registry)
        self.bytes_total = Counter('sampler_bytes_total', 'Total number of bytes downloaded', registry=self.registry)
        self.errors_total = Counter('sampler_fetch_errors_total', 'Total number of failed fetches', registry=self.registry)
        self.validations_total = Counter('sampler_validations_total', 'Total number of URL validity checks', registry=self.registry)
        self.invalid_total = Counter('sampler_invalid_total', 'Total number of URLs that failed validation', registry=self.registry)
        self.accepted_total = Counter('sampler_accepted_total', 'Total number of URLs accepted into the sample', registry=self.registry)
        self.rejected_total = Counter('sampler_rejected_total', 'Total number of valid URLs rejected by the domain cap', registry=self.registry)
        self.avg_fetch_duration_seconds = Gauge(
            'sampler_avg_fetch_duration_seconds', 'Average fetch duration in seconds', registry=self.registry
        )
        self.accept_rate = Histogram(
            'sampler_accepted_per_update',
            'URLs accepted between two exporter updates',
            buckets=[0, 1, 2, 5, 10, 25, 50, 100],
            registry=self.registry,
        )

        self._last = {}

    def start(self) -> None:
        start_http_server(self.port, registry=self.registry)
        logger.info("Prometheus metrics server started on port %d", self.port)

        self._server_thread = threading.Thread(
            target=self._update_metrics_loop,
            name="prometheus-updater",
            daemon=True
        )
        self._server_thread.start()

    def _update_metrics_loop(self) -> None:
        while not self._stop_event.is_set():
            self.update()
            self._stop_event.wait(5.0)

    def _inc(self, counter: Counter, name: str, value: int) -> int:
        delta = value - self._last.get(name, 0)
        if delta > 0:
            counter.inc(delta)
        self._last[name] = value
        return delta

    def update(self) -> None:
        totals, _ = self.metrics.snapshot()

        self._inc(self.pages_total, "pages", totals.pages)
        self._inc(self.bytes_total, "bytes", totals.bytes)
        self._inc(self.errors_total, "errors", totals.errors)
        self._inc(self.validations_total, "validations", totals.validations)
        self._inc(self.invalid_total, "invalid", totals.invalid)
        self._inc(self.rejected_total, "rejected", totals.rejected)
        accepted = self._inc(self.accepted_total, "accepted", totals.accepted)
        self.accept_rate.observe(max(0, accepted))

        if totals.pages > 0:
            self.avg_fetch_duration_seconds.set(totals.fetch_ms_sum / totals.pages / 1000.0)

    def stop(self) -> None:
        self._stop_event.set()
        if self._server_thread:
            self._server_thread.join(timeout=2.0)
        self.update()
