from prometheus_client import CollectorRegistry

from samplerlib.metrics import Metrics
from samplerlib.prometheus_exporter import PrometheusExporter


def test_exporter_publishes_deltas():
    metrics = Metrics()
    registry = CollectorRegistry()
    exporter = PrometheusExporter(metrics, port=0, registry=registry)

    metrics.record_fetch(ok=True, bytes_read=100, fetch_ms=20.0)
    metrics.record_validation(True)
    metrics.record_admission(True)
    exporter.update()
    metrics.record_admission(True)
    metrics.record_admission(False)
    exporter.update()

    assert registry.get_sample_value("sampler_accepted_total") == 2
    assert registry.get_sample_value("sampler_rejected_total") == 1
    assert registry.get_sample_value("sampler_pages_total") == 1
    assert registry.get_sample_value("sampler_bytes_total") == 100
    assert registry.get_sample_value("sampler_avg_fetch_duration_seconds") == 0.02
