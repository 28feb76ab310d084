"""
Prometheus metrics for HTTP traffic, orders and the flat-file stores.

Services update the domain counters directly; the metrics blueprint exposes
them on /metrics.
"""
import os

from prometheus_client import Counter, Histogram, CollectorRegistry, REGISTRY, multiprocess

# Gunicorn workers share metrics through PROMETHEUS_MULTIPROC_DIR
MULTIPROCESS_MODE = os.environ.get('PROMETHEUS_MULTIPROC_DIR') is not None

http_requests_total = Counter(
    'cashcarry_http_requests',
    'HTTP requests by endpoint and status',
    ['method', 'endpoint', 'http_status']
)

http_request_duration_seconds = Histogram(
    'cashcarry_http_request_duration_seconds',
    'HTTP request latency in seconds',
    ['method', 'endpoint'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5)
)

orders_placed_total = Counter(
    'cashcarry_orders_placed',
    'Orders accepted and stored'
)

order_status_changes_total = Counter(
    'cashcarry_order_status_changes',
    'Order status updates by new status',
    ['status']
)

store_save_failures_total = Counter(
    'cashcarry_store_save_failures',
    'Failed writes of a JSON data file (the in-memory change is kept)',
    ['store']
)


def exposition_registry():
    """Registry to render on /metrics (aggregated across workers in multiprocess mode)."""
    if MULTIPROCESS_MODE:
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        return registry
    return REGISTRY
