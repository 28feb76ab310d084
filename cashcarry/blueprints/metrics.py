"""
Metrics blueprint: request instrumentation and the Prometheus /metrics endpoint.

Not authenticated; restrict by network rules in production.
"""
import time

from flask import Blueprint, Response, request, g
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from cashcarry.metrics import exposition_registry, http_request_duration_seconds, http_requests_total

metrics_bp = Blueprint('metrics', __name__)


def setup_metrics_instrumentation(app):
    """Time every request and count it by endpoint and status."""

    @app.before_request
    def start_request_timer():
        g.request_started_at = time.perf_counter()

    @app.after_request
    def record_request(response):
        started = g.get('request_started_at')
        if started is not None:
            endpoint = request.endpoint or 'unknown'
            http_request_duration_seconds.labels(request.method, endpoint).observe(time.perf_counter() - started)
            http_requests_total.labels(request.method, endpoint, response.status_code).inc()
        return response


@metrics_bp.route('/metrics')
def metrics():
    return Response(generate_latest(exposition_registry()), mimetype=CONTENT_TYPE_LATEST)
