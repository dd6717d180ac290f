from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from flask import Response, request
import time

# Audit / catalog metrics
audit_entries_total = Counter("ouranimelist_audit_entries_total", "Audit entries appended", ["action"])

catalog_operation_failures_total = Counter(
    "ouranimelist_catalog_operation_failures_total", "Catalog operations that failed", ["operation", "reason"]
)

# Anomaly monitor metrics
monitor_ticks_total = Counter("ouranimelist_monitor_ticks_total", "Anomaly monitor ticks", ["status"])

monitor_tick_duration_seconds = Histogram("ouranimelist_monitor_tick_duration_seconds", "Anomaly monitor tick duration")

accounts_flagged_total = Counter("ouranimelist_accounts_flagged_total", "Detections raised by the anomaly monitor")

flagged_accounts_current = Gauge("ouranimelist_flagged_accounts", "Accounts currently in the flagged set")

# API Metrics
api_request_duration_seconds = Histogram(
    "ouranimelist_api_request_duration_seconds", "API request duration", ["endpoint", "method"]
)

api_requests_total = Counter("ouranimelist_api_requests_total", "Total API requests", ["endpoint", "method", "status_code"])


def init_metrics(app):
    @app.route("/api/metrics")
    def metrics():
        return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)

    @app.before_request
    def before_request():
        request.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration = time.time() - getattr(request, "start_time", time.time())
        api_request_duration_seconds.labels(endpoint=request.endpoint or "unknown", method=request.method).observe(
            duration
        )
        api_requests_total.labels(
            endpoint=request.endpoint or "unknown", method=request.method, status_code=response.status_code
        ).inc()
        return response

    app.logger.info("Prometheus metrics initialized at /api/metrics")
