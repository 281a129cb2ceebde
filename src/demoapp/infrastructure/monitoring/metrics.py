"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Gauge, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "demoapp_http_requests_total",
    "Counter of HTTP requests.",
    ["handler", "code"],
)

http_request_duration_seconds = Histogram(
    "demoapp_http_request_duration_seconds",
    "Histogram of latencies for HTTP requests.",
    ["handler"],
    buckets=(0.1, 0.2, 0.4, 1, 3, 8, 20, 60, 120),
)

http_response_size_bytes = Histogram(
    "demoapp_http_response_size_bytes",
    "Histogram of response size for HTTP requests.",
    ["handler"],
    buckets=tuple(100 * 10**i for i in range(8)),
)

# ============================================================
# Lifecycle Metrics
# ============================================================

ready_status = Gauge(
    "demoapp_ready",
    "Whether startup was fully completed and the server is ready for "
    "normal operation.",
)

# ============================================================
# Configuration Metrics
# ============================================================

config_last_reload_successful = Gauge(
    "demoapp_config_last_reload_successful",
    "Whether the last configuration reload attempt was successful.",
)

config_last_reload_success_timestamp_seconds = Gauge(
    "demoapp_config_last_reload_success_timestamp_seconds",
    "Timestamp of the last successful configuration reload.",
)

reload_requests_total = Counter(
    "demoapp_reload_requests_total",
    "Reload requests served by the reload loop.",
    ["source", "result"],
)
