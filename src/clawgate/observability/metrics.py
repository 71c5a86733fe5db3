"""Prometheus metrics for schema requests and gateway calls."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

SCHEMA_REQUESTS = Counter(
    "clawgate_schema_requests_total", "Config schema HTTP requests", ["method", "status"]
)
SCHEMA_EXTENSIONS = Gauge(
    "clawgate_schema_extensions", "Extension entries in the last composed config schema"
)
GATEWAY_CALLS = Counter(
    "clawgate_gateway_calls_total", "Gateway RPC calls", ["method", "outcome"]
)
GATEWAY_CALL_DURATION = Histogram(
    "clawgate_gateway_call_duration_seconds",
    "Gateway RPC call duration",
    ["method"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30, 60),
)
