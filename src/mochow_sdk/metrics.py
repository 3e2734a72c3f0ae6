"""Prometheus collectors for client-side request accounting."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNTER = Counter(
    "mochow_sdk_requests_total",
    "HTTP attempts sent to the Mochow service",
    ["method", "status"],
)
RETRY_COUNTER = Counter(
    "mochow_sdk_retries_total",
    "Retries scheduled after a failed attempt",
    ["method"],
)
REQUEST_LATENCY = Histogram(
    "mochow_sdk_request_latency_seconds",
    "Wire latency of a single attempt",
    ["method"],
)


__all__ = ["REQUEST_COUNTER", "REQUEST_LATENCY", "RETRY_COUNTER"]
