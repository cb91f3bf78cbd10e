"""Observability utilities and metrics."""

from .metrics import AuthMetrics, active_sessions, auth_attempts, endpoint_latency, requests_total

__all__ = [
    "AuthMetrics",
    # Instruments
    "requests_total",
    "auth_attempts",
    "active_sessions",
    "endpoint_latency",
]
