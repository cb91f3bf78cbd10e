"""Auth metrics for the JWT Pizza service.

Defines OpenTelemetry instruments for the auth endpoints and a small facade
the service layer calls into. Exporting (pushing to Grafana or any other
sink) is configured outside this package; without an SDK the instruments
are no-ops. Recording a metric never raises into the caller.
"""

from typing import Any, Callable

from opentelemetry import metrics

from jwtpizza.core.logging import get_logger

logger = get_logger(__name__)

meter = metrics.get_meter(__name__)

# =============================================================================
# REQUEST METRICS
# =============================================================================

requests_total = meter.create_counter(
    name="jwtpizza.requests",
    description="Total auth requests, by HTTP method",
    unit="1",
)

# =============================================================================
# AUTH METRICS
# =============================================================================

auth_attempts = meter.create_counter(
    name="jwtpizza.auth.attempts",
    description="Authentication attempts, by outcome",
    unit="1",
)

active_sessions = meter.create_up_down_counter(
    name="jwtpizza.auth.active_sessions",
    description="Sessions opened minus sessions closed",
    unit="1",
)

endpoint_latency = meter.create_histogram(
    name="jwtpizza.endpoint.latency",
    description="Time to handle auth operations",
    unit="ms",
)


class AuthMetrics:
    """Fire-and-forget recorder used by the auth service."""

    def __init__(self, source: str = "jwt-pizza-service"):
        self.source = source

    def _record(self, fn: Callable[..., Any], *args: Any, **attributes: Any) -> None:
        try:
            fn(*args, attributes={"source": self.source, **attributes})
        except Exception as e:  # noqa: BLE001 - telemetry must not affect auth
            logger.warning("metric_record_failed", error=str(e))

    def request(self, method: str) -> None:
        self._record(requests_total.add, 1, method=method.lower())

    def auth_attempt(self, success: bool) -> None:
        self._record(auth_attempts.add, 1, outcome="success" if success else "failure")

    def session_opened(self) -> None:
        self._record(active_sessions.add, 1)

    def session_closed(self) -> None:
        self._record(active_sessions.add, -1)

    def latency(self, operation: str, elapsed_ms: float) -> None:
        self._record(endpoint_latency.record, elapsed_ms, operation=operation)
