"""Telemetry must never affect auth outcomes."""

from jwtpizza.auth.service import AuthService
from jwtpizza.observability import metrics as metrics_module
from jwtpizza.observability.metrics import AuthMetrics


class ExplodingInstrument:
    def add(self, *args, **kwargs):
        raise ConnectionError("metrics sink unreachable")

    def record(self, *args, **kwargs):
        raise ConnectionError("metrics sink unreachable")


class CapturingInstrument:
    def __init__(self):
        self.points = []

    def add(self, amount, attributes=None):
        self.points.append((amount, attributes))

    def record(self, amount, attributes=None):
        self.points.append((amount, attributes))


def test_facade_tags_points_with_source(monkeypatch):
    captured = CapturingInstrument()
    monkeypatch.setattr(metrics_module, "auth_attempts", captured)

    AuthMetrics(source="unit-test").auth_attempt(success=False)

    assert captured.points == [(1, {"source": "unit-test", "outcome": "failure"})]


def test_session_gauge_goes_up_and_down(monkeypatch):
    captured = CapturingInstrument()
    monkeypatch.setattr(metrics_module, "active_sessions", captured)

    recorder = AuthMetrics()
    recorder.session_opened()
    recorder.session_closed()

    assert [amount for amount, _ in captured.points] == [1, -1]


def test_failing_instruments_are_swallowed(monkeypatch):
    for name in ("requests_total", "auth_attempts", "active_sessions", "endpoint_latency"):
        monkeypatch.setattr(metrics_module, name, ExplodingInstrument())

    recorder = AuthMetrics()
    recorder.request("POST")
    recorder.auth_attempt(success=True)
    recorder.session_opened()
    recorder.session_closed()
    recorder.latency("login", 1.5)


async def test_auth_flow_survives_unreachable_metrics_sink(database, codec, monkeypatch):
    for name in ("requests_total", "auth_attempts", "active_sessions", "endpoint_latency"):
        monkeypatch.setattr(metrics_module, name, ExplodingInstrument())

    async with database.session() as db:
        service = AuthService(db, codec, AuthMetrics())
        registered = await service.register("pizza diner", "d@jwt.com", "diner")
        logged_in = await service.login("d@jwt.com", "diner")
        await service.logout(logged_in.token)

    assert registered.user.id == logged_in.user.id
