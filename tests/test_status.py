"""
Tests for RelayStats and the status app.
"""

import pytest
from fastapi.testclient import TestClient

from LogstashRelay.status import DECODE_ERROR, EMITTED, FETCH_ERROR, RelayStats, create_status_app


class TestRelayStats:

    def test_health_transitions(self):
        stats = RelayStats()
        assert stats.health == "starting"

        stats.record(EMITTED, [("rateout", 1.0)])
        assert stats.health == "ok"
        assert stats.last_emit_time is not None

        stats.record(FETCH_ERROR)
        assert stats.health == "degraded"
        assert stats.last_gauges == [("rateout", 1.0)]

    def test_unknown_outcome_rejected(self):
        with pytest.raises(ValueError):
            RelayStats().record("exploded")


class TestStatusApp:

    def test_health_endpoint(self):
        stats = RelayStats()
        stats.record(EMITTED, [("queue_size_in_bytes", 10.0)])
        client = TestClient(create_status_app(stats))

        body = client.get("/health").json()

        assert body["status"] == "ok"
        assert body["cycles"][EMITTED] == 1
        assert body["gauges"] == {"queue_size_in_bytes": 10.0}

    def test_metrics_endpoint(self):
        stats = RelayStats()
        stats.record(DECODE_ERROR)
        client = TestClient(create_status_app(stats))

        resp = client.get("/metrics")

        assert resp.status_code == 200
        assert 'logstash_relay_cycles_total{outcome="decode_error"} 1.0' in resp.text
        assert 'logstash_relay_cycles_total{outcome="emitted"} 0.0' in resp.text

    def test_health_reports_snapshot_time(self):
        stats = RelayStats()
        stats.record(EMITTED, [], snapshot_time=1700000000.0)
        client = TestClient(create_status_app(stats))

        assert client.get("/health").json()["last_snapshot_time"] == 1700000000.0
