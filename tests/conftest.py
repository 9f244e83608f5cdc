"""
Shared test fixtures for LogstashRelay.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from LogstashRelay.backend import CounterSnapshot
from LogstashRelay.emitter import MetricsEmitter


class FakeTicker:
    """Ticker whose poll() answers come from a script."""

    def __init__(self, polls=None):
        self.polls = list(polls or [])
        self.waits = 0

    def poll(self):
        return self.polls.pop(0) if self.polls else False

    async def wait(self):
        self.waits += 1


@pytest.fixture
def snapshot():
    """
    Build CounterSnapshots

    Usage:
        snap = snapshot(out=100, inp=90)
    """
    def _create(out=0.0, inp=0.0, qsize=0.0, max_qsize=0.0, timestamp=0.0):
        return CounterSnapshot(
            events_out=out,
            events_in=inp,
            queue_size_bytes=qsize,
            max_queue_size_bytes=max_qsize,
            timestamp=timestamp,
        )
    return _create


@pytest.fixture
def statsd_client():
    """Mock DogStatsd client."""
    return Mock()


@pytest.fixture
def emitter(statsd_client):
    return MetricsEmitter(statsd_client, ["nodename:test-host"])


@pytest.fixture
def source():
    """Mock StatsSource; set source.fetch.side_effect per test."""
    src = Mock()
    src.fetch = AsyncMock()
    src.start = AsyncMock()
    src.stop = AsyncMock()
    src.stats_url = "http://127.0.0.1:9600/_node/stats/pipeline"
    return src


@pytest.fixture
def fake_ticker():
    return FakeTicker
