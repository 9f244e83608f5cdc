"""Relay self-observation: cycle outcome counters and the status app."""
import logging
import time
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Gauge, generate_latest

from .sampler import GaugeBatch

logger = logging.getLogger(__name__)

EMITTED = "emitted"
FETCH_ERROR = "fetch_error"
DECODE_ERROR = "decode_error"
STALE = "stale"
OUTCOMES = (EMITTED, FETCH_ERROR, DECODE_ERROR, STALE)


class RelayStats:
    """Per-outcome cycle counts plus the last emitted batch."""

    def __init__(self):
        self.counts = {outcome: 0 for outcome in OUTCOMES}
        self.last_outcome: Optional[str] = None
        self.last_emit_time: Optional[float] = None
        self.last_snapshot_time: Optional[float] = None
        self.last_gauges: GaugeBatch = []

        self.registry = CollectorRegistry()
        self._cycles = Counter(
            "logstash_relay_cycles",
            "Poll cycles by outcome",
            ["outcome"],
            registry=self.registry,
        )
        self._last_emit = Gauge(
            "logstash_relay_last_emit_timestamp_seconds",
            "Unix time of the last emitted cycle",
            registry=self.registry,
        )
        for outcome in OUTCOMES:
            self._cycles.labels(outcome=outcome)

    def record(self, outcome: str, gauges: Optional[GaugeBatch] = None, snapshot_time: Optional[float] = None) -> None:
        if outcome not in self.counts:
            raise ValueError(f"unknown cycle outcome: {outcome}")
        self.counts[outcome] += 1
        self.last_outcome = outcome
        self._cycles.labels(outcome=outcome).inc()
        if outcome == EMITTED:
            self.last_emit_time = time.time()
            self.last_gauges = list(gauges or [])
            self.last_snapshot_time = snapshot_time
            self._last_emit.set(self.last_emit_time)

    @property
    def health(self) -> str:
        if self.last_outcome is None:
            return "starting"
        return "ok" if self.last_outcome == EMITTED else "degraded"


def create_status_app(stats: RelayStats) -> FastAPI:
    app = FastAPI(title="LogstashRelay status")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return JSONResponse({
            "status": stats.health,
            "last_outcome": stats.last_outcome,
            "last_emit_time": stats.last_emit_time,
            "last_snapshot_time": stats.last_snapshot_time,
            "cycles": dict(stats.counts),
            "gauges": {name: value for name, value in stats.last_gauges},
        })

    @app.get("/metrics")
    async def metrics():
        return Response(generate_latest(stats.registry), media_type=CONTENT_TYPE_LATEST)

    return app
