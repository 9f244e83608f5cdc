"""
LogstashRelay - Logstash pipeline stats to DogStatsD relay.

Module structure:
- backend: Stats endpoint client and snapshot parsing
- sampler: Baseline state and rate derivation
- scheduler: Tick source and the relay loop
- emitter: Buffered statsd gauge sink
- status: Cycle outcome counters and optional status app
"""

from .config import (
    LOGSTASH_URL,
    METRIC_NAMESPACE,
    PIPELINE_STATS_PATH,
    RelayConfig,
    parse_args,
    parse_duration,
)
from .backend import CounterSnapshot, StatsSource, StatsError, FetchError, DecodeError
from .sampler import RateSampler, SamplerState
from .scheduler import RelayLoop, Ticker
from .emitter import MetricsEmitter, EmitterError
from .status import RelayStats

__all__ = [
    # Config
    "LOGSTASH_URL",
    "METRIC_NAMESPACE",
    "PIPELINE_STATS_PATH",
    "RelayConfig",
    "parse_args",
    "parse_duration",
    # Stats source
    "CounterSnapshot",
    "StatsSource",
    "StatsError",
    "FetchError",
    "DecodeError",
    # Sampling
    "RateSampler",
    "SamplerState",
    # Loop
    "RelayLoop",
    "Ticker",
    # Output
    "MetricsEmitter",
    "EmitterError",
    "RelayStats",
]

__version__ = "0.1.0"
