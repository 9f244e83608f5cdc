"""LogstashRelay configuration constants and command-line parsing."""
import argparse
import os
import re
from dataclasses import dataclass
from typing import List, Optional

# Metrics agent (DogStatsD) configuration
STATSD_ADDR = os.getenv("RELAY_STATSD_ADDR")
METRIC_NAMESPACE = "logstash"
STATSD_BUFFER_BYTES = 10240

# Logstash node API
LOGSTASH_URL = os.getenv("RELAY_LOGSTASH_URL", "http://127.0.0.1:9600")
PIPELINE_STATS_PATH = "_node/stats/pipeline"

# Sampling cadence
POLL_INTERVAL = os.getenv("RELAY_INTERVAL", "10s")
# Fraction of the interval a fetch may take before it is abandoned
FETCH_TIMEOUT_RATIO = 0.8

DEBUG = os.getenv("RELAY_DEBUG", "").lower() in ("1", "true", "yes", "on")

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h)?\s*$")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(text: str) -> float:
    """Parse "10s", "500ms", "1.5m" or a bare number of seconds."""
    match = _DURATION_RE.match(str(text))
    if not match:
        raise argparse.ArgumentTypeError(f"invalid duration: {text!r}")
    seconds = float(match.group(1)) * _DURATION_UNITS[match.group(2) or "s"]
    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"duration must be positive: {text!r}")
    return seconds


@dataclass(frozen=True)
class RelayConfig:
    """Options the relay runs with."""
    statsd_addr: str
    logstash_url: str = LOGSTASH_URL
    interval: float = 10.0
    timeout: Optional[float] = None
    debug: bool = False
    status_port: Optional[int] = None

    @property
    def fetch_timeout(self) -> float:
        """HTTP timeout, always strictly below the poll interval."""
        ceiling = self.interval * FETCH_TIMEOUT_RATIO
        if self.timeout is None:
            return ceiling
        return min(self.timeout, ceiling)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logstash-relay",
        description="Relay Logstash pipeline stats to a DogStatsD agent.",
    )
    parser.add_argument(
        "--statsd",
        default=STATSD_ADDR,
        required=STATSD_ADDR is None,
        help="Host:Port of Datadog Statsd agent",
    )
    parser.add_argument("--lsurl", default=LOGSTASH_URL, help=f"Logstash HTTP API endpoint (default: {LOGSTASH_URL})")
    parser.add_argument(
        "--interval",
        type=parse_duration,
        default=POLL_INTERVAL,
        help=f"Gap between metric probes (default: {POLL_INTERVAL})",
    )
    parser.add_argument("--timeout", type=parse_duration, default=None, help="HTTP fetch timeout (default: 80%% of interval)")
    parser.add_argument("-d", "--debug", action="store_true", default=DEBUG, help="Enable debugging")
    parser.add_argument("--status-port", type=int, default=None, help="Serve /health and /metrics on this port")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> RelayConfig:
    args = build_parser().parse_args(argv)
    return RelayConfig(
        statsd_addr=args.statsd,
        logstash_url=args.lsurl,
        interval=args.interval,
        timeout=args.timeout,
        debug=args.debug,
        status_port=args.status_port,
    )
