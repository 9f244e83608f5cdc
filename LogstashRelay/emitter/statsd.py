"""Buffered DogStatsD gauge sink."""
import logging
import socket
from typing import Iterable, List, Optional, Tuple

from datadog.dogstatsd import DogStatsd

from ..config import METRIC_NAMESPACE, STATSD_BUFFER_BYTES

logger = logging.getLogger(__name__)


class EmitterError(Exception):
    """The metrics agent client could not be set up."""


def parse_address(addr: str) -> Tuple[str, int]:
    """Split "host:port" (IPv6 hosts in brackets) into its parts."""
    host, sep, port = addr.strip().rpartition(":")
    if not sep or not host or not port:
        raise EmitterError(f"statsd address must be host:port, got {addr!r}")
    host = host.strip("[]")
    try:
        port_num = int(port)
    except ValueError as exc:
        raise EmitterError(f"invalid statsd port in {addr!r}") from exc
    if not 0 < port_num < 65536:
        raise EmitterError(f"statsd port out of range in {addr!r}")
    return host, port_num


class MetricsEmitter:
    """Sends namespaced, tagged gauges; never raises to the caller."""

    def __init__(self, client: DogStatsd, tags: List[str]):
        """Initialize the emitter.

        Args:
            client: Namespaced DogStatsd client
            tags: Static tags attached to every gauge
        """
        self.client = client
        self.tags = list(tags)

    @classmethod
    def from_address(cls, addr: str, tags: List[str], namespace: Optional[str] = METRIC_NAMESPACE) -> "MetricsEmitter":
        host, port = parse_address(addr)
        try:
            socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
        except OSError as exc:
            raise EmitterError(f"Cannot resolve statsd host {host!r}: {exc}") from exc
        try:
            client = DogStatsd(
                host=host,
                port=port,
                namespace=namespace,
                max_buffer_len=STATSD_BUFFER_BYTES,
                disable_buffering=False,
                disable_telemetry=True,
            )
        except Exception as exc:
            raise EmitterError(f"Error starting statsd client: {exc}") from exc
        logger.info(f"Starting a buffered statsd client at: {host}:{port}")
        return cls(client, tags)

    def gauge(self, name: str, value: float) -> None:
        logger.debug(f"Emitting {name}: {value:.3f}, with tags:{self.tags}")
        try:
            self.client.gauge(name, float(value), tags=self.tags)
        except Exception as e:
            logger.warning(f"Dropped gauge {name}: {e}")

    def emit(self, gauges: Iterable[Tuple[str, float]]) -> None:
        for name, value in gauges:
            self.gauge(name, value)

    def close(self) -> None:
        """Flush buffered metrics."""
        try:
            self.client.flush()
        except Exception as e:
            logger.warning(f"Failed to flush statsd buffer: {e}")
