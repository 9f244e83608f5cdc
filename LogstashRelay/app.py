"""LogstashRelay entry point."""
import asyncio
import logging
import signal
import socket
import sys
from typing import List, Optional

import uvicorn

from .backend import StatsSource
from .config import RelayConfig, parse_args
from .emitter import EmitterError, MetricsEmitter
from .sampler import RateSampler
from .scheduler import RelayLoop
from .status import RelayStats, create_status_app

logger = logging.getLogger(__name__)


class StartupError(Exception):
    """The relay cannot start; the process exits."""


def host_tags() -> List[str]:
    try:
        hostname = socket.gethostname()
    except OSError as exc:
        raise StartupError(f"Could not get hostname: {exc}") from exc
    if not hostname:
        raise StartupError("Could not get hostname: empty name")
    return [f"nodename:{hostname}"]


def setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    if debug:
        logger.debug("Debug logging enabled")


def build_relay(config: RelayConfig) -> RelayLoop:
    """Wire the source, sampler and emitter; raises on startup failures."""
    tags = host_tags()
    emitter = MetricsEmitter.from_address(config.statsd_addr, tags)
    source = StatsSource(config.logstash_url, timeout=config.fetch_timeout)
    return RelayLoop(source, RateSampler(), emitter, config.interval, stats=RelayStats())


async def serve(relay: RelayLoop, status_port: Optional[int] = None) -> None:
    """Run the relay (and status server) until SIGINT/SIGTERM."""
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            pass

    server = None
    server_task = None
    if status_port is not None:
        server = uvicorn.Server(uvicorn.Config(
            create_status_app(relay.stats), host="0.0.0.0", port=status_port, log_level="warning",
        ))
        # Signals are handled here, not by uvicorn
        server.install_signal_handlers = lambda: None
        server_task = asyncio.create_task(server.serve())
        logger.info(f"Serving relay status on port {status_port}")

    await relay.start()
    stop_task = asyncio.create_task(stop_event.wait())
    try:
        await asyncio.wait([stop_task, relay.task], return_when=asyncio.FIRST_COMPLETED)
    finally:
        logger.info("Shutting down relay...")
        stop_task.cancel()
        await relay.stop()
        if server is not None:
            server.should_exit = True
            await server_task


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_args(argv)
    setup_logging(config.debug)
    try:
        relay = build_relay(config)
    except (StartupError, EmitterError) as e:
        logger.critical(str(e))
        return 1
    try:
        asyncio.run(serve(relay, config.status_port))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
