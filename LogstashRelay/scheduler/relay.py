"""Relay loop: poll, derive rates, emit."""
import asyncio
import logging
from typing import Optional

from ..backend import DecodeError, FetchError, StatsSource
from ..emitter import MetricsEmitter
from ..sampler import RateSampler
from ..status import DECODE_ERROR, EMITTED, FETCH_ERROR, STALE, RelayStats
from .ticker import Ticker

logger = logging.getLogger(__name__)


class RelayLoop:
    """Drives one sampling cycle per tick.

    Rates use the nominal interval as elapsed time. A cycle still running
    when the next tick arrives is discarded: nothing is emitted and the
    sampler baselines are left alone.
    """

    def __init__(
        self,
        source: StatsSource,
        sampler: RateSampler,
        emitter: MetricsEmitter,
        interval: float,
        ticker: Optional[Ticker] = None,
        stats: Optional[RelayStats] = None,
    ):
        """Initialize the relay loop.

        Args:
            source: Client for the Logstash pipeline stats endpoint
            sampler: Rate sampler owning the counter baselines
            emitter: Gauge sink for the metrics agent
            interval: Seconds between ticks, also used as elapsed time for rates
            ticker: Tick source; created on first run() when omitted
            stats: Cycle outcome counters
        """
        self.source = source
        self.sampler = sampler
        self.emitter = emitter
        self.interval = interval
        self.ticker = ticker
        self.stats = stats or RelayStats()
        self._task: Optional[asyncio.Task] = None
        self._stop = False

    async def start(self):
        """Start the relay loop as a background task."""
        self._stop = False
        await self.source.start()
        self._task = asyncio.create_task(self.run())
        logger.info(f"Started relay for {self.source.stats_url} (interval: {self.interval}s)")

    async def stop(self):
        """Cancel the loop, interrupting any in-flight fetch or tick wait."""
        self._stop = True
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.warning(f"Relay loop ended with error: {e!r}")
            self._task = None
        await self.source.stop()
        self.emitter.close()
        logger.info("Stopped relay")

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._task

    async def run(self):
        if self.ticker is None:
            self.ticker = Ticker(self.interval)
        while not self._stop:
            try:
                await self.run_cycle()
            except Exception:
                logger.exception("Unexpected error in relay cycle")
            await self.ticker.wait()

    async def run_cycle(self) -> str:
        """Run one fetch/derive/emit cycle and return its outcome."""
        try:
            snapshot = await self.source.fetch()
        except FetchError as e:
            logger.error(f"Error getting event stats: {e}")
            self.stats.record(FETCH_ERROR)
            return FETCH_ERROR
        except DecodeError as e:
            logger.error(f"Error decoding event stats: {e}")
            self.stats.record(DECODE_ERROR)
            return DECODE_ERROR

        sample = self.sampler.prepare(snapshot, self.interval)

        # The tick is the only valid source of time; if it already fired the
        # nominal interval no longer describes this sample.
        if self.ticker is not None and self.ticker.poll():
            logger.warning("Tick happened before rate could be calculated, discarding value")
            self.stats.record(STALE)
            return STALE

        self.sampler.commit(sample)
        self.emitter.emit(sample.gauges)
        self.stats.record(EMITTED, sample.gauges, snapshot_time=snapshot.timestamp)
        return EMITTED
