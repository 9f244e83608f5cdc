"""Rate derivation from cumulative Logstash counters."""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..backend import CounterSnapshot
from .state import SamplerState

logger = logging.getLogger(__name__)

RATE_OUT = "rateout"
RATE_IN = "ratein"
QUEUE_SIZE = "queue_size_in_bytes"
MAX_QUEUE_SIZE = "max_queue_size_in_bytes"

GaugeBatch = List[Tuple[str, float]]


def derive_rate(previous: float, current: float, elapsed: float) -> float:
    """Per-second rate between two counter readings, clamped at zero.

    A negative delta means the counter was reset (e.g. a pipeline restart).
    """
    rate = (current - previous) / elapsed
    if rate < 0:
        return 0.0
    return rate


@dataclass(frozen=True)
class Sample:
    """Gauges computed for one cycle and the state they imply."""
    gauges: GaugeBatch = field(default_factory=list)
    next_state: SamplerState = field(default_factory=SamplerState)


class RateSampler:
    """Turns successive snapshots into rate and pass-through gauges.

    Each counter seeds its baseline on the first snapshot and emits a rate on
    every later one. prepare() is side-effect free so a cycle can be
    discarded; commit() adopts its baselines.
    """

    def __init__(self, state: Optional[SamplerState] = None):
        self.state = state or SamplerState()

    def prepare(self, snapshot: CounterSnapshot, elapsed: float) -> Sample:
        if elapsed <= 0:
            raise ValueError(f"elapsed must be positive, got {elapsed}")

        gauges: GaugeBatch = []
        if self.state.last_events_out is not None:
            gauges.append((RATE_OUT, derive_rate(self.state.last_events_out, snapshot.events_out, elapsed)))
        if self.state.last_events_in is not None:
            gauges.append((RATE_IN, derive_rate(self.state.last_events_in, snapshot.events_in, elapsed)))
        gauges.append((QUEUE_SIZE, snapshot.queue_size_bytes))
        gauges.append((MAX_QUEUE_SIZE, snapshot.max_queue_size_bytes))

        # Baselines move even when the rate was clamped
        next_state = self.state.advance(snapshot.events_out, snapshot.events_in)
        return Sample(gauges=gauges, next_state=next_state)

    def commit(self, sample: Sample) -> None:
        if not self.state.seeded:
            logger.debug(f"Seeded baselines: out={sample.next_state.last_events_out} in={sample.next_state.last_events_in}")
        self.state = sample.next_state

    def update(self, snapshot: CounterSnapshot, elapsed: float) -> GaugeBatch:
        """prepare() and commit() in one step."""
        sample = self.prepare(snapshot, elapsed)
        self.commit(sample)
        return sample.gauges

    def reset(self) -> None:
        self.state = SamplerState()
