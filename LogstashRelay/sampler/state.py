"""Sampler baseline state."""
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class SamplerState:
    """Last committed counter values; None means the counter is unseen."""
    last_events_out: Optional[float] = None
    last_events_in: Optional[float] = None

    @property
    def seeded(self) -> bool:
        return self.last_events_out is not None and self.last_events_in is not None

    def advance(self, events_out: float, events_in: float) -> "SamplerState":
        return replace(self, last_events_out=events_out, last_events_in=events_in)
