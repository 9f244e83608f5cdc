from .state import SamplerState
from .rate import (
    RateSampler,
    Sample,
    GaugeBatch,
    derive_rate,
    RATE_OUT,
    RATE_IN,
    QUEUE_SIZE,
    MAX_QUEUE_SIZE,
)

__all__ = [
    "SamplerState",
    "RateSampler",
    "Sample",
    "GaugeBatch",
    "derive_rate",
    "RATE_OUT",
    "RATE_IN",
    "QUEUE_SIZE",
    "MAX_QUEUE_SIZE",
]
