from .pipeline_stats import CounterSnapshot, StatsError, FetchError, DecodeError
from .source import StatsSource

__all__ = ["CounterSnapshot", "StatsError", "FetchError", "DecodeError", "StatsSource"]
