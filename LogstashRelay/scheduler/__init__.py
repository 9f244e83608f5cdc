from .ticker import Ticker
from .relay import RelayLoop

__all__ = ["Ticker", "RelayLoop"]
