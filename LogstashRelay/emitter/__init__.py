from .statsd import MetricsEmitter, EmitterError, parse_address

__all__ = ["MetricsEmitter", "EmitterError", "parse_address"]
