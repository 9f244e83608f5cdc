"""Logstash pipeline stats parsing."""
from dataclasses import dataclass
from typing import Any, Mapping
import json
import math
import time


class StatsError(Exception):
    """A poll cycle could not produce a snapshot."""


class FetchError(StatsError):
    """The stats endpoint could not be reached or answered with an error."""


class DecodeError(StatsError):
    """The stats body was not the expected JSON document."""


@dataclass(frozen=True)
class CounterSnapshot:
    """Counters from Logstash /_node/stats/pipeline."""
    # Events (cumulative)
    events_out: float = 0.0
    events_in: float = 0.0

    # Persistent queue (instantaneous)
    queue_size_bytes: float = 0.0
    max_queue_size_bytes: float = 0.0

    # Timestamp when stats were fetched
    timestamp: float = 0.0

    @classmethod
    def from_payload(cls, payload: Any) -> "CounterSnapshot":
        """Build a snapshot from the decoded JSON body.

        Unknown keys are ignored and missing ones read as zero. Anything that
        is present but has the wrong shape raises DecodeError.
        """
        pipeline = _section(payload, "pipeline")
        events = _section(pipeline, "events")
        capacity = _section(_section(pipeline, "queue"), "capacity")
        return cls(
            events_out=_number(events, "out"),
            events_in=_number(events, "in"),
            queue_size_bytes=_number(capacity, "queue_size_in_bytes"),
            max_queue_size_bytes=_number(capacity, "max_queue_size_in_bytes"),
            timestamp=time.time(),
        )

    @classmethod
    def from_json_text(cls, text: str) -> "CounterSnapshot":
        try:
            payload = json.loads(text)
        except ValueError as exc:
            raise DecodeError(f"invalid JSON body: {exc}") from exc
        if not isinstance(payload, dict):
            raise DecodeError(f"expected a JSON object, got {type(payload).__name__}")
        return cls.from_payload(payload)


def _section(parent: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = parent.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodeError(f"field {key!r} is not an object")
    return value


def _number(parent: Mapping[str, Any], key: str) -> float:
    value = parent.get(key)
    if value is None:
        return 0.0
    # bool is an int subclass; json true/false is never a counter
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"field {key!r} is not a number: {value!r}")
    try:
        number = float(value)
    except OverflowError as exc:
        raise DecodeError(f"field {key!r} is out of range") from exc
    if not math.isfinite(number):
        raise DecodeError(f"field {key!r} is not finite: {value!r}")
    return number
