"""
Unit tests for CounterSnapshot decoding.
"""

import json

import pytest

from LogstashRelay.backend import CounterSnapshot, DecodeError


PAYLOAD = {
    "id": "node-1",
    "pipeline": {
        "events": {"out": 1500, "in": 1600.5, "filtered": 1550},
        "queue": {
            "type": "persisted",
            "capacity": {
                "queue_size_in_bytes": 4096,
                "max_queue_size_in_bytes": 1073741824,
                "page_capacity_in_bytes": 262144,
            },
        },
    },
}


class TestCounterSnapshot:

    def test_decodes_expected_fields(self):
        snap = CounterSnapshot.from_json_text(json.dumps(PAYLOAD))

        assert snap.events_out == 1500.0
        assert snap.events_in == 1600.5
        assert snap.queue_size_bytes == 4096.0
        assert snap.max_queue_size_bytes == 1073741824.0
        assert snap.timestamp > 0

    def test_missing_fields_read_as_zero(self):
        snap = CounterSnapshot.from_json_text('{"pipeline": {"events": {"out": 7}}}')

        assert snap.events_out == 7.0
        assert snap.events_in == 0.0
        assert snap.queue_size_bytes == 0.0
        assert snap.max_queue_size_bytes == 0.0

    def test_empty_object_is_all_zero(self):
        snap = CounterSnapshot.from_json_text("{}")
        assert (snap.events_out, snap.events_in) == (0.0, 0.0)

    @pytest.mark.parametrize("body", [
        "",
        "not json",
        '{"pipeline": ',
        "[1, 2, 3]",
        '"pipeline"',
    ])
    def test_malformed_body_raises(self, body):
        with pytest.raises(DecodeError):
            CounterSnapshot.from_json_text(body)

    def test_wrong_section_type_raises(self):
        with pytest.raises(DecodeError, match="events"):
            CounterSnapshot.from_payload({"pipeline": {"events": [1, 2]}})

    @pytest.mark.parametrize("value", ["12", True, [1], {"n": 1}])
    def test_non_numeric_counter_raises(self, value):
        with pytest.raises(DecodeError, match="out"):
            CounterSnapshot.from_payload({"pipeline": {"events": {"out": value}}})

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity", "1e999"])
    def test_non_finite_counter_raises(self, literal):
        body = '{"pipeline": {"events": {"out": %s}}}' % literal
        with pytest.raises(DecodeError, match="out"):
            CounterSnapshot.from_json_text(body)

    def test_integer_too_large_for_float_raises(self):
        body = '{"pipeline": {"events": {"in": 1%s}}}' % ("0" * 400)
        with pytest.raises(DecodeError, match="in"):
            CounterSnapshot.from_json_text(body)
