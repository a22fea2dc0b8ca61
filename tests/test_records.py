"""Tests for GEOPOS and SLOWLOG GET record decoders."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from structlog.testing import capture_logs

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from kv_reply import (
    NIL,
    Array,
    BulkBytes,
    GeoPosition,
    Integer,
    NilReplyError,
    ParseError,
    RangeError,
    SimpleString,
    StructureError,
    UnexpectedTypeError,
    as_positions,
    as_slowlogs,
    from_native,
)


class TestPositions:
    def test_positions_with_missing_member(self):
        reply = Array([Array([BulkBytes(b"1.5"), BulkBytes(b"2.5")]), NIL])
        assert as_positions(reply) == [GeoPosition(1.5, 2.5), None]

    def test_fields(self):
        (pos,) = as_positions(from_native([[b"13.361389", b"38.115556"]]))
        assert pos.latitude == 13.361389
        assert pos.longitude == 38.115556

    def test_empty(self):
        assert as_positions(Array(())) == []

    @pytest.mark.parametrize("member", [[b"1"], [b"1", b"2", b"3"], []])
    def test_wrong_pair_length(self, member):
        with pytest.raises(StructureError) as exc:
            as_positions(from_native([member]))
        assert f"got {len(member)}" in str(exc.value)

    def test_member_not_array(self):
        with pytest.raises(StructureError):
            as_positions(from_native([b"1.5"]))

    def test_coordinate_not_bulk_string(self):
        with pytest.raises(UnexpectedTypeError) as exc:
            as_positions(from_native([[1, b"2"]]))
        assert exc.value.decoder == "as_positions"
        assert "unexpected element type for as_positions, got Integer" in str(exc.value)

    def test_coordinate_failure_names_member(self):
        with capture_logs() as logs:
            with pytest.raises(ParseError) as exc:
                as_positions(from_native([None, [b"1.5", b"east"]]))
        assert exc.value.decoder == "as_positions"
        assert logs == [
            {
                "decoder": "as_positions",
                "index": 1,
                "event": "coordinate conversion failed",
                "log_level": "debug",
            }
        ]

    def test_coordinate_overflow(self):
        with pytest.raises(RangeError):
            as_positions(from_native([[b"1e400", b"2"]]))

    def test_nil_coordinate(self):
        with pytest.raises(NilReplyError):
            as_positions(from_native([[b"1", None]]))


def _entry(*extra):
    return [7, 1700000000, 1500, [b"GET", b"k"], *extra]


class TestSlowLogs:
    def test_four_element_entry(self):
        (entry,) = as_slowlogs(from_native([_entry()]))
        assert entry.id == 7
        assert entry.time == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
        assert entry.time.timestamp() == 1700000000
        assert entry.execution_time == timedelta(microseconds=1500)
        assert entry.args == ["GET", "k"]
        assert entry.client_addr is None
        assert entry.client_name is None

    def test_six_element_entry(self):
        (entry,) = as_slowlogs(from_native([_entry(b"127.0.0.1:58217", b"worker")]))
        assert entry.client_addr == "127.0.0.1:58217"
        assert entry.client_name == "worker"

    def test_five_element_entry_ignores_extra(self):
        (entry,) = as_slowlogs(from_native([_entry(b"127.0.0.1:58217")]))
        assert entry.client_addr is None

    def test_several_entries(self):
        logs = as_slowlogs(from_native([_entry(), [8, 1700000001, 2, [b"PING"]]]))
        assert [e.id for e in logs] == [7, 8]
        assert logs[1].args == ["PING"]

    def test_empty(self):
        assert as_slowlogs(Array(())) == []

    def test_short_entry(self):
        with pytest.raises(StructureError) as exc:
            as_slowlogs(from_native([_entry(), [7, 1700000000, 1500]]))
        assert "slowlog entry 1 has 3 elements, expected at least 4" in str(exc.value)

    def test_entry_not_array(self):
        with pytest.raises(StructureError):
            as_slowlogs(from_native([b"GET"]))

    @pytest.mark.parametrize("position", [0, 1, 2])
    def test_integer_fields(self, position):
        raw = _entry()
        raw[position] = str(raw[position]).encode()
        with pytest.raises(StructureError) as exc:
            as_slowlogs(from_native([raw]))
        assert f"element[{position}]" in str(exc.value)

    def test_timestamp_out_of_range(self):
        raw = _entry()
        raw[1] = 1 << 62
        with pytest.raises(RangeError) as exc:
            as_slowlogs(from_native([raw]))
        assert exc.value.value == 1 << 62
        assert "element[1]" in str(exc.value)

    def test_duration_out_of_range(self):
        raw = _entry()
        raw[2] = 10**20
        with pytest.raises(RangeError) as exc:
            as_slowlogs(from_native([raw]))
        assert exc.value.value == 10**20
        assert "element[2]" in str(exc.value)

    def test_args_not_array(self):
        raw = _entry()
        raw[3] = b"GET k"
        with pytest.raises(StructureError) as exc:
            as_slowlogs(from_native([raw]))
        assert "element[3]" in str(exc.value)
        assert isinstance(exc.value.__cause__, UnexpectedTypeError)

    def test_args_with_nested_array(self):
        raw = _entry()
        raw[3] = [b"GET", [b"k"]]
        with pytest.raises(StructureError):
            as_slowlogs(from_native([raw]))

    def test_client_name_not_string(self):
        with pytest.raises(StructureError) as exc:
            as_slowlogs(from_native([_entry(b"127.0.0.1:58217", 3)]))
        assert "element[5]" in str(exc.value)

    def test_simple_string_client_fields(self):
        raw = Array(list(from_native(_entry())) + [SimpleString("addr"), SimpleString("name")])
        (entry,) = as_slowlogs(Array([raw]))
        assert (entry.client_addr, entry.client_name) == ("addr", "name")

    def test_same_reply_twice(self):
        reply = from_native([_entry()])
        assert as_slowlogs(reply) == as_slowlogs(reply)
