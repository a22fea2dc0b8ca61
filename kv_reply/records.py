"""Composite records built from positional sub-arrays: GEOPOS and SLOWLOG GET."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from structlog import get_logger

from .errors import RangeError, StructureError
from .reply import Array, Integer, Nil, kind_name
from . import scalars
from .scalars import DEFAULT_ENCODING, as_string, as_values
from .sequences import as_strings

logger = get_logger()


@dataclass(frozen=True)
class GeoPosition:
    latitude: float
    longitude: float


@dataclass
class SlowLogEntry:
    """One slow log entry."""

    id: int
    time: datetime
    execution_time: timedelta
    args: list[str] = field(default_factory=list)
    client_addr: Optional[str] = None
    client_name: Optional[str] = None


def as_positions(reply: Any, err: BaseException | None = None) -> list[Optional[GeoPosition]]:
    """Decode a GEOPOS reply. Members without a position come back as None."""
    values = as_values(reply, err)
    positions: list[Optional[GeoPosition]] = [None] * len(values)
    for i, item in enumerate(values):
        if isinstance(item, Nil):
            continue
        if not isinstance(item, Array):
            raise StructureError("as_positions", f"unexpected element type for as_positions, got {kind_name(item)}")
        if len(item) != 2:
            raise StructureError("as_positions", f"unexpected number of values for a member position, got {len(item)}")
        try:
            latitude = scalars.float_value(item[0], "as_positions", element=True)
            longitude = scalars.float_value(item[1], "as_positions", element=True)
        except Exception:
            logger.new(decoder="as_positions").debug("coordinate conversion failed", index=i)
            raise
        positions[i] = GeoPosition(latitude, longitude)
    return positions


def _slowlog_int(entry: Array, index: int, position: int) -> int:
    item = entry[position]
    if not isinstance(item, Integer):
        raise StructureError("as_slowlogs", f"slowlog entry {index} element[{position}] not an integer, got {kind_name(item)}")
    return item.value


def _slowlog_field(index: int, position: int, what: str, decode, item):
    try:
        return decode(item)
    except Exception as e:
        raise StructureError("as_slowlogs", f"slowlog entry {index} element[{position}] is not {what}: {e}") from e


def as_slowlogs(reply: Any, err: BaseException | None = None, *, encoding: str = DEFAULT_ENCODING) -> list[SlowLogEntry]:
    """Decode a SLOWLOG GET reply.

    Each entry is [id, unix time, duration in microseconds, [args...]] and,
    from Redis 4.0 on, [..., client address, client name].
    """
    entries = as_values(reply, err)
    log = logger.new(decoder="as_slowlogs")
    logs = []
    for i, raw in enumerate(entries):
        if not isinstance(raw, Array):
            log.debug("entry is not an array", index=i, kind=kind_name(raw))
            raise StructureError("as_slowlogs", f"slowlog entry {i} is not an array, got {kind_name(raw)}")
        if len(raw) < 4:
            log.debug("entry too short", index=i, length=len(raw))
            raise StructureError("as_slowlogs", f"slowlog entry {i} has {len(raw)} elements, expected at least 4")

        entry_id = _slowlog_int(raw, i, 0)
        timestamp = _slowlog_int(raw, i, 1)
        duration = _slowlog_int(raw, i, 2)
        args = _slowlog_field(i, 3, "an array of strings", lambda r: as_strings(r, encoding=encoding), raw[3])

        try:
            when = datetime.fromtimestamp(timestamp, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise RangeError("as_slowlogs", timestamp, f"slowlog entry {i} element[1] timestamp {timestamp} out of range") from e
        try:
            took = timedelta(microseconds=duration)
        except OverflowError as e:
            raise RangeError("as_slowlogs", duration, f"slowlog entry {i} element[2] duration {duration} out of range") from e

        entry = SlowLogEntry(
            id=entry_id,
            time=when,
            execution_time=took,
            args=args,
        )
        if len(raw) >= 6:
            entry.client_addr = _slowlog_field(i, 4, "a string", lambda r: as_string(r, encoding=encoding), raw[4])
            entry.client_name = _slowlog_field(i, 5, "a string", lambda r: as_string(r, encoding=encoding), raw[5])
        logs.append(entry)
    return logs
