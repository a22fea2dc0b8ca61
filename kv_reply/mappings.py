"""Flat key/value array replies (HGETALL, CONFIG GET) decoded into dicts."""

from functools import partial
from typing import Any, Callable, TypeVar

from structlog import get_logger

from . import scalars
from .errors import ParseError, StructureError
from .reply import BulkBytes, Nil, kind_name
from .scalars import DEFAULT_ENCODING, INT64_MAX, INT64_MIN, as_values

logger = get_logger()

T = TypeVar("T")


def decode_map(
    reply: Any,
    err: BaseException | None,
    name: str,
    convert: Callable[[Any], T],
    zero: T,
    encoding: str = DEFAULT_ENCODING,
) -> dict[str, T]:
    """Pair up alternating keys and values. Keys must be bulk strings.

    A nil value stores ``zero`` instead of failing. A repeated key keeps the
    last value.
    """
    values = as_values(reply, err)
    if len(values) % 2 != 0:
        raise StructureError(name, f"{name} expects even number of values, got {len(values)}")

    log = logger.new(decoder=name)
    result: dict[str, T] = {}
    for i in range(0, len(values), 2):
        key, value = values[i], values[i + 1]
        if not isinstance(key, BulkBytes):
            log.debug("bad key", index=i, kind=kind_name(key))
            raise StructureError(name, f"{name} key[{i}] not a bulk string value, got {kind_name(key)}")
        try:
            text = key.value.decode(encoding)
        except UnicodeDecodeError as e:
            raise ParseError(name, key.value, f"{encoding} text") from e

        if isinstance(value, Nil):
            result[text] = zero
            continue
        try:
            result[text] = convert(value)
        except Exception:
            log.debug("value conversion failed", key=text, kind=kind_name(value))
            raise
    return result


def as_string_map(reply: Any, err: BaseException | None = None, *, encoding: str = DEFAULT_ENCODING) -> dict[str, str]:
    convert = partial(scalars.text_value, decoder="as_string_map", encoding=encoding)
    return decode_map(reply, err, "as_string_map", convert, "", encoding)


def as_int_map(reply: Any, err: BaseException | None = None, *, encoding: str = DEFAULT_ENCODING) -> dict[str, int]:
    def convert(item):
        return scalars.int_value(item, "as_int_map", scalars.INT_MIN, scalars.INT_MAX)

    return decode_map(reply, err, "as_int_map", convert, 0, encoding)


def as_int64_map(reply: Any, err: BaseException | None = None, *, encoding: str = DEFAULT_ENCODING) -> dict[str, int]:
    convert = partial(scalars.int_value, decoder="as_int64_map", low=INT64_MIN, high=INT64_MAX)
    return decode_map(reply, err, "as_int64_map", convert, 0, encoding)


def as_uint64_map(reply: Any, err: BaseException | None = None, *, encoding: str = DEFAULT_ENCODING) -> dict[str, int]:
    convert = partial(scalars.uint_value, decoder="as_uint64_map")
    return decode_map(reply, err, "as_uint64_map", convert, 0, encoding)


def as_float64_map(reply: Any, err: BaseException | None = None, *, encoding: str = DEFAULT_ENCODING) -> dict[str, float]:
    convert = partial(scalars.float_value, decoder="as_float64_map")
    return decode_map(reply, err, "as_float64_map", convert, 0.0, encoding)
