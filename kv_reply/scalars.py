"""Scalar decoders: one reply in, one typed value out.

Every public decoder takes ``(reply, err=None)`` and either returns the
converted value or raises:

    Input               Result
    err is not None     err is raised unchanged, reply is not inspected
    matching reply      converted value
    Nil                 NilReplyError
    ProtocolError       ServerError carrying the server text
    anything else       UnexpectedTypeError naming decoder and reply kind

The ``*_value`` helpers hold the per-type rules without the ``err`` check so
the array and map decoders can reuse them for each element.
"""

import math
import re
import sys
from typing import Any, NoReturn

from .errors import (
    NegativeValueError,
    NilReplyError,
    ParseError,
    RangeError,
    ServerError,
    UnexpectedTypeError,
)
from .reply import Array, BulkBytes, Integer, Nil, ProtocolError, SimpleString, kind_name

DEFAULT_ENCODING = "utf-8"

# Native signed width of the host. Read at call time.
INT_MIN = -sys.maxsize - 1
INT_MAX = sys.maxsize

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

_SIGNED = re.compile(rb"[+-]?[0-9]+")
_UNSIGNED = re.compile(rb"[0-9]+")

_TRUE = frozenset((b"1", b"t", b"T", b"TRUE", b"true", b"True"))
_FALSE = frozenset((b"0", b"f", b"F", b"FALSE", b"false", b"False"))


def unexpected(decoder: str, reply: Any, element: bool = False) -> NoReturn:
    """Raise the error for a reply the decoder does not accept."""
    if isinstance(reply, Nil):
        raise NilReplyError()
    if isinstance(reply, ProtocolError):
        raise ServerError(reply.message)
    raise UnexpectedTypeError(decoder, kind_name(reply), element)


def check_range(decoder: str, value: int, low: int, high: int) -> int:
    if value < low or value > high:
        raise RangeError(decoder, value)
    return value


def _to_int(decoder: str, raw: bytes) -> int:
    # int() refuses very long digit strings; those are far out of any range anyway.
    try:
        return int(raw)
    except ValueError as e:
        raise RangeError(decoder, raw, f"value with {len(raw)} digits out of range for {decoder}") from e


def parse_signed(decoder: str, raw: bytes, low: int, high: int) -> int:
    """Parse a base-10 signed integer and check it against [low, high]."""
    if not _SIGNED.fullmatch(raw):
        raise ParseError(decoder, raw, "a base-10 integer")
    return check_range(decoder, _to_int(decoder, raw), low, high)


def parse_unsigned(decoder: str, raw: bytes) -> int:
    if not _UNSIGNED.fullmatch(raw):
        raise ParseError(decoder, raw, "a base-10 unsigned integer")
    return check_range(decoder, _to_int(decoder, raw), 0, UINT64_MAX)


def parse_float(decoder: str, raw: bytes) -> float:
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise ParseError(decoder, raw, "a float") from e
    # float() tolerates padding and digit separators; the wire format does not.
    if not text or text != text.strip() or "_" in text:
        raise ParseError(decoder, raw, "a float")
    try:
        value = float(text)
    except ValueError as e:
        raise ParseError(decoder, raw, "a float") from e
    # Finite text that overflows float64 is a range error, not infinity.
    if math.isinf(value) and text.lstrip("+-").lower() not in ("inf", "infinity"):
        raise RangeError(decoder, text, f"{text!r} out of range for {decoder}")
    return value


def parse_bool(decoder: str, raw: bytes) -> bool:
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ParseError(decoder, raw, "a boolean")


def int_value(reply: Any, decoder: str, low: int, high: int, element: bool = False) -> int:
    """Integer, or bulk string holding a base-10 integer, within [low, high]."""
    if isinstance(reply, Integer):
        return check_range(decoder, reply.value, low, high)
    if isinstance(reply, BulkBytes):
        return parse_signed(decoder, reply.value, low, high)
    unexpected(decoder, reply, element)


def uint_value(reply: Any, decoder: str, element: bool = False) -> int:
    """Non-negative integer, or bulk string holding an unsigned integer."""
    if isinstance(reply, Integer):
        if reply.value < 0:
            raise NegativeValueError(decoder, reply.value)
        return check_range(decoder, reply.value, 0, UINT64_MAX)
    if isinstance(reply, BulkBytes):
        return parse_unsigned(decoder, reply.value)
    unexpected(decoder, reply, element)


def float_value(reply: Any, decoder: str, element: bool = False) -> float:
    """Bulk string holding a float. Integer replies are not accepted."""
    if isinstance(reply, BulkBytes):
        return parse_float(decoder, reply.value)
    unexpected(decoder, reply, element)


def text_value(reply: Any, decoder: str, encoding: str = DEFAULT_ENCODING, element: bool = False) -> str:
    if isinstance(reply, BulkBytes):
        try:
            return reply.value.decode(encoding)
        except UnicodeDecodeError as e:
            raise ParseError(decoder, reply.value, f"{encoding} text") from e
    if isinstance(reply, SimpleString):
        return reply.value
    unexpected(decoder, reply, element)


def bytes_value(reply: Any, decoder: str, encoding: str = DEFAULT_ENCODING, element: bool = False) -> bytes:
    if isinstance(reply, BulkBytes):
        return reply.value
    if isinstance(reply, SimpleString):
        try:
            return reply.value.encode(encoding)
        except UnicodeEncodeError as e:
            raise ParseError(decoder, reply.value, f"{encoding} text") from e
    unexpected(decoder, reply, element)


def bool_value(reply: Any, decoder: str, element: bool = False) -> bool:
    if isinstance(reply, Integer):
        return reply.value != 0
    if isinstance(reply, BulkBytes):
        return parse_bool(decoder, reply.value)
    unexpected(decoder, reply, element)


def as_int(reply: Any, err: BaseException | None = None) -> int:
    """Convert to a native int. Values wider than the host int raise RangeError."""
    if err is not None:
        raise err
    return int_value(reply, "as_int", INT_MIN, INT_MAX)


def as_int64(reply: Any, err: BaseException | None = None) -> int:
    """Convert to a signed 64-bit int."""
    if err is not None:
        raise err
    return int_value(reply, "as_int64", INT64_MIN, INT64_MAX)


def as_uint64(reply: Any, err: BaseException | None = None) -> int:
    """Convert to an unsigned 64-bit int. Negative integers raise NegativeValueError."""
    if err is not None:
        raise err
    return uint_value(reply, "as_uint64")


def as_float64(reply: Any, err: BaseException | None = None) -> float:
    if err is not None:
        raise err
    return float_value(reply, "as_float64")


def as_string(reply: Any, err: BaseException | None = None, *, encoding: str = DEFAULT_ENCODING) -> str:
    """Convert a bulk or simple string to str."""
    if err is not None:
        raise err
    return text_value(reply, "as_string", encoding)


def as_bytes(reply: Any, err: BaseException | None = None, *, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Convert a bulk or simple string to bytes."""
    if err is not None:
        raise err
    return bytes_value(reply, "as_bytes", encoding)


def as_bool(reply: Any, err: BaseException | None = None) -> bool:
    """Integer is True iff nonzero; bulk strings must be a boolean literal (1, t, true, 0, f, false...)."""
    if err is not None:
        raise err
    return bool_value(reply, "as_bool")


def as_values(reply: Any, err: BaseException | None = None) -> list:
    """Return the elements of an array reply, untouched."""
    if err is not None:
        raise err
    if isinstance(reply, Array):
        return list(reply.items)
    unexpected("as_values", reply)
