"""Array replies decoded into homogeneous lists."""

from functools import partial
from typing import Any, Callable, TypeVar

from structlog import get_logger

from . import scalars
from .reply import Array, Nil, kind_name
from .scalars import DEFAULT_ENCODING, INT64_MAX, INT64_MIN, unexpected

logger = get_logger()

T = TypeVar("T")


def decode_array(
    reply: Any,
    err: BaseException | None,
    name: str,
    convert: Callable[[Any], T],
    zero: T = None,
) -> list[T]:
    """Convert every element of an array reply with ``convert``.

    A non-array reply fails like a scalar decoder would. Nil elements are
    skipped and their slot keeps ``zero``. The first element that fails to
    convert aborts the whole decode.
    """
    if err is not None:
        raise err
    if not isinstance(reply, Array):
        unexpected(name, reply)
    result = [zero] * len(reply)
    for i, item in enumerate(reply):
        if isinstance(item, Nil):
            continue
        try:
            result[i] = convert(item)
        except Exception:
            logger.new(decoder=name).debug("element conversion failed", index=i, kind=kind_name(item))
            raise
    return result


def as_float64s(reply: Any, err: BaseException | None = None) -> list[float]:
    """Nil elements become 0.0."""
    return decode_array(reply, err, "as_float64s", partial(scalars.float_value, decoder="as_float64s", element=True), 0.0)


def as_strings(reply: Any, err: BaseException | None = None, *, encoding: str = DEFAULT_ENCODING) -> list[str]:
    """Nil elements become ""."""
    convert = partial(scalars.text_value, decoder="as_strings", encoding=encoding, element=True)
    return decode_array(reply, err, "as_strings", convert, "")


def as_byte_slices(reply: Any, err: BaseException | None = None, *, encoding: str = DEFAULT_ENCODING) -> list[bytes | None]:
    """Nil elements stay None."""
    convert = partial(scalars.bytes_value, decoder="as_byte_slices", encoding=encoding, element=True)
    return decode_array(reply, err, "as_byte_slices", convert, None)


def as_int64s(reply: Any, err: BaseException | None = None) -> list[int]:
    convert = partial(scalars.int_value, decoder="as_int64s", low=INT64_MIN, high=INT64_MAX, element=True)
    return decode_array(reply, err, "as_int64s", convert, 0)


def as_ints(reply: Any, err: BaseException | None = None) -> list[int]:
    """Each element must fit the host int, as for as_int."""

    def convert(item):
        return scalars.int_value(item, "as_ints", scalars.INT_MIN, scalars.INT_MAX, element=True)

    return decode_array(reply, err, "as_ints", convert, 0)


def as_uint64s(reply: Any, err: BaseException | None = None) -> list[int]:
    return decode_array(reply, err, "as_uint64s", partial(scalars.uint_value, decoder="as_uint64s", element=True), 0)
