"""Typed decoding of key-value store replies."""

from .errors import (
    DecodeError,
    ErrNil,
    NegativeValueError,
    NilReplyError,
    ParseError,
    RangeError,
    ServerError,
    StructureError,
    UnexpectedTypeError,
)
from .mappings import as_float64_map, as_int64_map, as_int_map, as_string_map, as_uint64_map, decode_map
from .records import GeoPosition, SlowLogEntry, as_positions, as_slowlogs
from .reply import NIL, Array, BulkBytes, Integer, Nil, ProtocolError, Reply, SimpleString, from_native, kind_name
from .scalars import as_bool, as_bytes, as_float64, as_int, as_int64, as_string, as_uint64, as_values
from .sequences import as_byte_slices, as_float64s, as_int64s, as_ints, as_strings, as_uint64s, decode_array

__version__ = "0.1.0"
