"""Untyped reply tree produced by the wire protocol for one command."""

from dataclasses import dataclass
from typing import Any, Iterator, Union


@dataclass(frozen=True)
class Integer:
    """Integer reply (signed 64-bit)."""

    value: int


@dataclass(frozen=True)
class BulkBytes:
    """Bulk string reply: raw bytes."""

    value: bytes


@dataclass(frozen=True)
class SimpleString:
    """Simple string (status) reply."""

    value: str


@dataclass(frozen=True)
class Array:
    """Ordered sequence of nested replies. Elements may be Nil."""

    items: tuple

    def __post_init__(self):
        # Frozen: store a tuple so the tree can be shared read-only.
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Reply"]:
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]


@dataclass(frozen=True)
class Nil:
    """Absence of a value."""


@dataclass(frozen=True)
class ProtocolError:
    """Error reported by the server as the reply itself."""

    message: str


NIL = Nil()

Reply = Union[Integer, BulkBytes, SimpleString, Array, Nil, ProtocolError]

REPLY_TYPES = (Integer, BulkBytes, SimpleString, Array, Nil, ProtocolError)


def kind_name(reply: Any) -> str:
    """Name of the reply kind, for error messages."""
    return type(reply).__name__


def from_native(obj: Any) -> Reply:
    """Build a reply tree from the plain values a transport usually hands back."""
    if isinstance(obj, REPLY_TYPES):
        return obj
    if obj is None:
        return NIL
    # bool is an int subclass; True/False map to 1/0 like the server does.
    if isinstance(obj, int):
        return Integer(int(obj))
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BulkBytes(bytes(obj))
    if isinstance(obj, str):
        return SimpleString(obj)
    if isinstance(obj, (list, tuple)):
        return Array(tuple(from_native(x) for x in obj))
    if isinstance(obj, Exception):
        return ProtocolError(str(obj))
    raise TypeError(f"cannot build a reply from {type(obj).__name__}")
