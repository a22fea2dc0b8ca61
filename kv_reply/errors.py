"""Errors raised while turning a reply into a typed value.

Three classes are kept apart so callers can tell them apart:

* a transport error is whatever exception the caller passed in as ``err``;
  decoders raise it unchanged,
* ``ServerError`` is the server reporting a failure as the reply itself,
* ``DecodeError`` (and subclasses) is the reply not fitting the requested type.

``NilReplyError`` signals that the server answered with nil. It is not a
``DecodeError``: "the key is missing" is not "the reply is malformed".
"""


class NilReplyError(Exception):
    """The reply is nil."""

    def __init__(self, message: str = "kv_reply: nil returned"):
        super().__init__(message)


# One class object for every decoder: ``except ErrNil`` works everywhere.
ErrNil = NilReplyError


class ServerError(Exception):
    """Error reply sent by the server."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DecodeError(ValueError):
    """Reply does not convert to the requested type."""

    def __init__(self, decoder: str, message: str):
        self.decoder = decoder
        super().__init__(f"kv_reply: {message}")


class UnexpectedTypeError(DecodeError):
    """Reply kind is not accepted by the decoder."""

    def __init__(self, decoder: str, kind: str, element: bool = False):
        self.kind = kind
        what = "element type" if element else "type"
        super().__init__(decoder, f"unexpected {what} for {decoder}, got {kind}")


class RangeError(DecodeError):
    """Integer does not fit the target width."""

    def __init__(self, decoder: str, value, message: str | None = None):
        self.value = value
        super().__init__(decoder, message or f"value {value} out of range for {decoder}")


class NegativeValueError(RangeError):
    """Negative integer given to an unsigned decoder."""

    def __init__(self, decoder: str, value: int):
        super().__init__(decoder, value, f"unexpected negative value {value} for {decoder}")


class ParseError(DecodeError):
    """Textual content does not follow the expected grammar."""

    def __init__(self, decoder: str, raw, expected: str):
        self.raw = raw
        super().__init__(decoder, f"{decoder} cannot parse {raw!r} as {expected}")


class StructureError(DecodeError):
    """Reply shape does not match the expected layout."""
