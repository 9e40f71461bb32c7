from typing import Optional

from .const import WireType


class DecodeError(ValueError):
    """The base class for all errors raised while decoding a buffer.

    Attributes
    ----------
    offset: Optional[:class:`int`]
        Position in the buffer being decoded at which the problem was found.
        Offsets of errors raised inside an embedded message are relative to
        that message's payload.
    """

    def __init__(self, msg: str, offset: Optional[int] = None):
        if offset is not None:
            msg = f"{msg} (at offset {offset})"
        super().__init__(msg)
        self.offset = offset


class EmptyInput(DecodeError):
    """A varint was requested but no bytes remain."""


class TruncatedError(DecodeError):
    """The buffer ended before a value was complete."""


class TruncatedVarint(TruncatedError):
    """The last byte of the buffer still has its continuation bit set."""


class TruncatedFixed(TruncatedError):
    """Fewer than 4 or 8 bytes remain for a fixed-width field."""


class TruncatedLengthDelimited(TruncatedError):
    """Fewer bytes remain than a length prefix declares."""


class VarintTooLong(DecodeError):
    """A varint did not terminate within 10 bytes."""


class UnsupportedWireType(DecodeError):
    """
    Attributes
    ----------
    wire_type: :class:`int`
        The wire type bits of the offending tag, e.g. 3 for a group start.
    """

    def __init__(self, wire_type: int, offset: Optional[int] = None):
        super().__init__(f"Unsupported wire type {wire_type}", offset)
        self.wire_type = wire_type


class TypeMismatch(DecodeError):
    """A typed accessor was used on a field of another wire type.

    Attributes
    ----------
    expected: :class:`.WireType`
        The wire type the accessor reads.
    actual: :class:`.WireType`
        The wire type of the field.
    """

    def __init__(self, expected: WireType, actual: WireType):
        super().__init__(f"Expected a {expected.name} field, got {actual.name}")
        self.expected = expected
        self.actual = actual


class InvalidUtf8(DecodeError):
    ...


class MaxDepthExceeded(DecodeError):
    """
    Attributes
    ----------
    max_depth: :class:`int`
        The nesting limit that was hit.
    """

    def __init__(self, max_depth: int):
        super().__init__(f"Embedded messages nested deeper than {max_depth} levels")
        self.max_depth = max_depth
