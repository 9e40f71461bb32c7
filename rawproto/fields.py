from __future__ import annotations

import dataclasses
import logging
import struct
from typing import (
    Callable,
    Dict,
    Iterator,
    List,
    Optional,
    Tuple,
)

from ._types import Buffer
from .const import (
    DEFAULT_RECURSION_LIMIT,
    FIXED_SIZES,
    UINT32_MASK,
    WireType,
)
from .errors import (
    DecodeError,
    EmptyInput,
    InvalidUtf8,
    MaxDepthExceeded,
    TruncatedFixed,
    TruncatedLengthDelimited,
    TruncatedVarint,
    TypeMismatch,
    UnsupportedWireType,
)
from .varint import (
    decode_tag,
    decode_varint,
    varint_length,
    zigzag_decode,
)


log = logging.getLogger(__name__)


def _signed(value: int, bits: int) -> int:
    """Reinterpret the low ``bits`` of ``value`` as two's complement."""
    value = value & ((1 << bits) - 1)
    signbit = 1 << (bits - 1)
    return int((value ^ signbit) - signbit)


def _as_view(buffer: Buffer) -> memoryview:
    view = memoryview(buffer).toreadonly()
    if view.format != "B":
        view = view.cast("B")
    return view


@dataclasses.dataclass(frozen=True, repr=False)
class Field:
    """
    A single field read off the wire. ``payload`` and ``raw`` are read-only
    views into the buffer the field was decoded from; nothing is copied until
    an accessor has to build an owned value.

    Only ``number``, ``wire_type`` and the payload contents take part in
    equality, so the same bytes compare equal wherever they were decoded.
    """

    number: int
    wire_type: WireType
    # Payload bytes only, without tag or length prefix
    payload: memoryview
    # Tag, length prefix and payload
    raw: memoryview = dataclasses.field(compare=False)
    # Position of the tag in the buffer it was decoded from
    offset: int = dataclasses.field(default=0, compare=False)
    # 0 for top-level fields, +1 per embedded message
    depth: int = dataclasses.field(default=0, compare=False)

    @property
    def payload_length(self) -> int:
        return len(self.payload)

    def __hash__(self) -> int:
        return hash((self.number, self.wire_type, self.payload.tobytes()))

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(number={self.number}, "
            f"wire_type={self.wire_type.name}, payload={self.payload.tobytes()!r})"
        )

    def __str__(self) -> str:
        return (
            f"FieldNum: {self.number} WireType:{self.wire_type.name} "
            f"DataLength:{self.payload_length}"
        )

    def _expect(self, wire_type: WireType) -> None:
        if self.wire_type != wire_type:
            raise TypeMismatch(wire_type, self.wire_type)

    def _varint(self) -> int:
        self._expect(WireType.VARINT)
        return decode_varint(self.payload)[0]

    def _unpack(self, wire_type: WireType, fmt: str):
        self._expect(wire_type)
        return struct.unpack(fmt, self.payload)[0]

    def as_int64(self) -> int:
        return _signed(self._varint(), 64)

    def as_uint64(self) -> int:
        return self._varint()

    def as_int32(self) -> int:
        return _signed(self._varint(), 32)

    def as_uint32(self) -> int:
        return self._varint() & UINT32_MASK

    def as_bool(self) -> bool:
        return self._varint() != 0

    def as_sint64(self) -> int:
        return zigzag_decode(self._varint())

    def as_sint32(self) -> int:
        return zigzag_decode(self._varint() & UINT32_MASK)

    def as_float(self) -> float:
        return self._unpack(WireType.FIXED_32, "<f")

    def as_double(self) -> float:
        return self._unpack(WireType.FIXED_64, "<d")

    def as_fixed32(self) -> int:
        return self._unpack(WireType.FIXED_32, "<I")

    def as_fixed64(self) -> int:
        return self._unpack(WireType.FIXED_64, "<Q")

    def as_sfixed32(self) -> int:
        return self._unpack(WireType.FIXED_32, "<i")

    def as_sfixed64(self) -> int:
        return self._unpack(WireType.FIXED_64, "<q")

    def as_bytes(self) -> bytes:
        self._expect(WireType.LEN_DELIM)
        return self.payload.tobytes()

    def as_string(self, errors: str = "strict") -> str:
        """
        Decode the payload as UTF-8. Without a schema there is no telling a
        ``string`` from a ``bytes`` field, so malformed input raises
        :class:`.InvalidUtf8` unless another codec error handler, such as
        ``"replace"``, is given.
        """
        self._expect(WireType.LEN_DELIM)
        try:
            return self.payload.tobytes().decode("utf-8", errors)
        except UnicodeDecodeError as e:
            raise InvalidUtf8(f"Payload is not valid UTF-8: {e.reason}", e.start) from e

    def as_embedded(self, max_depth: int = DEFAULT_RECURSION_LIMIT) -> List[Field]:
        """
        Parse the payload as an embedded message.

        Parameters
        -----------
        max_depth: :class:`int`
            How many levels of embedded messages may be opened below the top
            level before :class:`.MaxDepthExceeded` is raised.

        Returns
        --------
        List[:class:`Field`]
            The fields of the embedded message, in buffer order.
        """
        self._expect(WireType.LEN_DELIM)
        return decode_message(self.payload, max_depth=max_depth, depth=self.depth + 1)


def _varint_after(view: memoryview, pos: int) -> Tuple[int, int]:
    # A varint that should follow a tag but is missing entirely is still a
    # truncation, not an empty message.
    try:
        return decode_varint(view, pos)
    except EmptyInput:
        raise TruncatedVarint("Buffer ended before varint", pos) from None


def _read_varint(view: memoryview, pos: int) -> Tuple[int, int]:
    try:
        length = varint_length(view, pos)
    except EmptyInput:
        raise TruncatedVarint("Buffer ended before varint", pos) from None
    return pos, pos + length


def _fixed_reader(size: int) -> Callable[[memoryview, int], Tuple[int, int]]:
    def read(view: memoryview, pos: int) -> Tuple[int, int]:
        end = pos + size
        if end > len(view):
            raise TruncatedFixed(
                f"Expected {size} bytes, only {len(view) - pos} remain", pos
            )
        return pos, end

    return read


def _read_len_delim(view: memoryview, pos: int) -> Tuple[int, int]:
    length, consumed = _varint_after(view, pos)
    start = pos + consumed
    end = start + length
    if end > len(view):
        raise TruncatedLengthDelimited(
            f"Length prefix declares {length} bytes, only {len(view) - start} remain",
            start,
        )
    return start, end


# Returns the (start, end) bounds of the payload following the tag
PAYLOAD_READERS: Dict[WireType, Callable[[memoryview, int], Tuple[int, int]]] = {
    WireType.VARINT: _read_varint,
    WireType.FIXED_64: _fixed_reader(FIXED_SIZES[WireType.FIXED_64]),
    WireType.LEN_DELIM: _read_len_delim,
    WireType.FIXED_32: _fixed_reader(FIXED_SIZES[WireType.FIXED_32]),
}


def read_field(
    buffer: Buffer, pos: int = 0, *, depth: int = 0
) -> Tuple[Optional[Field], int]:
    """
    Read the single field starting at ``pos``. Returns the field and the number
    of bytes it took up, tag included, or ``(None, 0)`` once the buffer is
    exhausted.
    """
    view = _as_view(buffer)
    if pos >= len(view):
        return None, 0

    number, wire, consumed = decode_tag(view, pos)
    try:
        wire_type = WireType(wire)
    except ValueError:
        raise UnsupportedWireType(wire, pos) from None

    start, end = PAYLOAD_READERS[wire_type](view, pos + consumed)
    field = Field(
        number=number,
        wire_type=wire_type,
        payload=view[start:end],
        raw=view[pos:end],
        offset=pos,
        depth=depth,
    )
    return field, end - pos


def parse_fields(buffer: Buffer, *, depth: int = 0) -> Iterator[Field]:
    """
    Lazily yield the fields of ``buffer`` in order. Fields read before an
    error has been raised will already have been yielded; use
    :func:`decode_message` to get all of them or none.
    """
    view = _as_view(buffer)
    pos = 0
    while True:
        try:
            field, consumed = read_field(view, pos, depth=depth)
        except DecodeError as e:
            log.debug("Failed to read field at offset %d (depth %d): %s", pos, depth, e)
            raise
        if field is None:
            return
        yield field
        pos += consumed


def decode_message(
    buffer: Buffer, *, max_depth: int = DEFAULT_RECURSION_LIMIT, depth: int = 0
) -> List[Field]:
    """
    Decode every field of ``buffer``. An empty buffer is an empty message.

    Parameters
    -----------
    buffer: :class:`bytes`
        A complete encoded message.
    max_depth: :class:`int`
        Deepest nesting level that may be decoded.
    depth: :class:`int`
        Nesting level of ``buffer`` itself, 0 for a top-level message.

    Returns
    --------
    List[:class:`Field`]
        The fields in buffer order, duplicates included.
    """
    if depth > max_depth:
        log.debug("Refusing to decode message at depth %d", depth)
        raise MaxDepthExceeded(max_depth)
    return list(parse_fields(buffer, depth=depth))
