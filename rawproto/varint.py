"""Primitive decoders: varints, tags and zig-zag transcoding."""
import math
from typing import Tuple

from ._types import Buffer
from .const import MAX_VARINT_BYTES, UINT64_MASK
from .errors import EmptyInput, TruncatedVarint, VarintTooLong


def decode_varint(buffer: Buffer, pos: int = 0) -> Tuple[int, int]:
    """
    Decode a single varint value from a byte buffer. Returns the value as an
    unsigned 64-bit integer and the number of bytes the varint took up.
    """
    if pos >= len(buffer):
        raise EmptyInput("No bytes left to decode a varint from", pos)

    result = 0
    end = min(len(buffer), pos + MAX_VARINT_BYTES)
    for i in range(pos, end):
        b = buffer[i]
        result |= (b & 0x7F) << (7 * (i - pos))
        if not (b & 0x80):
            return result & UINT64_MASK, i - pos + 1

    if end - pos == MAX_VARINT_BYTES:
        raise VarintTooLong("Too many bytes when decoding varint.", pos)
    raise TruncatedVarint("Buffer ended while decoding varint.", pos)


def varint_length(buffer: Buffer, pos: int = 0) -> int:
    """Count the bytes of the varint starting at ``pos``."""
    return decode_varint(buffer, pos)[1]


def encode_varint(value: int) -> bytes:
    """Encodes a single varint value. Negative values take 10 bytes."""
    if value < -(1 << 63):
        raise ValueError(
            "Negative value is not representable as a 64-bit integer - unable to encode a varint within 10 bytes."
        )
    elif value < 0:
        value += 1 << 64

    b = bytearray()
    bits = value & 0x7F
    value >>= 7
    while value:
        b.append(0x80 | bits)
        bits = value & 0x7F
        value >>= 7
    b.append(bits)
    return bytes(b)


def size_varint(value: int) -> int:
    """Calculates the size in bytes that a value would take as a varint."""
    if value < -(1 << 63):
        raise ValueError(
            "Negative value is not representable as a 64-bit integer - unable to encode a varint within 10 bytes."
        )
    elif value < 0:
        return 10
    elif value == 0:
        return 1
    else:
        return math.ceil(value.bit_length() / 7)


def split_tag(key: int) -> Tuple[int, int]:
    """Split a decoded tag into ``(field_number, wire_type)``."""
    return key >> 3, key & 0x7


def decode_tag(buffer: Buffer, pos: int = 0) -> Tuple[int, int, int]:
    """
    Decode the tag at ``pos``. The whole tag is read as a varint before it is
    split, so field numbers of 16 and above (multi-byte tags) come out whole.
    Returns the field number, the wire type bits and the bytes consumed.
    """
    key, consumed = decode_varint(buffer, pos)
    number, wire_type = split_tag(key)
    return number, wire_type, consumed


def encode_tag(field_number: int, wire_type: int) -> bytes:
    return encode_varint((field_number << 3) | int(wire_type))


def zigzag_encode(value: int, bits: int = 64) -> int:
    """Map a signed ``bits``-wide integer onto an unsigned one, small magnitudes first."""
    return ((value << 1) ^ (value >> (bits - 1))) & ((1 << bits) - 1)


def zigzag_decode(value: int) -> int:
    # Undo zig-zag encoding
    return (value >> 1) ^ -(value & 1)
