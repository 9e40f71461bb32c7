import struct
from typing import Union

from rawproto import WireType, encode_tag, encode_varint


def varint_field(number: int, value: int) -> bytes:
    return encode_tag(number, WireType.VARINT) + encode_varint(value)


def fixed32_field(number: int, value: Union[int, float], fmt: str = "<I") -> bytes:
    return encode_tag(number, WireType.FIXED_32) + struct.pack(fmt, value)


def fixed64_field(number: int, value: Union[int, float], fmt: str = "<Q") -> bytes:
    return encode_tag(number, WireType.FIXED_64) + struct.pack(fmt, value)


def len_field(number: int, payload: bytes) -> bytes:
    return encode_tag(number, WireType.LEN_DELIM) + encode_varint(len(payload)) + payload


def nested(levels: int) -> bytes:
    """A message wrapping an empty message ``levels`` times, all as field 1."""
    data = b""
    for _ in range(levels):
        data = len_field(1, data)
    return data
