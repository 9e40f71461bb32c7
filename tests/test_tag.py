import pytest
from hypothesis import given
from hypothesis import strategies as st

import rawproto
from rawproto import WireType
from rawproto.const import MAX_FIELD_NUMBER


def test_split_tag():
    assert rawproto.split_tag(0x08) == (1, WireType.VARINT)
    assert rawproto.split_tag(0x2D) == (5, WireType.FIXED_32)
    assert rawproto.split_tag(0x31) == (6, WireType.FIXED_64)


def test_decode_single_byte_tag():
    assert rawproto.decode_tag(b"\x2a\x0b") == (5, WireType.LEN_DELIM, 1)


def test_decode_multi_byte_tag():
    # Field 16 no longer fits next to the wire type in one byte
    assert rawproto.encode_tag(16, WireType.VARINT) == b"\x80\x01"
    assert rawproto.decode_tag(b"\x80\x01") == (16, WireType.VARINT, 2)
    assert rawproto.decode_tag(b"\xa2\x06") == (100, WireType.LEN_DELIM, 2)


def test_largest_field_number():
    encoded = rawproto.encode_tag(MAX_FIELD_NUMBER, WireType.FIXED_32)
    assert len(encoded) == 5
    assert rawproto.decode_tag(encoded) == (536870911, WireType.FIXED_32, 5)


def test_decode_tag_does_not_validate_wire_type():
    assert rawproto.decode_tag(b"\x0b") == (1, 3, 1)


def test_decode_tag_truncated():
    with pytest.raises(rawproto.TruncatedVarint):
        rawproto.decode_tag(b"\x80")


@given(
    st.integers(min_value=1, max_value=MAX_FIELD_NUMBER),
    st.sampled_from(list(WireType)),
)
def test_tag_roundtrip(number, wire_type):
    encoded = rawproto.encode_tag(number, wire_type)
    assert rawproto.decode_tag(encoded) == (number, wire_type, len(encoded))
