import pytest
from hypothesis import given
from hypothesis import strategies as st

import rawproto


def test_decode_varint():
    assert rawproto.decode_varint(b"\x08") == (8, 1)  # Single-byte varint
    assert rawproto.decode_varint(b"\x96\x01") == (150, 2)
    assert rawproto.decode_varint(b"\x95\x9A\xEF\x3A") == (123456789, 4)


def test_decode_varint_at_position():
    assert rawproto.decode_varint(b"\x08\x96\x01", 1) == (150, 2)


def test_decode_varint_ignores_trailing_bytes():
    assert rawproto.decode_varint(b"\x96\x01\xff\xff") == (150, 2)


def test_decode_varint_empty():
    with pytest.raises(rawproto.EmptyInput):
        rawproto.decode_varint(b"")

    with pytest.raises(rawproto.EmptyInput):
        rawproto.decode_varint(b"\x08", 1)


def test_decode_varint_cutoff():
    with pytest.raises(rawproto.TruncatedVarint) as exc_info:
        rawproto.decode_varint(b"\x96")
    assert exc_info.value.offset == 0

    with pytest.raises(rawproto.TruncatedVarint):
        rawproto.decode_varint(b"\x08\x80\x80", 1)


def test_decode_varint_too_long():
    with pytest.raises(rawproto.VarintTooLong):
        rawproto.decode_varint(b"\x80\x80\x80\x80\x80\x80\x80\x80\x80\x80\x01")

    # Within 64 bits, so this one is fine
    assert rawproto.decode_varint(b"\x80\x80\x80\x80\x80\x80\x80\x80\x80\x01") == (
        1 << 63,
        10,
    )


def test_decode_varint_drops_bits_past_64():
    assert rawproto.decode_varint(b"\xff" * 9 + b"\x7f") == ((1 << 64) - 1, 10)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        rawproto.decode_varint(b"\x80")


def test_varint_length():
    assert rawproto.varint_length(b"\x96\x01\x08") == 2
    assert rawproto.varint_length(b"\x96\x01\x08", 2) == 1


def test_encode_negative_varint():
    assert rawproto.encode_varint(-1) == b"\xff" * 9 + b"\x01"
    assert rawproto.decode_varint(rawproto.encode_varint(-1)) == ((1 << 64) - 1, 10)

    with pytest.raises(ValueError):
        rawproto.encode_varint(-(1 << 63) - 1)


@pytest.mark.parametrize("value", [0, 1, 127, 128, 300, 1 << 35, (1 << 64) - 1, -1])
def test_size_varint(value):
    assert rawproto.size_varint(value) == len(rawproto.encode_varint(value))


@given(st.integers(min_value=0, max_value=(1 << 64) - 1), st.binary(max_size=4))
def test_varint_roundtrip(value, trailer):
    encoded = rawproto.encode_varint(value)
    assert rawproto.decode_varint(encoded + trailer) == (value, len(encoded))
