import pytest

from tests.util import (
    fixed32_field,
    fixed64_field,
    len_field,
    varint_field,
)


@pytest.fixture
def inner_bytes() -> bytes:
    return varint_field(1, 150) + len_field(2, b"hi")


@pytest.fixture
def message_bytes(inner_bytes) -> bytes:
    """One field of every wire type, plus an embedded message."""
    return (
        varint_field(1, 150)
        + fixed64_field(2, 66.66, "<d")
        + len_field(3, inner_bytes)
        + fixed32_field(4, 88.88, "<f")
        + len_field(5, "Hello World".encode("utf-8"))
    )
