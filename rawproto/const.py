import enum


# Wire types
# https://developers.google.com/protocol-buffers/docs/encoding#structure
class WireType(enum.IntEnum):
    """The wire types this decoder understands.

    Group start/end (3 and 4) are deprecated and, like 6 and 7, are not
    members: they have no length that can be known without a schema.
    """

    VARINT = 0
    FIXED_64 = 1
    LEN_DELIM = 2
    FIXED_32 = 5


WIRE_VARINT = WireType.VARINT
WIRE_FIXED_64 = WireType.FIXED_64
WIRE_LEN_DELIM = WireType.LEN_DELIM
WIRE_FIXED_32 = WireType.FIXED_32

# Payload sizes of the fixed-width wire types
FIXED_SIZES = {
    WireType.FIXED_64: 8,
    WireType.FIXED_32: 4,
}

# A 64-bit value needs at most ceil(64 / 7) groups
MAX_VARINT_BYTES = 10

# Same default as the protobuf runtimes
DEFAULT_RECURSION_LIMIT = 100

# Largest field number a tag may carry
MAX_FIELD_NUMBER = (1 << 29) - 1

UINT32_MASK = (1 << 32) - 1
UINT64_MASK = (1 << 64) - 1
