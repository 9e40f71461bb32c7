from ._version import __version__
from .const import (
    DEFAULT_RECURSION_LIMIT,
    MAX_VARINT_BYTES,
    WIRE_FIXED_32,
    WIRE_FIXED_64,
    WIRE_LEN_DELIM,
    WIRE_VARINT,
    WireType,
)
from .errors import (
    DecodeError,
    EmptyInput,
    InvalidUtf8,
    MaxDepthExceeded,
    TruncatedError,
    TruncatedFixed,
    TruncatedLengthDelimited,
    TruncatedVarint,
    TypeMismatch,
    UnsupportedWireType,
    VarintTooLong,
)
from .fields import (
    Field,
    decode_message,
    parse_fields,
    read_field,
)
from .varint import (
    decode_tag,
    decode_varint,
    encode_tag,
    encode_varint,
    size_varint,
    split_tag,
    varint_length,
    zigzag_decode,
    zigzag_encode,
)
