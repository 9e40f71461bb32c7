from typing import Union


# Anything that supports len() and indexing to ints over raw bytes
Buffer = Union[bytes, bytearray, memoryview]
