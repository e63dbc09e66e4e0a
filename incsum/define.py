from typing import Literal

type HashName = Literal["adler32", "fletcher128", "rolling32", "lrc8"]

ENCODING = "utf-8"
NEWLINE = "\n"

BYTE_ORDER: Literal["big"] = "big"
"""Byte order of every multi-byte digest"""

CHUNK_SIZE = 4096
"""Default read size when hashing files"""

DEFAULT_ALGORITHM: HashName = "adler32"

ADLER_MODULUS = 65521  # largest prime below 2**16
ROLLING_BASE = 31

MASK_8 = 0xFF
MASK_32 = 0xFFFF_FFFF
MASK_64 = 0xFFFF_FFFF_FFFF_FFFF


class OutOfRangeError(IndexError):
    """Requested byte range is not contained in the buffer."""

    def __init__(self, offset: int, length: int, size: int) -> None:
        super().__init__(
            f"Range (offset={offset}, length={length}) is out of range for buffer of size {size}."
        )
        self.offset = offset
        self.length = length
        self.size = size
