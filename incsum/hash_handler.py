import copy
from abc import ABCMeta, abstractmethod
from collections.abc import Buffer
from typing import Self

from incsum.define import (
    ADLER_MODULUS,
    BYTE_ORDER,
    MASK_8,
    MASK_32,
    MASK_64,
    ROLLING_BASE,
    HashName,
    OutOfRangeError,
)


def _byte_view(data: Buffer) -> memoryview:
    view = memoryview(data)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")

    return view


class Hasher(metaclass=ABCMeta):
    """Incremental checksum engine.

    Lifecycle is `reset -> (absorb)* -> (finalize)*`, freely interleaved.
    `finalize` only reads the accumulator, so absorbing may continue after it.
    Instances are not safe for concurrent mutation.
    """

    name: HashName
    digest_size: int

    def __init__(self) -> None:
        self.reset()

    @abstractmethod
    def reset(self) -> None:
        """Restore the accumulator to its initial value."""
        raise NotImplementedError()

    @abstractmethod
    def _absorb(self, data: memoryview) -> None:
        raise NotImplementedError()

    @abstractmethod
    def finalize(self) -> bytes:
        """Digest of all bytes absorbed since the last reset."""
        raise NotImplementedError()

    def absorb(self, data: Buffer, offset: int = 0, length: int | None = None) -> None:
        """Feed `length` bytes of `data` starting at `offset`.

        Args:
            data: Any bytes-like object.
            offset: Index of the first byte to absorb.
            length: Number of bytes to absorb, `None` for the rest of `data`.

        Raises:
            OutOfRangeError: The range is not fully contained in `data`.
            TypeError: `data` is not bytes-like.
        """
        view = _byte_view(data)
        size = len(view)
        if length is None:
            length = size - offset

        if offset < 0 or length < 0 or offset + length > size:
            raise OutOfRangeError(offset, length, size)

        if length:
            self._absorb(view[offset : offset + length])

    def update(self, data: Buffer) -> None:
        self.absorb(data)

    def copy(self) -> Self:
        return copy.copy(self)

    @property
    def digest(self) -> bytes:
        return self.finalize()

    @property
    def hexdigest(self) -> str:
        return self.digest.hex()


class Adler32Hasher(Hasher):
    """Adler-32: two 16-bit sums modulo 65521, digest is `sum << 16 | state`."""

    name = "adler32"
    digest_size = 4

    _state: int
    _sum: int

    def reset(self) -> None:
        self._state = 1
        self._sum = 0

    def _absorb(self, data: memoryview) -> None:
        state, total = self._state, self._sum
        for byte in data:
            state = (state + byte) % ADLER_MODULUS
            total = (total + state) % ADLER_MODULUS

        self._state, self._sum = state, total

    def finalize(self) -> bytes:
        return ((self._sum << 16) | self._state).to_bytes(self.digest_size, BYTE_ORDER)


class Fletcher128Hasher(Hasher):
    """Fletcher-style pair of 64-bit wrapping sums, digest is `state` then `sum`."""

    name = "fletcher128"
    digest_size = 16

    _state: int
    _sum: int

    def reset(self) -> None:
        self._state = 0
        self._sum = 0

    def _absorb(self, data: memoryview) -> None:
        state, total = self._state, self._sum
        for byte in data:
            state = (state + byte) & MASK_64
            total = (total + state) & MASK_64

        self._state, self._sum = state, total

    def finalize(self) -> bytes:
        return self._state.to_bytes(8, BYTE_ORDER) + self._sum.to_bytes(8, BYTE_ORDER)


class Rolling32Hasher(Hasher):
    """Polynomial rolling hash `state * 31 + byte` over 32 bits."""

    name = "rolling32"
    digest_size = 4

    _state: int

    def reset(self) -> None:
        self._state = 0

    def _absorb(self, data: memoryview) -> None:
        state = self._state
        for byte in data:
            state = (state * ROLLING_BASE + byte) & MASK_32

        self._state = state

    def finalize(self) -> bytes:
        return self._state.to_bytes(self.digest_size, BYTE_ORDER)


class Lrc8Hasher(Hasher):
    """Longitudinal redundancy check.

    The digest is the two's-complement negation of the byte sum, so the sum of
    the payload followed by its digest is 0 modulo 256.
    """

    name = "lrc8"
    digest_size = 1

    _state: int

    def reset(self) -> None:
        self._state = 0

    def _absorb(self, data: memoryview) -> None:
        self._state = (self._state + sum(data)) & MASK_8

    def finalize(self) -> bytes:
        return bytes([((self._state ^ MASK_8) + 1) & MASK_8])


HASHERS: dict[str, type[Hasher]] = {
    cls.name: cls
    for cls in (Adler32Hasher, Fletcher128Hasher, Rolling32Hasher, Lrc8Hasher)
}


def new_hasher(name: str) -> Hasher:
    """Create a hasher by its registered name.

    Raises:
        ValueError: `name` is not registered.
    """
    try:
        cls = HASHERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown algorithm '{name}', expected one of: {', '.join(HASHERS)}"
        ) from None

    return cls()


def compute_hash(data: Buffer, name: str) -> bytes:
    hasher = new_hasher(name)
    hasher.absorb(data)
    return hasher.finalize()


def lrc_verify(data: Buffer) -> bool:
    """Check a payload followed by its LRC byte."""
    return sum(_byte_view(data)) & MASK_8 == 0
