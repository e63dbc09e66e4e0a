import pytest

from incsum.hash_handler import HASHERS, Hasher


@pytest.fixture(params=sorted(HASHERS))
def hasher(request: pytest.FixtureRequest) -> Hasher:
    return HASHERS[request.param]()


@pytest.fixture
def sample_data() -> bytes:
    # covers every byte value, plus a run long enough to wrap the 16-bit sums
    return bytes(range(256)) + b"\xff" * 600 + b"The quick brown fox"
