from pathlib import Path

import pytest

from incsum.file_handler import MockFileSystem, OsFileHandler, cal_file
from incsum.hash_handler import Adler32Hasher, Rolling32Hasher, compute_hash


class TestMockFileSystem:
    @pytest.fixture
    def file_system(self) -> MockFileSystem:
        return MockFileSystem({"data.bin": b"0123456789"})

    def test_read_chunks(self, file_system: MockFileSystem) -> None:
        chunks = list(file_system.read_chunks("data.bin", 4))
        assert chunks == [b"0123", b"4567", b"89"]

    def test_missing_file(self, file_system: MockFileSystem) -> None:
        assert not file_system.check_file("missing.bin")
        assert file_system.get_file_size("missing.bin") == -1

        with pytest.raises(FileNotFoundError):
            list(file_system.read_chunks("missing.bin"))


class TestOsFileHandler:
    def test_read_chunks(self, tmp_path: Path) -> None:
        filepath = tmp_path / "data.bin"
        filepath.write_bytes(b"x" * 10)

        handler = OsFileHandler()
        assert handler.check_file(filepath)
        assert handler.get_file_size(filepath) == 10
        assert list(handler.read_chunks(filepath, 4)) == [b"xxxx", b"xxxx", b"xx"]

    def test_missing_file(self, tmp_path: Path) -> None:
        handler = OsFileHandler()
        filepath = tmp_path / "missing.bin"

        assert not handler.check_file(filepath)
        assert handler.get_file_size(filepath) == -1


class TestCalFile:
    @pytest.mark.parametrize("chunk_size", [1, 3, 4096])
    def test_chunk_size_does_not_matter(self, tmp_path: Path, chunk_size: int) -> None:
        content = bytes(range(256)) * 20
        filepath = tmp_path / "data.bin"
        filepath.write_bytes(content)

        digest = cal_file(Adler32Hasher(), filepath, OsFileHandler(), chunk_size)
        assert digest == compute_hash(content, "adler32")

    def test_resets_hasher(self) -> None:
        file_system = MockFileSystem({"tes": b"tes"})
        hasher = Rolling32Hasher()
        hasher.absorb(b"stale")

        assert cal_file(hasher, "tes", file_system) == (114722).to_bytes(4, "big")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            cal_file(Adler32Hasher(), tmp_path / "missing.bin", OsFileHandler())
