from abc import ABCMeta, abstractmethod
from collections.abc import Iterator
from pathlib import Path

from incsum.define import CHUNK_SIZE
from incsum.hash_handler import Hasher


class FileHandler(metaclass=ABCMeta):
    @abstractmethod
    def read_chunks(
        self, filepath: str | Path, chunk_size: int = CHUNK_SIZE
    ) -> Iterator[bytes]:
        """Read a file sequentially.

        Args:
            filepath: The file to read.
            chunk_size: Maximum size of each yielded chunk.

        Returns:
            An iterator over the file content, in order.
        """
        raise NotImplementedError()

    @abstractmethod
    def check_file(self, filepath: str | Path) -> bool:
        raise NotImplementedError()

    @abstractmethod
    def get_file_size(self, filepath: str | Path) -> int:
        raise NotImplementedError()


class OsFileHandler(FileHandler):
    """OS File System"""

    def read_chunks(
        self, filepath: str | Path, chunk_size: int = CHUNK_SIZE
    ) -> Iterator[bytes]:
        with open(filepath, "rb") as f:
            for block in iter(lambda: f.read(chunk_size), b""):
                yield block

    def check_file(self, filepath: str | Path) -> bool:
        return Path(filepath).is_file()

    def get_file_size(self, filepath: str | Path) -> int:
        try:
            return Path(filepath).stat().st_size
        except FileNotFoundError:
            return -1


class MockFileSystem(FileHandler):
    files: dict[str, bytes]

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self.files = dict(files) if files else {}

    def read_chunks(
        self, filepath: str | Path, chunk_size: int = CHUNK_SIZE
    ) -> Iterator[bytes]:
        file = str(filepath)
        if file not in self.files:
            raise FileNotFoundError(f"File '{filepath}' not found.")

        content = self.files[file]
        for offset in range(0, len(content), chunk_size):
            yield content[offset : offset + chunk_size]

    def check_file(self, filepath: str | Path) -> bool:
        return str(filepath) in self.files

    def get_file_size(self, filepath: str | Path) -> int:
        try:
            return len(self.files[str(filepath)])
        except KeyError:
            return -1


def cal_file(
    hasher: Hasher,
    filepath: str | Path,
    file_handler: FileHandler,
    chunk_size: int = CHUNK_SIZE,
) -> bytes:
    """Reset `hasher` and return the digest of the whole file."""
    hasher.reset()
    for chunk in file_handler.read_chunks(filepath, chunk_size):
        hasher.absorb(chunk)

    return hasher.finalize()
