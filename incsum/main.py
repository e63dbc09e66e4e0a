import argparse
import os
import sys
from collections.abc import Sequence

from loguru import logger

from incsum.define import CHUNK_SIZE, DEFAULT_ALGORITHM
from incsum.digest_format import bytes_to_base64, bytes_to_hex
from incsum.file_handler import FileHandler, OsFileHandler, cal_file
from incsum.hash_handler import HASHERS, new_hasher


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")

    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="incsum", description="Calculate incremental checksums of files."
    )
    parser.add_argument("files", nargs="*", help="File paths")
    parser.add_argument(
        "-a",
        "--algorithm",
        choices=sorted(HASHERS),
        default=os.getenv("INCSUM_ALGORITHM", DEFAULT_ALGORITHM),
        help="Checksum algorithm (env: INCSUM_ALGORITHM)",
    )
    parser.add_argument(
        "--chunk-size",
        type=positive_int,
        default=os.getenv("INCSUM_CHUNK_SIZE", str(CHUNK_SIZE)),
        help="Read size in bytes (env: INCSUM_CHUNK_SIZE)",
    )
    parser.add_argument(
        "--base64", action="store_true", help="Print digests as Base64 instead of hex"
    )
    parser.add_argument(
        "--list", action="store_true", help="List available algorithms and exit"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(
    argv: Sequence[str] | None = None, file_handler: FileHandler | None = None
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.algorithm.lower() not in HASHERS:
        parser.error(
            f"argument -a/--algorithm: invalid choice: '{args.algorithm}' (choose from {', '.join(HASHERS)})"
        )

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    if args.list:
        for name, cls in HASHERS.items():
            print(f"{name}\t{cls.digest_size * 8} bits")
        return 0

    if file_handler is None:
        file_handler = OsFileHandler()

    hasher = new_hasher(args.algorithm)
    logger.debug(f"Algorithm: {hasher.name}, chunk size: {args.chunk_size}")

    exit_code = 0
    for filepath in args.files:
        if not file_handler.check_file(filepath):
            logger.error(f"File '{filepath}' not found or not a regular file.")
            exit_code = 1
            continue

        logger.debug(f"File '{filepath}' size: {file_handler.get_file_size(filepath)}")
        try:
            digest = cal_file(hasher, filepath, file_handler, args.chunk_size)
        except OSError as e:
            logger.error(f"File '{filepath}' could not be read. {e}")
            exit_code = 1
            continue

        text = bytes_to_base64(digest) if args.base64 else bytes_to_hex(digest)
        print(f"{text}  {filepath}")
        logger.info(f"File '{filepath}' {hasher.name} '{text}'.")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
