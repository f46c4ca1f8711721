"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import AsyncIterator, Tuple, Union

import aiofiles

from ...exceptions import EmptyFileError, TransientTransferError
from ...logging import get_logger


class FileValidator:
    """
    Validates files before upload.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")

        file_size = path.stat().st_size

        return path, file_size

    def validate_size(self, file_size: int) -> None:
        """
        Validate file size.

        Raises:
            EmptyFileError: If file is empty
        """
        if file_size == 0:
            raise EmptyFileError("Cannot upload empty file")


class AsyncFileReader:
    """
    Asynchronous bounded file reader.

    Uses aiofiles for non-blocking I/O. Only one block is held in memory
    at a time while streaming a range.
    """

    DEFAULT_BLOCK_SIZE = 64 * 1024

    def __init__(self, block_size: int = DEFAULT_BLOCK_SIZE):
        """
        Initialize file reader.

        Args:
            block_size: Bytes read per iteration
        """
        if block_size <= 0:
            raise ValueError("Block size must be positive")
        self._block_size = block_size
        self._logger = get_logger('upload.file')

    async def iter_range(
        self,
        file_path: Path,
        start: int,
        end: int
    ) -> AsyncIterator[bytes]:
        """
        Stream the inclusive byte range ``[start, end]`` of a file.

        Args:
            file_path: Path to the file
            start: First byte offset
            end: Last byte offset (inclusive)

        Yields:
            Data blocks of at most ``block_size`` bytes

        Raises:
            TransientTransferError: If the file ends before ``end``
        """
        remaining = end - start + 1
        async with aiofiles.open(file_path, 'rb') as f:
            await f.seek(start)
            while remaining > 0:
                data = await f.read(min(self._block_size, remaining))
                if not data:
                    raise TransientTransferError(
                        f"Unexpected end of file reading {start}-{end} "
                        f"({remaining} bytes missing)"
                    )
                remaining -= len(data)
                yield data
        self._logger.debug(f"Streamed range: {start}-{end} ({end - start + 1} bytes)")

    async def read_range(self, file_path: Path, start: int, end: int) -> bytes:
        """
        Read the inclusive byte range ``[start, end]`` into memory.

        Args:
            file_path: Path to the file
            start: First byte offset
            end: Last byte offset (inclusive)

        Returns:
            Range data
        """
        blocks = []
        async for block in self.iter_range(file_path, start, end):
            blocks.append(block)
        return b''.join(blocks)
