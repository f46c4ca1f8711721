"""
Protocol definitions for upload module.

Defines interfaces (protocols) for dependency injection and strategy pattern.
"""
from typing import Protocol, Any, AsyncIterator, List, Mapping, Optional, Union
from pathlib import Path

from .models import Credentials, PartDescriptor


class ChunkingStrategy(Protocol):
    """
    Protocol for file chunking strategies.

    Allows different chunking algorithms to be plugged in.
    """

    def calculate_parts(self, file_size: int) -> List[PartDescriptor]:
        """
        Calculate part boundaries for a file.

        Args:
            file_size: Total file size in bytes

        Returns:
            Parts numbered from 1 with inclusive byte ranges
        """
        ...


class FileReaderProtocol(Protocol):
    """Protocol for bounded file reading."""

    def iter_range(
        self,
        file_path: Path,
        start: int,
        end: int
    ) -> AsyncIterator[bytes]:
        """
        Stream an inclusive byte range of a file.

        Args:
            file_path: Path to the file
            start: First byte offset
            end: Last byte offset (inclusive)

        Returns:
            Async iterator of data blocks
        """
        ...


class ResponseProtocol(Protocol):
    """Protocol for transport responses."""

    status: int
    headers: Mapping[str, str]
    body: bytes

    def json(self) -> Any: ...
    def payload(self) -> Any: ...


class HttpTransportProtocol(Protocol):
    """Protocol for HTTP transports used by the uploader."""

    async def send_json(
        self,
        method: str,
        url: str,
        auth: Credentials,
        payload: Any
    ) -> ResponseProtocol:
        """
        Send a JSON request.

        Raises:
            Exception: On network failure or non-2xx status
        """
        ...

    async def send_stream(
        self,
        method: str,
        url: str,
        auth: Credentials,
        body: Union[bytes, AsyncIterator[bytes]],
        headers: Optional[Mapping[str, str]] = None
    ) -> ResponseProtocol:
        """
        Send a raw (possibly streamed) request body.

        Raises:
            Exception: On network failure or non-2xx status
        """
        ...

    async def close(self) -> None: ...


class LoggerProtocol(Protocol):
    """Protocol for logger objects."""

    def debug(self, msg: str) -> None: ...
    def info(self, msg: str) -> None: ...
    def warning(self, msg: str) -> None: ...
    def error(self, msg: str) -> None: ...
