"""
Upload coordinator.

Drives one file through the start / parts / complete protocol using
injected dependencies.
"""
import asyncio
import time
from pathlib import Path
from typing import Any, Callable, List, Optional, Union
from urllib.parse import quote

from ..api.config import UploaderConfig
from ..api.retry import LinearBackoffStrategy, RetryStrategy, with_retry
from ..exceptions import CompletionError, ProtocolViolationError, SessionStartError
from ..logging import get_logger
from .models import (
    Credentials,
    PartDescriptor,
    UploadProgress,
    UploadSession,
    UploadState,
    build_completion_payload,
)
from .protocols import (
    ChunkingStrategy,
    FileReaderProtocol,
    HttpTransportProtocol,
    LoggerProtocol,
    ResponseProtocol,
)
from .services import AiohttpTransport, AsyncFileReader, FileValidator
from .strategies import FixedSizeChunkingStrategy

_logger = get_logger('upload')


class ChunkedUploader:
    """
    Uploads a file as a sequence of byte-range parts.

    Uses dependency injection for all components, making it:
    - Testable (fake transport, fake reader)
    - Extensible (swap chunking or retry strategy)

    One instance drives at most one upload at a time. Parts are sent in
    ascending order, one at a time, unless ``max_concurrent_parts`` in the
    config is raised.
    """

    def __init__(
        self,
        transport: Optional[HttpTransportProtocol] = None,
        config: Optional[UploaderConfig] = None,
        chunking_strategy: Optional[ChunkingStrategy] = None,
        file_reader: Optional[FileReaderProtocol] = None,
        retry_strategy: Optional[RetryStrategy] = None,
        logger: Optional[LoggerProtocol] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize chunked uploader.

        Args:
            transport: HTTP transport; an AiohttpTransport is created (and
                closed after each upload) when omitted
            config: Uploader configuration
            chunking_strategy: Strategy for splitting the file into parts
            file_reader: Bounded file reader
            retry_strategy: Retry policy for part transfers
            logger: Logger instance
            progress_callback: Optional callback invoked after every part
        """
        self._config = config or UploaderConfig()
        self._owns_transport = transport is None
        self._transport = transport or AiohttpTransport(self._config)
        self._chunking = chunking_strategy or FixedSizeChunkingStrategy()
        self._file_reader = file_reader or AsyncFileReader()
        self._retry = retry_strategy or LinearBackoffStrategy(self._config.retry)
        self._validator = FileValidator()
        self._logger = logger or _logger
        self._progress_callback = progress_callback
        self._state = UploadState.NOT_STARTED
        self._session: Optional[UploadSession] = None
        self._in_progress = False

    @property
    def state(self) -> UploadState:
        """Current lifecycle state."""
        return self._state

    @property
    def session(self) -> Optional[UploadSession]:
        """Session of the current or last upload."""
        return self._session

    async def upload(
        self,
        file_path: Union[str, Path],
        base_url: str,
        username: str,
        password: str,
        app_name: Optional[str] = None
    ) -> Any:
        """
        Upload a file and return the server's completion payload.

        Args:
            file_path: Regular, non-empty file to upload
            base_url: Endpoint root, e.g. https://host/api
            username: Basic auth user
            password: Basic auth password
            app_name: Bucket on the server; defaults to ``config.app_name``

        Returns:
            Parsed completion response body, unchanged

        Raises:
            FileNotFoundError: If file doesn't exist
            EmptyFileError: If file has no bytes
            SessionStartError: If the start request fails
            ProtocolViolationError: If start returns no uploadId
            ExhaustedRetriesError: If a part keeps failing
            CompletionError: If the completion request fails
        """
        if self._in_progress:
            raise RuntimeError("An upload is already in progress on this uploader")

        self._state = UploadState.NOT_STARTED
        self._session = None
        credentials = Credentials(username, password)
        base_url = base_url.rstrip('/')
        app_name = app_name or self._config.app_name

        self._in_progress = True
        try:
            path, file_size = self._validator.validate(file_path)
            self._validator.validate_size(file_size)

            file_size_mb = file_size / (1024 * 1024)
            self._logger.info(f"Starting upload: {path.name} ({file_size_mb:.2f} MB) as '{app_name}'")
            upload_start = time.time()

            self._session = await self._start(base_url, credentials, app_name, path.name, file_size)
            self._state = UploadState.STARTED

            parts = self._chunking.calculate_parts(file_size)
            self._logger.info(f"File split into {len(parts)} parts")

            self._state = UploadState.UPLOADING_PARTS
            acknowledged = await self._upload_parts(path, base_url, credentials, parts)

            result = await self._complete(base_url, credentials, acknowledged)
            self._state = UploadState.COMPLETED

            elapsed = time.time() - upload_start
            self._logger.info(f"Upload {self._session.upload_id} completed in {elapsed:.2f}s")
            return result
        except BaseException:
            self._state = UploadState.FAILED
            raise
        finally:
            self._in_progress = False
            if self._owns_transport:
                await self._transport.close()

    async def _start(
        self,
        base_url: str,
        credentials: Credentials,
        app_name: str,
        file_name: str,
        file_size: int
    ) -> UploadSession:
        """Open an upload session on the server."""
        url = f"{base_url}/Uploads/Start/{quote(app_name, safe='')}"
        payload = {
            'fileName': file_name,
            'fileSize': file_size,
            'contentType': self._config.content_type,
        }

        try:
            response = await self._transport.send_json('POST', url, credentials, payload)
        except Exception as e:
            self._logger.error(f"Start request failed: {e!r}")
            raise SessionStartError(
                f"Start request failed: {e}", status=getattr(e, 'status', None)
            ) from e

        try:
            data = response.json()
        except ValueError:
            data = None
        upload_id = data.get('uploadId') if isinstance(data, dict) else None
        if not upload_id:
            self._logger.error("Start endpoint returned no uploadId")
            raise ProtocolViolationError(
                "No uploadId returned from start endpoint", status=response.status
            )

        session = UploadSession(
            upload_id=str(upload_id),
            file_name=file_name,
            file_size=file_size,
            content_type=self._config.content_type
        )
        self._logger.debug(f"Upload session started: {session.upload_id}")
        return session

    async def _upload_parts(
        self,
        path: Path,
        base_url: str,
        credentials: Credentials,
        parts: List[PartDescriptor]
    ) -> List[PartDescriptor]:
        """Upload every part and return them acknowledged, in part order."""
        progress = UploadProgress(
            total_parts=len(parts),
            total_bytes=self._session.file_size
        )

        if self._config.max_concurrent_parts == 1:
            acknowledged = []
            for part in parts:
                acknowledged.append(
                    await self._upload_part(path, base_url, credentials, part, progress)
                )
            return acknowledged

        semaphore = asyncio.Semaphore(self._config.max_concurrent_parts)

        async def bounded(part: PartDescriptor) -> PartDescriptor:
            async with semaphore:
                return await self._upload_part(path, base_url, credentials, part, progress)

        tasks = [asyncio.create_task(bounded(part)) for part in parts]
        try:
            acknowledged = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return sorted(acknowledged, key=lambda p: p.part_number)

    async def _upload_part(
        self,
        path: Path,
        base_url: str,
        credentials: Credentials,
        part: PartDescriptor,
        progress: UploadProgress
    ) -> PartDescriptor:
        """
        Upload a single part with retry.

        A fresh read stream is opened for every attempt.
        """
        file_size = self._session.file_size
        url = (
            f"{base_url}/Uploads/{quote(self._session.upload_id, safe='')}"
            f"/Parts/{part.part_number}"
        )
        headers = {
            'Content-Type': 'application/octet-stream',
            'Content-Length': str(part.size),
            'Content-Range': part.content_range(file_size),
        }

        async def attempt() -> ResponseProtocol:
            body = self._file_reader.iter_range(path, part.start, part.end)
            try:
                return await self._transport.send_stream('PUT', url, credentials, body, headers)
            finally:
                aclose = getattr(body, 'aclose', None)
                if aclose is not None:
                    await aclose()

        part_start = time.time()
        response = await with_retry(attempt, self._retry, part_number=part.part_number)
        acknowledged = part.with_etag(self._extract_etag(response))

        progress.uploaded_parts += 1
        progress.uploaded_bytes += part.size
        elapsed = time.time() - part_start
        self._logger.info(
            f"Uploaded part {part.part_number}/{progress.total_parts} "
            f"({part.size} bytes) in {elapsed:.2f}s"
        )
        if self._progress_callback:
            self._progress_callback(progress)

        return acknowledged

    def _extract_etag(self, response: ResponseProtocol) -> Optional[str]:
        """ETag from the response header or JSON body, without quotes."""
        etag = response.headers.get('ETag')
        if not etag:
            try:
                data = response.json()
            except ValueError:
                data = None
            if isinstance(data, dict):
                etag = data.get('etag')
        if not etag:
            return None
        return str(etag).replace('"', '') or None

    async def _complete(
        self,
        base_url: str,
        credentials: Credentials,
        parts: List[PartDescriptor]
    ) -> Any:
        """Finalize the session and return the server's payload."""
        upload_id = self._session.upload_id
        url = f"{base_url}/Uploads/{quote(upload_id, safe='')}/Complete"

        try:
            response = await self._transport.send_json(
                'POST', url, credentials, build_completion_payload(parts)
            )
        except Exception as e:
            self._logger.error(f"Completion of {upload_id} failed: {e!r}")
            raise CompletionError(
                f"Completion of upload {upload_id} failed: {e}",
                upload_id=upload_id,
                status=getattr(e, 'status', None)
            ) from e

        return response.payload()
