"""
HTTP transport service.

Sends upload requests over a shared aiohttp session.
"""
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Mapping, Optional, Union
import base64
import json
import time

import aiohttp
from multidict import CIMultiDict

from ...api.config import UploaderConfig
from ...logging import get_logger
from ..models import Credentials


def basic_auth_header(auth: Credentials) -> str:
    """Authorization header value; credentials are encoded as UTF-8."""
    token = base64.b64encode(f"{auth.username}:{auth.password}".encode('utf-8'))
    return f"Basic {token.decode('ascii')}"


@dataclass
class TransportResponse:
    """
    Response of a successful request.

    Attributes:
        status: HTTP status code
        headers: Case-insensitive response headers
        body: Raw response body
    """
    status: int
    headers: CIMultiDict = field(default_factory=CIMultiDict)
    body: bytes = b''

    def json(self) -> Any:
        """
        Parse the body as JSON.

        Returns:
            Parsed JSON, or None for an empty body

        Raises:
            ValueError: If the body is not valid JSON
        """
        if not self.body.strip():
            return None
        return json.loads(self.body)

    def payload(self) -> Any:
        """Parsed JSON body, falling back to the decoded text."""
        try:
            return self.json()
        except ValueError:
            return self.body.decode('utf-8', errors='replace')


class AiohttpTransport:
    """
    HTTP transport backed by aiohttp.

    Reuses one HTTP session for every request of an upload.

    Responsibilities:
    - Apply basic auth to every request
    - Send JSON and streamed bodies
    - Raise on non-2xx responses
    """

    def __init__(
        self,
        config: Optional[UploaderConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize transport.

        Args:
            config: Uploader configuration (timeouts, SSL, headers)
            session: Optional shared session; it is not closed by this transport
        """
        self._config = config or UploaderConfig()
        self._session = session
        self._owns_session = False
        self._logger = get_logger('upload.transport')

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(**self._config.get_connector_kwargs()),
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close session if we own it."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None
            self._owns_session = False

    async def __aenter__(self) -> 'AiohttpTransport':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def send_json(
        self,
        method: str,
        url: str,
        auth: Credentials,
        payload: Any
    ) -> TransportResponse:
        """
        Send a JSON request.

        Args:
            method: HTTP method
            url: Absolute URL
            auth: Basic auth credentials
            payload: JSON-serializable body

        Returns:
            Transport response

        Raises:
            aiohttp.ClientResponseError: If server returns non-2xx
            aiohttp.ClientError: If network error occurs
        """
        return await self._send(method, url, auth, json=payload)

    async def send_stream(
        self,
        method: str,
        url: str,
        auth: Credentials,
        body: Union[bytes, AsyncIterator[bytes]],
        headers: Optional[Mapping[str, str]] = None
    ) -> TransportResponse:
        """
        Send a raw request body.

        An async iterator body is streamed; pass Content-Length in
        ``headers`` to avoid chunked transfer encoding.

        Args:
            method: HTTP method
            url: Absolute URL
            auth: Basic auth credentials
            body: Bytes or async iterator of bytes
            headers: Extra request headers

        Returns:
            Transport response

        Raises:
            aiohttp.ClientResponseError: If server returns non-2xx
            aiohttp.ClientError: If network error occurs
        """
        return await self._send(method, url, auth, data=body, headers=headers)

    async def _send(
        self,
        method: str,
        url: str,
        auth: Credentials,
        headers: Optional[Mapping[str, str]] = None,
        **kwargs
    ) -> TransportResponse:
        session = await self._get_session()
        request_headers = dict(headers or {})
        request_headers['Authorization'] = basic_auth_header(auth)
        request_start = time.time()
        self._logger.debug(f"{method} {url}")

        try:
            async with session.request(
                method,
                url,
                headers=request_headers,
                **kwargs
            ) as response:
                response.raise_for_status()
                body = await response.read()
                elapsed = time.time() - request_start
                self._logger.debug(f"{method} {url} -> {response.status} in {elapsed:.2f}s")
                return TransportResponse(
                    status=response.status,
                    headers=CIMultiDict(response.headers),
                    body=body
                )
        except Exception as e:
            elapsed = time.time() - request_start
            self._logger.debug(f"{method} {url} failed after {elapsed:.2f}s: {e!r}")
            raise
