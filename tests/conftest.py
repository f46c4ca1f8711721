"""Pytest fixtures for partupload tests."""
import json
from unittest.mock import Mock

import aiohttp
import pytest
from multidict import CIMultiDict

from partupload.core.api.config import RetryConfig, UploaderConfig
from partupload.core.api.retry import LinearBackoffStrategy
from partupload.core.upload import ChunkedUploader, FixedSizeChunkingStrategy, TransportResponse


def json_response(data, status=200, headers=None):
    """Build a TransportResponse carrying a JSON body."""
    return TransportResponse(
        status=status,
        headers=CIMultiDict(headers or {}),
        body=json.dumps(data).encode()
    )


class FakeTransport:
    """
    In-memory stand-in for the HTTP transport.

    Records every request and answers according to its attributes.
    """

    def __init__(self):
        self.requests = []
        self.start_response = json_response({'uploadId': 'upload-1'})
        self.complete_response = json_response({'status': 'ok', 'id': 'abc'})
        self.start_error = None
        self.complete_error = None
        self.part_failures = {}
        self.part_etags = True
        self.closed = False

    async def send_json(self, method, url, auth, payload):
        self.requests.append({
            'method': method,
            'url': url,
            'auth': auth,
            'payload': json.loads(json.dumps(payload)),
        })
        if '/Uploads/Start/' in url:
            if self.start_error:
                raise self.start_error
            return self.start_response
        if self.complete_error:
            raise self.complete_error
        return self.complete_response

    async def send_stream(self, method, url, auth, body, headers=None):
        if isinstance(body, bytes):
            data = body
        else:
            data = b''.join([block async for block in body])
        self.requests.append({
            'method': method,
            'url': url,
            'auth': auth,
            'body': data,
            'headers': dict(headers or {}),
        })
        part_number = int(url.rsplit('/', 1)[1])
        failures = self.part_failures.get(part_number)
        if failures:
            raise failures.pop(0)
        if self.part_etags:
            return TransportResponse(200, CIMultiDict({'ETag': f'"etag-{part_number}"'}), b'')
        return TransportResponse(200, CIMultiDict(), b'')

    async def close(self):
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def puts(self, part_number=None):
        """Recorded part uploads, optionally for one part."""
        result = [r for r in self.requests if r['method'] == 'PUT']
        if part_number is not None:
            result = [r for r in result if r['url'].endswith(f'/Parts/{part_number}')]
        return result

    def posts(self, suffix):
        """Recorded JSON requests whose URL ends with suffix."""
        return [r for r in self.requests if r['method'] == 'POST' and r['url'].endswith(suffix)]


def http_error(status, message='error'):
    """Build an aiohttp response error with the given status."""
    return aiohttp.ClientResponseError(
        request_info=Mock(real_url='https://uploads.example.com'),
        history=(),
        status=status,
        message=message
    )


@pytest.fixture
def transport():
    """Fresh fake transport."""
    return FakeTransport()


@pytest.fixture
def make_error():
    """Factory for HTTP status errors."""
    return http_error


@pytest.fixture
def make_file(tmp_path):
    """Factory writing a file with deterministic content."""
    def _make(size=None, content=None, name='archive.zip'):
        path = tmp_path / name
        if content is None:
            content = bytes(i % 251 for i in range(size))
        path.write_bytes(content)
        return path
    return _make


@pytest.fixture
def make_uploader(transport):
    """Factory for uploaders using the fake transport and no retry delay."""
    def _make(chunk_size=10, config=None, **kwargs):
        config = config or UploaderConfig(retry=RetryConfig(base_delay=0))
        kwargs.setdefault('retry_strategy', LinearBackoffStrategy(config.retry))
        return ChunkedUploader(
            transport=transport,
            config=config,
            chunking_strategy=FixedSizeChunkingStrategy(chunk_size),
            **kwargs
        )
    return _make


@pytest.fixture
def make_response():
    """Factory for JSON transport responses."""
    return json_response
