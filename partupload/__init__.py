"""
partupload - Async chunked multipart upload client.

Usage:
    >>> from partupload import ChunkedUploader
    >>> 
    >>> uploader = ChunkedUploader()
    >>> result = await uploader.upload(
    ...     "build/dsym.zip", "https://symbols.example.com", "user", "secret",
    ...     app_name="MyApp"
    ... )
"""
import logging

from .core.upload import (
    ChunkedUploader,
    UploadFacade,
    upload_file,
    UploadState,
    Credentials,
    UploadSession,
    PartDescriptor,
    UploadProgress,
    AiohttpTransport,
    AsyncFileReader,
    TransportResponse,
    FixedSizeChunkingStrategy,
    CHUNK_SIZE,
)

# Configuration
from .core.api import (
    UploaderConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    LinearBackoffStrategy,
    is_retryable,
    retry_all,
)

from .core.exceptions import (
    UploadError,
    EmptyFileError,
    SessionStartError,
    ProtocolViolationError,
    TransientTransferError,
    ExhaustedRetriesError,
    CompletionError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for partupload modules.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'partupload',
        'partupload.upload',
        'partupload.upload.transport',
        'partupload.upload.file',
        'partupload.retry',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'ChunkedUploader',
    'UploadFacade',
    'upload_file',
    'UploadState',
    'Credentials',
    'UploadSession',
    'PartDescriptor',
    'UploadProgress',
    'AiohttpTransport',
    'AsyncFileReader',
    'TransportResponse',
    'FixedSizeChunkingStrategy',
    'CHUNK_SIZE',
    'UploaderConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'LinearBackoffStrategy',
    'is_retryable',
    'retry_all',
    'UploadError',
    'EmptyFileError',
    'SessionStartError',
    'ProtocolViolationError',
    'TransientTransferError',
    'ExhaustedRetriesError',
    'CompletionError',
    'setup_logging',
]
