"""
Upload module for chunked multipart uploads.

Start a session, send the file as fixed-size byte-range parts with retry,
then complete the session with the acknowledged part list.
"""
from .facade import UploadFacade, upload_file
from .coordinator import ChunkedUploader
from .models import (
    UploadState,
    Credentials,
    UploadSession,
    PartDescriptor,
    UploadProgress,
)
from .protocols import (
    ChunkingStrategy,
    FileReaderProtocol,
    HttpTransportProtocol,
)
from .services import AiohttpTransport, AsyncFileReader, TransportResponse
from .strategies import FixedSizeChunkingStrategy, CHUNK_SIZE

__all__ = [
    # Main classes
    'ChunkedUploader',
    'UploadFacade',
    'upload_file',
    
    # Models
    'UploadState',
    'Credentials',
    'UploadSession',
    'PartDescriptor',
    'UploadProgress',
    
    # Services
    'AiohttpTransport',
    'AsyncFileReader',
    'TransportResponse',
    'FixedSizeChunkingStrategy',
    'CHUNK_SIZE',
    
    # Protocols
    'ChunkingStrategy',
    'FileReaderProtocol',
    'HttpTransportProtocol',
]
