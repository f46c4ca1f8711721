"""Upload services module."""
from .file_service import FileValidator, AsyncFileReader
from .transport import AiohttpTransport, TransportResponse

__all__ = [
    'FileValidator',
    'AsyncFileReader',
    'AiohttpTransport',
    'TransportResponse',
]
