"""Upload strategies module."""
from .chunking import BaseChunkingStrategy, FixedSizeChunkingStrategy, CHUNK_SIZE

__all__ = [
    'BaseChunkingStrategy',
    'FixedSizeChunkingStrategy',
    'CHUNK_SIZE',
]
