"""
Chunking strategies for file uploads.

Implements Strategy Pattern for different chunking algorithms.
"""
from abc import ABC, abstractmethod
from typing import List

from ..models import PartDescriptor

CHUNK_SIZE = 10 * 1024 * 1024  # 10 MiB


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""
    
    @abstractmethod
    def calculate_parts(self, file_size: int) -> List[PartDescriptor]:
        """Calculate part boundaries."""
        pass


class FixedSizeChunkingStrategy(BaseChunkingStrategy):
    """
    Fixed-size chunking strategy.
    
    Every part is ``chunk_size`` bytes except the last, which holds the
    remainder. Ranges are inclusive: a 25 MiB file at 10 MiB per part
    gives [0, 10485759], [10485760, 20971519], [20971520, 26214399].
    """
    
    DEFAULT_CHUNK_SIZE = CHUNK_SIZE
    
    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize with chunk size.
        
        Args:
            chunk_size: Size of each part in bytes
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size
    
    def part_count(self, file_size: int) -> int:
        """Number of parts needed for a file (ceil division)."""
        if file_size < 0:
            raise ValueError("File size cannot be negative")
        return -(-file_size // self.chunk_size)
    
    def calculate_parts(self, file_size: int) -> List[PartDescriptor]:
        """
        Calculate fixed-size part boundaries.
        
        Args:
            file_size: Total file size in bytes
            
        Returns:
            List of parts numbered from 1; empty for an empty file
        """
        parts = []
        for part_number in range(1, self.part_count(file_size) + 1):
            start = (part_number - 1) * self.chunk_size
            end = min(start + self.chunk_size, file_size) - 1
            parts.append(PartDescriptor(part_number, start, end))
        return parts
