"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional, List


class UploadState(str, Enum):
    """Lifecycle of a single upload."""
    NOT_STARTED = 'not_started'
    STARTED = 'started'
    UPLOADING_PARTS = 'uploading_parts'
    COMPLETED = 'completed'
    FAILED = 'failed'


@dataclass(frozen=True)
class Credentials:
    """
    HTTP basic auth credentials.

    Passed through unchanged to every request.
    """
    username: str
    password: str = field(repr=False)

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class UploadSession:
    """
    One upload attempt, as acknowledged by the server.

    Attributes:
        upload_id: Opaque session id issued by the start call
        file_name: Base name of the uploaded file
        file_size: File size in bytes
        content_type: Content type announced at start
    """
    upload_id: str
    file_name: str
    file_size: int
    content_type: str


@dataclass(frozen=True)
class PartDescriptor:
    """
    One transmitted chunk of the source file.

    Attributes:
        part_number: 1-based part number
        start: First byte offset (inclusive)
        end: Last byte offset (inclusive)
        etag: Server token for the stored part, if one was issued
    """
    part_number: int
    start: int
    end: int
    etag: Optional[str] = None

    @property
    def size(self) -> int:
        """Returns part size in bytes."""
        return self.end - self.start + 1

    def content_range(self, file_size: int) -> str:
        """Value of the Content-Range header for this part."""
        return f"bytes {self.start}-{self.end}/{file_size}"

    def with_etag(self, etag: Optional[str]) -> 'PartDescriptor':
        """Return a copy acknowledged with the given etag."""
        return PartDescriptor(self.part_number, self.start, self.end, etag)

    def to_dict(self) -> Dict[str, Any]:
        """Entry of the completion payload; 'etag' is omitted when absent."""
        result: Dict[str, Any] = {'partNumber': self.part_number}
        if self.etag is not None:
            result['etag'] = self.etag
        return result


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        total_parts: Total number of parts
        uploaded_parts: Number of acknowledged parts
        total_bytes: Total file size
        uploaded_bytes: Bytes acknowledged so far
    """
    total_parts: int
    uploaded_parts: int = 0
    total_bytes: int = 0
    uploaded_bytes: int = 0

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_parts == 0:
            return 0.0
        return (self.uploaded_parts / self.total_parts) * 100

    @property
    def is_complete(self) -> bool:
        """Returns True if every part is acknowledged."""
        return self.uploaded_parts >= self.total_parts


def build_completion_payload(parts: List[PartDescriptor]) -> Dict[str, Any]:
    """Build the completion body, ordered by part number."""
    ordered = sorted(parts, key=lambda p: p.part_number)
    return {'parts': [p.to_dict() for p in ordered]}
