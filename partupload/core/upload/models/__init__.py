"""Upload models."""
from .upload_models import (
    UploadState,
    Credentials,
    UploadSession,
    PartDescriptor,
    UploadProgress,
    build_completion_payload
)

__all__ = [
    'UploadState',
    'Credentials',
    'UploadSession',
    'PartDescriptor',
    'UploadProgress',
    'build_completion_payload'
]
