"""
Custom exceptions for chunked upload operations.

This module defines exception classes raised by the upload client.
"""
from typing import Optional


class UploadError(Exception):
    """Base exception for all upload-related errors."""
    
    def __init__(self, message: str, status: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            status: HTTP status code (if available)
        """
        self.status = status
        super().__init__(message)


class EmptyFileError(UploadError, ValueError):
    """Exception raised when the source file has no bytes to upload."""
    pass


class SessionStartError(UploadError):
    """Exception raised when the start request fails."""
    pass


class ProtocolViolationError(UploadError):
    """Exception raised when the server answers outside the protocol."""
    pass


class TransientTransferError(UploadError):
    """Exception raised for a recoverable failure while sending a part."""
    
    def __init__(
        self,
        message: str,
        part_number: Optional[int] = None,
        status: Optional[int] = None
    ) -> None:
        self.part_number = part_number
        super().__init__(message, status)


class ExhaustedRetriesError(UploadError):
    """Exception raised when a part keeps failing after every retry."""
    
    def __init__(
        self,
        message: str,
        part_number: Optional[int] = None,
        attempts: int = 0,
        last_error: Optional[BaseException] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            part_number: Number of the part that failed
            attempts: Number of attempts made
            last_error: Error raised by the final attempt
        """
        self.part_number = part_number
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(message, getattr(last_error, 'status', None))


class CompletionError(UploadError):
    """Exception raised when the completion request fails."""
    
    def __init__(
        self,
        message: str,
        upload_id: Optional[str] = None,
        status: Optional[int] = None
    ) -> None:
        self.upload_id = upload_id
        super().__init__(message, status)
