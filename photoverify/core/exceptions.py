"""Custom exceptions for the photo verification service."""
from typing import Optional


class PhotoVerificationError(Exception):
    """Base exception for photo verification operations."""
    
    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize photo verification error.
        
        Args:
            message: Error description
            details: Additional error context
        """
        super().__init__(message)
        self.details = details or {}


class InvalidImageReferenceError(PhotoVerificationError):
    """Raised when an image reference is missing, malformed or unreadable."""
    pass


class PhotoAnalysisError(PhotoVerificationError):
    """Base exception for failures while deriving a condition profile."""
    pass


class NoFaceDetectedError(PhotoAnalysisError):
    """Raised when no face is detected in the image."""
    pass


class MultipleFacesDetectedError(PhotoAnalysisError):
    """Raised when more than one face is found in an image that expects only one face."""
    pass


class VisionProviderError(PhotoAnalysisError):
    """Raised when the vision provider call fails (network, quota, auth, API error)."""
    pass


class ServiceNotInitializedError(PhotoVerificationError):
    """Raised when a service is requested before the container is initialized."""
    pass
