"""
Exceptions raised while loading, rotating and saving images.

The single-file processor turns the ProcessingError subclasses into
Outcome values, so they never escape a traversal.
"""

from typing import Optional, Any


class ImageRotatorError(Exception):
    """Base exception for all image rotator errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} (Details: {details_str})"
        return self.message


class ConfigurationError(ImageRotatorError):
    """Raised when the configuration file is missing or invalid."""
    pass


class ProcessingError(ImageRotatorError):
    """Raised when an image cannot be processed."""

    def __init__(self, message: str, image_path: Optional[str] = None, **kwargs: Any) -> None:
        details = kwargs
        if image_path:
            details["image_path"] = image_path
        super().__init__(message, details)


class DecodeError(ProcessingError):
    """Raised when a source image is missing or unreadable."""
    pass


class TransformError(ProcessingError):
    """Raised when the affine warp produces no image."""
    pass


class EncodeError(ProcessingError):
    """Raised when the rotated image cannot be written."""
    pass
