"""Vision provider implementations."""
from .google_vision import GoogleVisionProvider

__all__ = ["GoogleVisionProvider"]
