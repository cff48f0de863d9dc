"""Service interfaces package."""
from .vision_provider import VisionProvider

__all__ = ["VisionProvider"]
