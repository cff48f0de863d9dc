"""Vision provider interface."""
from abc import ABC, abstractmethod
from typing import List

from ..entities.observation import RawFaceObservation, SceneLabel


class VisionProvider(ABC):
    """Interface for the external face and label detection service."""

    @abstractmethod
    async def detect_faces(self, image_ref: str) -> List[RawFaceObservation]:
        """
        Detect faces in the referenced image.

        Args:
            image_ref: Image URI (gs://, http(s)://) or local file path

        Returns:
            All detected faces, possibly empty

        Raises:
            VisionProviderError: If the provider call fails
            InvalidImageReferenceError: If the image cannot be read
        """
        pass

    @abstractmethod
    async def detect_labels(self, image_ref: str) -> List[SceneLabel]:
        """
        Run general-purpose label detection on the referenced image.

        Args:
            image_ref: Image URI (gs://, http(s)://) or local file path

        Returns:
            Scene labels in provider order

        Raises:
            VisionProviderError: If the provider call fails
            InvalidImageReferenceError: If the image cannot be read
        """
        pass
