"""Photo condition analyzer.

Reduces the raw output of a vision provider for one image into a
``ConditionProfile``: lighting, relative face size, pose deviation,
background clutter and expression neutrality.

Example:
    ```python
    analyzer = PhotoConditionAnalyzer(GoogleVisionProvider())
    profile = await analyzer.analyze("gs://bucket/checkins/day-7.jpg")
    ```

Note:
    Face size is measured against ``REFERENCE_FRAME_AREA`` because the vision
    provider does not report image dimensions. It is only meaningful when
    compared with another photo analyzed the same way.
"""
from typing import Awaitable, Callable, FrozenSet, List, Optional, TypeVar

import numpy as np

from photoverify.core.config import Settings, settings as default_settings
from photoverify.core.exceptions import (
    InvalidImageReferenceError,
    MultipleFacesDetectedError,
    NoFaceDetectedError,
    PhotoVerificationError,
    VisionProviderError,
)
from photoverify.core.logging import get_logger
from photoverify.domain.entities.observation import (
    Likelihood,
    RawFaceObservation,
    SceneLabel,
)
from photoverify.domain.interfaces.vision_provider import VisionProvider
from photoverify.domain.value_objects.conditions import ConditionProfile, LightingQuality

logger = get_logger(__name__)

T = TypeVar("T")

CLUTTER_INDICATORS = ("Furniture", "Room", "Indoor", "Wall", "Door", "Window")

WELL_EXPOSED: FrozenSet[Likelihood] = frozenset({Likelihood.VERY_UNLIKELY, Likelihood.UNLIKELY})
UNDER_EXPOSED: FrozenSet[Likelihood] = frozenset({Likelihood.VERY_LIKELY, Likelihood.LIKELY})

GOOD_LIGHTING_SCORE = 0.8
POOR_LIGHTING_SCORE = 0.2
UNCERTAIN_LIGHTING_SCORE = 0.5


def lighting_score_for(under_exposed: Likelihood) -> float:
    """Map the under-exposure likelihood to a lighting score."""
    if under_exposed in WELL_EXPOSED:
        return GOOD_LIGHTING_SCORE
    if under_exposed in UNDER_EXPOSED:
        return POOR_LIGHTING_SCORE
    return UNCERTAIN_LIGHTING_SCORE


def lighting_quality_for(score: float) -> LightingQuality:
    """Label a lighting score."""
    if score > 0.7:
        return LightingQuality.GOOD
    if score > 0.4:
        return LightingQuality.FAIR
    return LightingQuality.POOR


def face_size_percent(face: RawFaceObservation, reference_frame_area: float) -> float:
    """Bounding box area as a percentage of the assumed reference frame.

    Width and height come from opposite corners (vertex 0 and vertex 2);
    missing vertices count as the origin.
    """
    vertices = face.bounding_poly.vertices
    top_left = vertices[0] if len(vertices) > 0 else None
    bottom_right = vertices[2] if len(vertices) > 2 else None
    x0, y0 = (top_left.x, top_left.y) if top_left else (0.0, 0.0)
    x2, y2 = (bottom_right.x, bottom_right.y) if bottom_right else (0.0, 0.0)

    area = abs(x2 - x0) * abs(y2 - y0)
    percent = area / reference_frame_area * 100
    return float(np.clip(percent, 0.0, 100.0))


def is_neutral_expression(face: RawFaceObservation) -> bool:
    """True only when no expression is above the lowest likelihood tier."""
    return all(
        likelihood == Likelihood.VERY_UNLIKELY
        for likelihood in (
            face.joy_likelihood,
            face.sorrow_likelihood,
            face.anger_likelihood,
            face.surprise_likelihood,
        )
    )


def background_clutter(labels: List[SceneLabel], label_cap: int) -> float:
    """Share of clutter-indicating labels, saturating at ``label_cap`` labels."""
    indicators = [indicator.lower() for indicator in CLUTTER_INDICATORS]
    clutter_count = sum(
        1 for label in labels
        if any(indicator in (label.description or "").lower() for indicator in indicators)
    )
    return float(np.clip(clutter_count / label_cap, 0.0, 1.0))


class PhotoConditionAnalyzer:
    """Derives a condition profile for one image from vision provider output.

    The analyzer holds no per-request state; one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        vision_provider: VisionProvider,
        settings: Optional[Settings] = None,
    ) -> None:
        """Initialize the analyzer.

        Args:
            vision_provider: Face and label detection backend
            settings: Settings providing the reference frame area and clutter cap
        """
        self.vision_provider = vision_provider
        self.settings = settings or default_settings

    async def analyze(self, image_ref: str) -> ConditionProfile:
        """Analyze the capture conditions of a single image.

        Args:
            image_ref: Image URI or local path understood by the vision provider

        Returns:
            ConditionProfile for the image

        Raises:
            InvalidImageReferenceError: If the reference is empty or unreadable
            NoFaceDetectedError: If no face is detected
            MultipleFacesDetectedError: If more than one face is detected
            VisionProviderError: If the vision provider call fails
        """
        if not isinstance(image_ref, str) or not image_ref.strip():
            raise InvalidImageReferenceError("Image reference must be a non-empty string")

        faces = await self._call_provider(self.vision_provider.detect_faces, image_ref)
        if not faces:
            raise NoFaceDetectedError("No face detected in photo", details={"image_ref": image_ref})
        if len(faces) > 1:
            raise MultipleFacesDetectedError(
                "Multiple faces detected",
                details={"image_ref": image_ref, "faces_count": len(faces)}
            )
        face = faces[0]

        labels = await self._call_provider(self.vision_provider.detect_labels, image_ref)

        lighting_score = lighting_score_for(face.under_exposed_likelihood)
        roll, pan, tilt = abs(face.roll_angle), abs(face.pan_angle), abs(face.tilt_angle)

        profile = ConditionProfile(
            lighting_score=lighting_score,
            lighting_quality=lighting_quality_for(lighting_score),
            face_size_percent=face_size_percent(face, self.settings.REFERENCE_FRAME_AREA),
            pose_deviation_degrees=float(np.linalg.norm([roll, pan, tilt])),
            roll_degrees=roll,
            pan_degrees=pan,
            tilt_degrees=tilt,
            background_clutter=background_clutter(labels, self.settings.CLUTTER_LABEL_CAP),
            expression_neutral=is_neutral_expression(face),
            joy_likelihood=face.joy_likelihood,
            sorrow_likelihood=face.sorrow_likelihood,
        )

        logger.debug(
            "Photo conditions analyzed",
            image_ref=image_ref,
            lighting=profile.lighting_quality.value,
            face_size_percent=round(profile.face_size_percent, 2),
            pose_deviation=round(profile.pose_deviation_degrees, 2),
            labels_count=len(labels),
        )
        return profile

    async def _call_provider(self, method: Callable[[str], Awaitable[T]], image_ref: str) -> T:
        """Invoke a provider method, normalizing unexpected failures."""
        try:
            return await method(image_ref)
        except PhotoVerificationError:
            raise
        except Exception as e:
            logger.error("Vision provider call failed", image_ref=image_ref, error=str(e))
            raise VisionProviderError(f"Vision provider call failed: {e}") from e
