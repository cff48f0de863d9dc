"""Shared fixtures for photo verification tests."""
import asyncio
from typing import Dict, List, Optional

import pytest
from hypothesis import settings as hypothesis_settings, Verbosity

from photoverify.domain.entities.observation import (
    BoundingPoly,
    Likelihood,
    RawFaceObservation,
    SceneLabel,
    Vertex,
)
from photoverify.domain.interfaces.vision_provider import VisionProvider
from photoverify.domain.value_objects.conditions import ConditionProfile
from photoverify.services.condition_analyzer import lighting_quality_for

hypothesis_settings.register_profile("ci", max_examples=100, verbosity=Verbosity.normal)
hypothesis_settings.register_profile("dev", max_examples=20, verbosity=Verbosity.normal)
hypothesis_settings.load_profile("ci")

BASELINE_REF = "gs://progress-photos/user-1/day-1.jpg"
CHECKIN_REF = "gs://progress-photos/user-1/day-7.jpg"


class FakeVisionProvider(VisionProvider):
    """In-memory vision provider keyed by image reference.

    ``delays`` and ``errors`` apply per reference to face detection, the first
    call the analyzer makes for an image.
    """

    def __init__(
        self,
        faces: Optional[Dict[str, List[RawFaceObservation]]] = None,
        labels: Optional[Dict[str, List[SceneLabel]]] = None,
        error: Optional[Exception] = None,
        delays: Optional[Dict[str, float]] = None,
        errors: Optional[Dict[str, Exception]] = None,
    ) -> None:
        self.faces = faces or {}
        self.labels = labels or {}
        self.error = error
        self.delays = delays or {}
        self.errors = errors or {}
        self.calls: List[tuple] = []

    async def detect_faces(self, image_ref: str) -> List[RawFaceObservation]:
        self.calls.append(("faces", image_ref))
        if image_ref in self.delays:
            await asyncio.sleep(self.delays[image_ref])
        if self.error is not None:
            raise self.error
        if image_ref in self.errors:
            raise self.errors[image_ref]
        return self.faces.get(image_ref, [])

    async def detect_labels(self, image_ref: str) -> List[SceneLabel]:
        self.calls.append(("labels", image_ref))
        if self.error is not None:
            raise self.error
        return self.labels.get(image_ref, [])


def build_face(
    width: float = 1000,
    height: float = 500,
    roll: float = 0.0,
    pan: float = 0.0,
    tilt: float = 0.0,
    under_exposed: Likelihood = Likelihood.VERY_UNLIKELY,
    joy: Likelihood = Likelihood.VERY_UNLIKELY,
    sorrow: Likelihood = Likelihood.VERY_UNLIKELY,
    anger: Likelihood = Likelihood.VERY_UNLIKELY,
    surprise: Likelihood = Likelihood.VERY_UNLIKELY,
) -> RawFaceObservation:
    """Face with a rectangular bounding polygon anchored at the origin."""
    return RawFaceObservation(
        bounding_poly=BoundingPoly(vertices=[
            Vertex(x=0, y=0),
            Vertex(x=width, y=0),
            Vertex(x=width, y=height),
            Vertex(x=0, y=height),
        ]),
        roll_angle=roll,
        pan_angle=pan,
        tilt_angle=tilt,
        under_exposed_likelihood=under_exposed,
        joy_likelihood=joy,
        sorrow_likelihood=sorrow,
        anger_likelihood=anger,
        surprise_likelihood=surprise,
        detection_confidence=0.98,
    )


def build_profile(
    lighting_score: float = 0.8,
    face_size_percent: float = 50.0,
    pose_deviation_degrees: float = 2.0,
    background_clutter: float = 0.1,
    expression_neutral: bool = True,
) -> ConditionProfile:
    """Condition profile with sensible, passing defaults."""
    return ConditionProfile(
        lighting_score=lighting_score,
        lighting_quality=lighting_quality_for(lighting_score),
        face_size_percent=face_size_percent,
        pose_deviation_degrees=pose_deviation_degrees,
        roll_degrees=pose_deviation_degrees,
        pan_degrees=0.0,
        tilt_degrees=0.0,
        background_clutter=background_clutter,
        expression_neutral=expression_neutral,
    )


@pytest.fixture
def make_face():
    """Factory for raw face observations."""
    return build_face


@pytest.fixture
def make_profile():
    """Factory for condition profiles."""
    return build_profile


@pytest.fixture
def matching_provider() -> FakeVisionProvider:
    """Provider returning identical, well-framed faces for baseline and check-in."""
    return FakeVisionProvider(
        faces={BASELINE_REF: [build_face()], CHECKIN_REF: [build_face()]},
        labels={
            BASELINE_REF: [SceneLabel(description="Forehead", score=0.9)],
            CHECKIN_REF: [SceneLabel(description="Forehead", score=0.9)],
        },
    )
