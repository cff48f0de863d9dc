"""Raw vision observations consumed by the condition analyzer."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Likelihood(str, Enum):
    """Vision provider likelihood buckets, lowest tier first after UNKNOWN."""
    UNKNOWN = "UNKNOWN"
    VERY_UNLIKELY = "VERY_UNLIKELY"
    UNLIKELY = "UNLIKELY"
    POSSIBLE = "POSSIBLE"
    LIKELY = "LIKELY"
    VERY_LIKELY = "VERY_LIKELY"


class Vertex(BaseModel):
    """Polygon vertex in image pixel space.

    The provider omits zero-valued coordinates, so both default to 0.
    """
    x: float = Field(0.0, description="Horizontal pixel coordinate")
    y: float = Field(0.0, description="Vertical pixel coordinate")


class BoundingPoly(BaseModel):
    """Face bounding polygon (normally 4 vertices, clockwise from top-left)."""
    vertices: List[Vertex] = Field(default_factory=list, description="Polygon vertices")


class RawFaceObservation(BaseModel):
    """A single face as reported by the vision provider."""
    bounding_poly: BoundingPoly = Field(default_factory=BoundingPoly, description="Face bounding polygon")
    roll_angle: float = Field(0.0, description="Roll angle in degrees, signed")
    pan_angle: float = Field(0.0, description="Pan (yaw) angle in degrees, signed")
    tilt_angle: float = Field(0.0, description="Tilt (pitch) angle in degrees, signed")
    under_exposed_likelihood: Likelihood = Field(Likelihood.UNKNOWN, description="Under-exposure likelihood")
    joy_likelihood: Likelihood = Field(Likelihood.UNKNOWN, description="Joy likelihood")
    sorrow_likelihood: Likelihood = Field(Likelihood.UNKNOWN, description="Sorrow likelihood")
    anger_likelihood: Likelihood = Field(Likelihood.UNKNOWN, description="Anger likelihood")
    surprise_likelihood: Likelihood = Field(Likelihood.UNKNOWN, description="Surprise likelihood")
    detection_confidence: Optional[float] = Field(None, description="Detection confidence (0-1)")


class SceneLabel(BaseModel):
    """Weighted general-purpose label for the whole image."""
    description: str = Field(..., description="Label text, e.g. 'Furniture'")
    score: float = Field(0.0, description="Label confidence (0-1)")
