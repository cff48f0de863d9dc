"""Per-image condition profile value objects."""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from photoverify.domain.entities.observation import Likelihood


class LightingQuality(str, Enum):
    """Coarse lighting label derived from the lighting score."""
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class ConditionProfile(BaseModel):
    """Normalized capture conditions of a single photo.

    Computed fresh for every verification and embedded in the report that
    used it; never stored on its own.
    """
    model_config = ConfigDict(frozen=True)

    lighting_score: float = Field(..., description="Lighting score", ge=0.0, le=1.0)
    lighting_quality: LightingQuality = Field(..., description="Lighting label for the score")
    face_size_percent: float = Field(
        ...,
        description="Face bounding box area relative to the assumed reference frame",
        ge=0.0, le=100.0
    )
    pose_deviation_degrees: float = Field(..., description="Euclidean norm of the absolute pose angles", ge=0.0)
    roll_degrees: float = Field(..., description="Absolute roll angle", ge=0.0)
    pan_degrees: float = Field(..., description="Absolute pan angle", ge=0.0)
    tilt_degrees: float = Field(..., description="Absolute tilt angle", ge=0.0)
    background_clutter: float = Field(..., description="Clutter label score (lower is better)", ge=0.0, le=1.0)
    expression_neutral: bool = Field(..., description="All expression likelihoods at the lowest tier")
    joy_likelihood: Likelihood = Field(Likelihood.UNKNOWN, description="Joy likelihood, for diagnostics")
    sorrow_likelihood: Likelihood = Field(Likelihood.UNKNOWN, description="Sorrow likelihood, for diagnostics")
