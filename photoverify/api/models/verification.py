"""API models for photo verification."""
from typing import List, Optional

from pydantic import BaseModel, Field

from photoverify.domain.value_objects.verification import (
    SelfReport,
    VerificationOutcome,
    VerificationReport,
    is_photo_verified,
)

MAX_IMAGE_REF_LENGTH = 2048


class PhotoVerificationRequest(BaseModel):
    """Request model for the /verify endpoint."""
    checkin_image: str = Field(
        ...,
        description="URI (gs://, https://) of the check-in photo",
        min_length=1, max_length=MAX_IMAGE_REF_LENGTH
    )
    baseline_image: Optional[str] = Field(
        None,
        description="URI of the calibration photo; omit when the user has none yet",
        min_length=1, max_length=MAX_IMAGE_REF_LENGTH
    )
    self_report: Optional[SelfReport] = Field(
        None,
        description="Client-estimated lighting, angle and distance, used when vision comparison is unavailable"
    )


class PhotoVerificationResponse(BaseModel):
    """Response model for the /verify endpoint."""
    outcome: VerificationOutcome = Field(..., description="Vision report or self-reported result")
    photo_verified: bool = Field(..., description="Whether the check-in counts towards progress")
    suggestions: List[str] = Field(
        default_factory=list,
        description="Retake suggestions for failing checks"
    )

    @classmethod
    def from_outcome(cls, outcome: VerificationOutcome) -> "PhotoVerificationResponse":
        """Convert a service outcome to the API response model."""
        suggestions = outcome.suggestions if isinstance(outcome, VerificationReport) else []
        return cls(
            outcome=outcome,
            photo_verified=is_photo_verified(outcome),
            suggestions=suggestions,
        )
