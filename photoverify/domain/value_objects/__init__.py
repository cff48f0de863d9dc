"""Value objects package."""
from .conditions import ConditionProfile, LightingQuality
from .verification import (
    AngleCheck,
    BackgroundCheck,
    DistanceCheck,
    ExpressionCheck,
    FallbackReason,
    LightingCheck,
    SelfAssessment,
    SelfReport,
    SelfReportedResult,
    VerificationChecks,
    VerificationOutcome,
    VerificationReport,
    is_photo_verified,
)

__all__ = [
    "AngleCheck",
    "BackgroundCheck",
    "ConditionProfile",
    "DistanceCheck",
    "ExpressionCheck",
    "FallbackReason",
    "LightingCheck",
    "LightingQuality",
    "SelfAssessment",
    "SelfReport",
    "SelfReportedResult",
    "VerificationChecks",
    "VerificationOutcome",
    "VerificationReport",
    "is_photo_verified",
]
