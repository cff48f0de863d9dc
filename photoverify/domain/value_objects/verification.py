"""Verification outcome value objects.

A verification yields exactly one of two variants:

- ``VerificationReport``: vision-based comparison of two condition profiles.
- ``SelfReportedResult``: lower-assurance result derived only from the
  client's own estimates, used when no baseline exists or analysis failed.

``VerificationOutcome`` is the tagged union of both, discriminated by ``kind``.
"""
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from photoverify.domain.value_objects.conditions import ConditionProfile, LightingQuality


class ConditionCheck(BaseModel):
    """Common fields of a single pass/fail check."""
    model_config = ConfigDict(frozen=True)

    passed: bool = Field(..., description="Whether the check passed")
    suggestion: Optional[str] = Field(None, description="Corrective action, only set on failure")


class LightingCheck(ConditionCheck):
    score: float = Field(..., description="Check-in lighting score")
    baseline_score: float = Field(..., description="Baseline lighting score")
    quality: LightingQuality = Field(..., description="Check-in lighting label")
    baseline_quality: LightingQuality = Field(..., description="Baseline lighting label")
    diff: float = Field(..., description="Absolute lighting score difference")


class DistanceCheck(ConditionCheck):
    face_size: float = Field(..., description="Check-in face size percent")
    baseline_face_size: float = Field(..., description="Baseline face size percent")
    diff: float = Field(..., description="Absolute face size difference")


class AngleCheck(ConditionCheck):
    deviation: float = Field(..., description="Check-in pose deviation in degrees")
    baseline_deviation: float = Field(..., description="Baseline pose deviation in degrees")
    diff: float = Field(..., description="Absolute pose deviation difference")


class BackgroundCheck(ConditionCheck):
    clutter: float = Field(..., description="Check-in background clutter")
    baseline_clutter: float = Field(..., description="Baseline background clutter, informational")


class ExpressionCheck(ConditionCheck):
    neutral: bool = Field(..., description="Check-in expression neutrality")


class VerificationChecks(BaseModel):
    """The five named checks of a comparison."""
    model_config = ConfigDict(frozen=True)

    lighting: LightingCheck
    distance: DistanceCheck
    angle: AngleCheck
    background: BackgroundCheck
    expression: ExpressionCheck

    def ordered(self) -> List[ConditionCheck]:
        """Return the checks in report order."""
        return [self.lighting, self.distance, self.angle, self.background, self.expression]


class VerificationReport(BaseModel):
    """Vision-based comparison of a check-in photo against its baseline."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["vision"] = "vision"
    baseline: ConditionProfile = Field(..., description="Baseline photo conditions")
    checkin: ConditionProfile = Field(..., description="Check-in photo conditions")
    checks: VerificationChecks = Field(..., description="Per-dimension results")

    @computed_field
    @property
    def overall_valid(self) -> bool:
        """True iff every check passed."""
        return all(check.passed for check in self.checks.ordered())

    @computed_field
    @property
    def confidence_score(self) -> float:
        """Fraction of passing checks, in steps of 0.2."""
        checks = self.checks.ordered()
        return sum(1 for check in checks if check.passed) / len(checks)

    @computed_field
    @property
    def suggestions(self) -> List[str]:
        """Suggestions of the failing checks, in check order."""
        return [
            check.suggestion
            for check in self.checks.ordered()
            if not check.passed and check.suggestion
        ]


class SelfAssessment(str, Enum):
    """Client-estimated condition rating."""
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class SelfReport(BaseModel):
    """Conditions as estimated by the client app, not verified."""
    model_config = ConfigDict(frozen=True)

    lighting: Optional[SelfAssessment] = None
    angle: Optional[SelfAssessment] = None
    distance: Optional[SelfAssessment] = None

    @property
    def all_good(self) -> bool:
        return (
            self.lighting == SelfAssessment.GOOD
            and self.angle == SelfAssessment.GOOD
            and self.distance == SelfAssessment.GOOD
        )


class FallbackReason(str, Enum):
    """Why the self-reported path was taken."""
    NO_BASELINE = "no_baseline"
    ANALYSIS_FAILED = "analysis_failed"


class SelfReportedResult(BaseModel):
    """Lower-assurance result based only on the client's self report.

    Carries no diffs and no confidence score.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["self_reported"] = "self_reported"
    photo_verified: bool = Field(..., description="All self-reported conditions are 'good'")
    reason: FallbackReason = Field(..., description="Why vision comparison was not used")
    self_report: Optional[SelfReport] = Field(None, description="Client-supplied estimates")
    error: Optional[str] = Field(None, description="Analysis failure message, for diagnostics")

    @classmethod
    def from_self_report(
        cls,
        self_report: Optional[SelfReport],
        reason: FallbackReason,
        error: Optional[str] = None,
    ) -> "SelfReportedResult":
        """Build a result; a missing self report never verifies."""
        return cls(
            photo_verified=self_report.all_good if self_report is not None else False,
            reason=reason,
            self_report=self_report,
            error=error,
        )


VerificationOutcome = Annotated[
    Union[VerificationReport, SelfReportedResult],
    Field(discriminator="kind"),
]


def is_photo_verified(outcome: Union[VerificationReport, SelfReportedResult]) -> bool:
    """Whether the outcome lets the check-in count towards challenge progress."""
    if isinstance(outcome, VerificationReport):
        return outcome.overall_valid
    if isinstance(outcome, SelfReportedResult):
        return outcome.photo_verified
    raise TypeError(f"Unsupported verification outcome: {type(outcome).__name__}")
