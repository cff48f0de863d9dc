"""Condition comparator for baseline and check-in photos."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from photoverify.core.config import Settings, settings as default_settings
from photoverify.domain.value_objects.conditions import ConditionProfile
from photoverify.domain.value_objects.verification import (
    AngleCheck,
    BackgroundCheck,
    DistanceCheck,
    ExpressionCheck,
    LightingCheck,
    VerificationChecks,
    VerificationReport,
)


class ComparisonThresholds(BaseModel):
    """Tolerances applied by the comparator."""
    model_config = ConfigDict(frozen=True)

    lighting_diff: float = Field(0.2, description="Max lighting score difference (exclusive)")
    face_size_diff: float = Field(10.0, description="Max face size difference in percent (exclusive)")
    face_size_min: float = Field(40.0, description="Min check-in face size percent (inclusive)")
    face_size_max: float = Field(60.0, description="Max check-in face size percent (inclusive)")
    pose_diff: float = Field(10.0, description="Max pose deviation difference in degrees (exclusive)")
    pose_max: float = Field(10.0, description="Max check-in pose deviation in degrees (exclusive)")
    background_clutter_max: float = Field(0.3, description="Max check-in clutter (exclusive)")

    @classmethod
    def from_settings(cls, settings: Settings) -> "ComparisonThresholds":
        """Build thresholds from application settings."""
        return cls(
            lighting_diff=settings.LIGHTING_DIFF_THRESHOLD,
            face_size_diff=settings.FACE_SIZE_DIFF_THRESHOLD,
            face_size_min=settings.FACE_SIZE_MIN_PERCENT,
            face_size_max=settings.FACE_SIZE_MAX_PERCENT,
            pose_diff=settings.POSE_DIFF_THRESHOLD,
            pose_max=settings.POSE_MAX_DEGREES,
            background_clutter_max=settings.BACKGROUND_CLUTTER_MAX,
        )


class ConditionComparator:
    """Compares a check-in condition profile against its baseline.

    Only the lighting check is purely relative to the baseline. Distance and
    angle additionally require the check-in to be within absolute limits,
    and background and expression look at the check-in alone. The baseline
    clutter is reported but never gated on.

    Example:
        ```python
        comparator = ConditionComparator()
        report = comparator.compare(baseline_profile, checkin_profile)
        if not report.overall_valid:
            print(report.suggestions)
        ```
    """

    def __init__(self, thresholds: Optional[ComparisonThresholds] = None) -> None:
        self.thresholds = thresholds or ComparisonThresholds.from_settings(default_settings)

    def compare(self, baseline: ConditionProfile, checkin: ConditionProfile) -> VerificationReport:
        """Compare two condition profiles.

        Args:
            baseline: Conditions of the calibration photo
            checkin: Conditions of the check-in photo

        Returns:
            VerificationReport with the five checks and both profiles
        """
        checks = VerificationChecks(
            lighting=self._check_lighting(baseline, checkin),
            distance=self._check_distance(baseline, checkin),
            angle=self._check_angle(baseline, checkin),
            background=self._check_background(baseline, checkin),
            expression=self._check_expression(checkin),
        )
        return VerificationReport(baseline=baseline, checkin=checkin, checks=checks)

    def _check_lighting(self, baseline: ConditionProfile, checkin: ConditionProfile) -> LightingCheck:
        diff = abs(checkin.lighting_score - baseline.lighting_score)
        passed = diff < self.thresholds.lighting_diff
        return LightingCheck(
            score=checkin.lighting_score,
            baseline_score=baseline.lighting_score,
            quality=checkin.lighting_quality,
            baseline_quality=baseline.lighting_quality,
            diff=diff,
            passed=passed,
            suggestion=None if passed else (
                "Try to match the lighting from your baseline photo. "
                f"Current: {checkin.lighting_quality.value}, Baseline: {baseline.lighting_quality.value}"
            ),
        )

    def _check_distance(self, baseline: ConditionProfile, checkin: ConditionProfile) -> DistanceCheck:
        t = self.thresholds
        diff = abs(checkin.face_size_percent - baseline.face_size_percent)
        in_range = t.face_size_min <= checkin.face_size_percent <= t.face_size_max
        passed = diff < t.face_size_diff and in_range
        return DistanceCheck(
            face_size=checkin.face_size_percent,
            baseline_face_size=baseline.face_size_percent,
            diff=diff,
            passed=passed,
            suggestion=None if passed else (
                "Hold camera at the same distance as your baseline photo (arm's length). "
                f"Face should be {t.face_size_min:g}-{t.face_size_max:g}% of frame "
                f"(baseline: {baseline.face_size_percent:.1f}%)."
            ),
        )

    def _check_angle(self, baseline: ConditionProfile, checkin: ConditionProfile) -> AngleCheck:
        t = self.thresholds
        diff = abs(checkin.pose_deviation_degrees - baseline.pose_deviation_degrees)
        passed = diff < t.pose_diff and checkin.pose_deviation_degrees < t.pose_max
        return AngleCheck(
            deviation=checkin.pose_deviation_degrees,
            baseline_deviation=baseline.pose_deviation_degrees,
            diff=diff,
            passed=passed,
            suggestion=None if passed else (
                f"Face straight ahead. Current angle: {checkin.pose_deviation_degrees:.1f}°, "
                f"should be <{t.pose_max:g}°"
            ),
        )

    def _check_background(self, baseline: ConditionProfile, checkin: ConditionProfile) -> BackgroundCheck:
        passed = checkin.background_clutter < self.thresholds.background_clutter_max
        return BackgroundCheck(
            clutter=checkin.background_clutter,
            baseline_clutter=baseline.background_clutter,
            passed=passed,
            suggestion=None if passed else "Use a plain, uncluttered background",
        )

    def _check_expression(self, checkin: ConditionProfile) -> ExpressionCheck:
        passed = checkin.expression_neutral
        return ExpressionCheck(
            neutral=checkin.expression_neutral,
            passed=passed,
            suggestion=None if passed else "Use a neutral expression (no smiling, frowning, etc.)",
        )
