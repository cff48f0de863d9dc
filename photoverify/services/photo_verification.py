"""Photo verification service for challenge check-ins."""
import asyncio
from typing import Optional, Union

from photoverify.core.exceptions import (
    InvalidImageReferenceError,
    MultipleFacesDetectedError,
    NoFaceDetectedError,
    VisionProviderError,
)
from photoverify.core.logging import get_logger
from photoverify.domain.value_objects.verification import (
    FallbackReason,
    SelfReport,
    SelfReportedResult,
    VerificationReport,
)
from photoverify.services.condition_analyzer import PhotoConditionAnalyzer
from photoverify.services.condition_comparator import ConditionComparator

logger = get_logger(__name__)

RECOVERABLE_ANALYSIS_ERRORS = (NoFaceDetectedError, MultipleFacesDetectedError, VisionProviderError)


class PhotoVerificationService:
    """Verifies a check-in photo against the user's calibration photo.

    This service:
    1. Analyzes the baseline and check-in photos concurrently
    2. Compares the two condition profiles
    3. Falls back to the client's self report when there is no baseline or
       the analysis fails, so a vision outage never blocks a check-in

    Example:
        ```python
        service = PhotoVerificationService(analyzer, ConditionComparator())
        outcome = await service.verify(
            checkin_image_ref="gs://bucket/checkins/day-7.jpg",
            baseline_image_ref="gs://bucket/checkins/day-1.jpg",
            self_report=SelfReport(lighting="good", angle="good", distance="good"),
        )
        ```
    """

    def __init__(self, analyzer: PhotoConditionAnalyzer, comparator: ConditionComparator) -> None:
        """Initialize the photo verification service.

        Args:
            analyzer: Per-image condition analyzer
            comparator: Baseline/check-in condition comparator
        """
        self.analyzer = analyzer
        self.comparator = comparator

    async def verify(
        self,
        checkin_image_ref: str,
        baseline_image_ref: Optional[str] = None,
        self_report: Optional[SelfReport] = None,
    ) -> Union[VerificationReport, SelfReportedResult]:
        """Verify a check-in photo.

        Args:
            checkin_image_ref: Reference to the check-in photo
            baseline_image_ref: Reference to the calibration photo, None if the
                user has not recorded one yet
            self_report: Client-estimated conditions used by the fallback path

        Returns:
            VerificationReport when both photos could be analyzed, otherwise a
            SelfReportedResult

        Raises:
            InvalidImageReferenceError: If an image reference is malformed or
                unreadable, even when the other analysis failed recoverably
        """
        _validate_reference(checkin_image_ref, "checkin_image_ref")

        if baseline_image_ref is None:
            logger.info("No baseline photo, using self-reported verification")
            return SelfReportedResult.from_self_report(self_report, FallbackReason.NO_BASELINE)

        _validate_reference(baseline_image_ref, "baseline_image_ref")

        # Wait for both analyses. A caller error from either image takes
        # precedence over a recoverable analysis failure.
        results = await asyncio.gather(
            self.analyzer.analyze(baseline_image_ref),
            self.analyzer.analyze(checkin_image_ref),
            return_exceptions=True,
        )
        failures = [result for result in results if isinstance(result, BaseException)]
        for failure in failures:
            if not isinstance(failure, RECOVERABLE_ANALYSIS_ERRORS):
                raise failure

        if failures:
            error = failures[0]
            logger.warning(
                "Photo analysis failed, falling back to self-reported verification",
                error=str(error),
                error_type=type(error).__name__,
                details=error.details,
                failed_analyses=len(failures),
            )
            return SelfReportedResult.from_self_report(
                self_report, FallbackReason.ANALYSIS_FAILED, error=str(error)
            )

        baseline, checkin = results

        report = self.comparator.compare(baseline, checkin)
        logger.info(
            "Photo verification completed",
            overall_valid=report.overall_valid,
            confidence_score=report.confidence_score,
        )
        return report


def _validate_reference(image_ref: Optional[str], name: str) -> None:
    if not isinstance(image_ref, str) or not image_ref.strip():
        raise InvalidImageReferenceError(f"{name} must be a non-empty string")
