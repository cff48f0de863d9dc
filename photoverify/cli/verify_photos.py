"""CLI tool for analyzing and verifying progress photos."""
import argparse
import asyncio
import sys
from typing import Optional, TextIO

from photoverify.core.container import ServiceContainer
from photoverify.core.exceptions import PhotoVerificationError
from photoverify.core.logging import get_logger, setup_logging
from photoverify.domain.interfaces.vision_provider import VisionProvider
from photoverify.domain.value_objects.verification import (
    SelfAssessment,
    SelfReport,
    VerificationReport,
    is_photo_verified,
)

logger = get_logger(__name__)


async def analyze_photo(container: ServiceContainer, image_ref: str, out: TextIO) -> int:
    """Print the condition profile of a single photo.

    Args:
        container: Initialized service container
        image_ref: Image URI or local path
        out: Stream the profile JSON is written to

    Returns:
        Process exit code
    """
    try:
        profile = await container.condition_analyzer.analyze(image_ref)
    except PhotoVerificationError as e:
        logger.error("Photo analysis failed", image_ref=image_ref, error=str(e), details=e.details)
        return 1

    print(profile.model_dump_json(indent=2), file=out)
    return 0


async def verify_photo(
    container: ServiceContainer,
    checkin_ref: str,
    baseline_ref: Optional[str],
    self_report: Optional[SelfReport],
    out: TextIO,
) -> int:
    """Verify a check-in photo and print the outcome.

    Args:
        container: Initialized service container
        checkin_ref: Check-in image URI or local path
        baseline_ref: Calibration image URI or local path, if any
        self_report: Conditions to fall back on
        out: Stream the outcome JSON is written to

    Returns:
        Process exit code, 0 when the photo counts as verified
    """
    outcome = await container.photo_verification_service.verify(
        checkin_image_ref=checkin_ref,
        baseline_image_ref=baseline_ref,
        self_report=self_report,
    )
    print(outcome.model_dump_json(indent=2), file=out)

    if isinstance(outcome, VerificationReport):
        for suggestion in outcome.suggestions:
            logger.info("Retake suggestion", suggestion=suggestion)
    else:
        logger.warning(
            "Photo verified from self report only",
            reason=outcome.reason.value,
            error=outcome.error
        )
    return 0 if is_photo_verified(outcome) else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check that a progress photo matches the conditions of its baseline photo"
    )
    parser.add_argument("checkin", help="Check-in photo (gs://, https:// or local path)")
    parser.add_argument("--baseline", help="Baseline (calibration) photo")
    parser.add_argument(
        "--analyze-only",
        action="store_true",
        help="Only print the condition profile of the check-in photo"
    )
    choices = [assessment.value for assessment in SelfAssessment]
    parser.add_argument("--lighting", choices=choices, help="Self-reported lighting")
    parser.add_argument("--angle", choices=choices, help="Self-reported angle")
    parser.add_argument("--distance", choices=choices, help="Self-reported distance")
    return parser


async def run(
    args: argparse.Namespace,
    vision_provider: Optional[VisionProvider] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Run the command; the Google Vision provider is used unless one is given."""
    if out is None:
        out = sys.stdout
    container = ServiceContainer()
    await container.initialize(vision_provider)
    try:
        if args.analyze_only:
            return await analyze_photo(container, args.checkin, out)

        self_report = None
        if args.lighting or args.angle or args.distance:
            self_report = SelfReport(lighting=args.lighting, angle=args.angle, distance=args.distance)
        return await verify_photo(container, args.checkin, args.baseline, self_report, out)
    except PhotoVerificationError as e:
        logger.error("Photo verification failed", error=str(e), details=e.details)
        return 1
    finally:
        await container.cleanup()


def main() -> None:
    """CLI entry point."""
    setup_logging(stream=sys.stderr)
    args = build_parser().parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
