"""Photo verification API endpoints."""
from fastapi import APIRouter, Depends, HTTPException

from photoverify.api.models.verification import (
    PhotoVerificationRequest,
    PhotoVerificationResponse,
)
from photoverify.core.exceptions import InvalidImageReferenceError
from photoverify.core.logging import get_logger
from photoverify.infrastructure.dependencies import get_photo_verification_service
from photoverify.services.photo_verification import PhotoVerificationService

logger = get_logger(__name__)
router = APIRouter(
    responses={
        400: {"description": "Invalid request"},
        500: {"description": "Internal server error"}
    }
)


@router.post(
    "/verify",
    response_model=PhotoVerificationResponse,
    summary="Verify a check-in photo",
    description=(
        "Compares the capture conditions of a check-in photo with the calibration photo. "
        "Falls back to the self-reported conditions when there is no calibration photo "
        "or the photos cannot be analyzed."
    ),
    responses={
        400: {
            "description": "Invalid image reference",
            "content": {
                "application/json": {
                    "example": {"detail": "Cannot read image file: day-7.jpg"}
                }
            },
        },
    },
)
async def verify_photo(
    request: PhotoVerificationRequest,
    service: PhotoVerificationService = Depends(get_photo_verification_service)
) -> PhotoVerificationResponse:
    """Verify a check-in photo against its baseline.

    Args:
        request: Image references and optional self report
        service: Photo verification service provided by dependency injection

    Returns:
        PhotoVerificationResponse with the outcome and retake suggestions

    Raises:
        HTTPException: If an image reference is invalid or processing fails
    """
    try:
        outcome = await service.verify(
            checkin_image_ref=request.checkin_image,
            baseline_image_ref=request.baseline_image,
            self_report=request.self_report,
        )
        return PhotoVerificationResponse.from_outcome(outcome)

    except InvalidImageReferenceError as e:
        logger.error("Invalid image reference", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Unexpected error during photo verification",
                     error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="An unexpected error occurred.")
