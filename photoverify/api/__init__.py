"""API v1 router initialization."""
from fastapi import APIRouter

from .photo_verification import router as photo_verification_router

# Create v1 router
router = APIRouter()

router.include_router(
    photo_verification_router,
    prefix="/photo-verification",
    tags=["photo-verification"]
)
