"""Configuration settings for the photo verification service."""
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.
    
    These settings are loaded from environment variables with the following precedence:
    1. Environment variables
    2. .env file
    3. Default values
    
    Attributes:
        GOOGLE_API_KEY: API key for Google Cloud Vision (optional)
        REFERENCE_FRAME_AREA: Assumed image area used to estimate face size
        LIGHTING_DIFF_THRESHOLD: Maximum lighting score difference to baseline
    """
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="",
    )

    # Core Settings
    PROJECT_NAME: str = "Progress Photo Verification Service"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"

    # CORS Settings
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    @property
    def cors_origins(self) -> List[str]:
        """Get list of allowed origins."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    # Google Cloud Vision Settings
    GOOGLE_PROJECT_ID: Optional[str] = None
    GOOGLE_API_KEY: Optional[str] = None
    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = None

    # Condition analysis settings
    # The vision API does not report image dimensions, so face size is measured
    # against an assumed 1000x1000 frame. Relative measure only.
    REFERENCE_FRAME_AREA: float = Field(1000.0 * 1000.0, gt=0)
    CLUTTER_LABEL_CAP: int = Field(5, gt=0)

    # Condition comparison thresholds
    LIGHTING_DIFF_THRESHOLD: float = 0.2
    FACE_SIZE_DIFF_THRESHOLD: float = 10.0
    FACE_SIZE_MIN_PERCENT: float = 40.0
    FACE_SIZE_MAX_PERCENT: float = 60.0
    POSE_DIFF_THRESHOLD: float = 10.0
    POSE_MAX_DEGREES: float = 10.0
    BACKGROUND_CLUTTER_MAX: float = 0.3

    # Optional settings with defaults
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000

settings = Settings()
