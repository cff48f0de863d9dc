"""Service container for dependency injection."""
from typing import Optional

from photoverify.core.config import Settings, settings as default_settings
from photoverify.domain.interfaces.vision_provider import VisionProvider
from photoverify.services.condition_analyzer import PhotoConditionAnalyzer
from photoverify.services.condition_comparator import ComparisonThresholds, ConditionComparator
from photoverify.services.photo_verification import PhotoVerificationService
from photoverify.services.vision.google_vision import GoogleVisionProvider


class ServiceContainer:
    """Container for application services.

    This container manages the lifecycle and dependencies of all services in the application.
    The vision provider is constructed here and injected into the analyzer; pass a
    provider explicitly to swap the backend (e.g. a fake in tests).

    Example:
        ```python
        container = ServiceContainer()
        await container.initialize()

        outcome = await container.photo_verification_service.verify(checkin_ref, baseline_ref)
        ```
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize empty container."""
        self.settings = settings or default_settings

        # Core services
        self.vision_provider: Optional[VisionProvider] = None

        # Domain services
        self.condition_analyzer: Optional[PhotoConditionAnalyzer] = None
        self.condition_comparator: Optional[ConditionComparator] = None
        self.photo_verification_service: Optional[PhotoVerificationService] = None

    async def initialize(self, vision_provider: Optional[VisionProvider] = None) -> None:
        """Initialize all services in the correct order."""
        self.vision_provider = vision_provider or GoogleVisionProvider(
            api_key=self.settings.GOOGLE_API_KEY,
            project_id=self.settings.GOOGLE_PROJECT_ID,
            credentials_file=self.settings.GOOGLE_APPLICATION_CREDENTIALS,
        )
        self.condition_analyzer = PhotoConditionAnalyzer(self.vision_provider, self.settings)
        self.condition_comparator = ConditionComparator(
            ComparisonThresholds.from_settings(self.settings)
        )
        self.photo_verification_service = PhotoVerificationService(
            analyzer=self.condition_analyzer,
            comparator=self.condition_comparator,
        )

    @property
    def is_initialized(self) -> bool:
        return self.photo_verification_service is not None

    async def cleanup(self) -> None:
        """Cleanup all services in reverse order of initialization."""
        self.photo_verification_service = None
        self.condition_comparator = None
        self.condition_analyzer = None
        self.vision_provider = None


# Global container instance
container = ServiceContainer()
