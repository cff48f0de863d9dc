"""FastAPI dependency providers."""
from typing import AsyncGenerator

from fastapi import Depends

from photoverify.core.container import ServiceContainer, container
from photoverify.core.exceptions import ServiceNotInitializedError
from photoverify.services.photo_verification import PhotoVerificationService


async def get_container() -> ServiceContainer:
    """Dependency provider for the global ServiceContainer instance."""
    if not container.is_initialized:
        try:
            await container.initialize()
        except Exception as e:
            raise ServiceNotInitializedError(f"Service container could not be initialized: {e}")
    return container


async def get_photo_verification_service(
    container: ServiceContainer = Depends(get_container)
) -> AsyncGenerator[PhotoVerificationService, None]:
    """Provide the photo verification service.

    Yields:
        PhotoVerificationService: Initialized orchestrator

    Raises:
        ServiceNotInitializedError: If the service is not initialized
    """
    if container.photo_verification_service is None:
        raise ServiceNotInitializedError("PhotoVerificationService not found in initialized container")
    yield container.photo_verification_service
