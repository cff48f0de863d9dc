"""
Google Cloud Vision implementation of the vision provider.

Face detection supplies the bounding polygon, pose angles and likelihoods;
label detection supplies the scene labels used to estimate background clutter.

Example:
    ```python
    provider = GoogleVisionProvider(api_key="...")
    faces = await provider.detect_faces("gs://bucket/checkins/day-7.jpg")
    ```

Note:
    The Google client is synchronous; calls are run in a worker thread so the
    event loop is not blocked while waiting on the API.
"""
import asyncio
from pathlib import Path
from typing import Any, Callable, List, Optional

from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import vision

from photoverify.core.config import settings
from photoverify.core.exceptions import InvalidImageReferenceError, VisionProviderError
from photoverify.core.logging import get_logger
from photoverify.domain.entities.observation import (
    BoundingPoly,
    Likelihood,
    RawFaceObservation,
    SceneLabel,
    Vertex,
)
from photoverify.domain.interfaces.vision_provider import VisionProvider

logger = get_logger(__name__)

REMOTE_PREFIXES = ("gs://", "http://", "https://")


def to_likelihood(value: Any) -> Likelihood:
    """Convert a Vision API likelihood enum to the domain enum."""
    try:
        return Likelihood[vision.Likelihood(value).name]
    except (KeyError, ValueError):
        return Likelihood.UNKNOWN


def to_face_observation(annotation: Any) -> RawFaceObservation:
    """Convert a Vision API FaceAnnotation to a RawFaceObservation."""
    return RawFaceObservation(
        bounding_poly=BoundingPoly(
            vertices=[Vertex(x=v.x, y=v.y) for v in annotation.bounding_poly.vertices]
        ),
        roll_angle=annotation.roll_angle,
        pan_angle=annotation.pan_angle,
        tilt_angle=annotation.tilt_angle,
        under_exposed_likelihood=to_likelihood(annotation.under_exposed_likelihood),
        joy_likelihood=to_likelihood(annotation.joy_likelihood),
        sorrow_likelihood=to_likelihood(annotation.sorrow_likelihood),
        anger_likelihood=to_likelihood(annotation.anger_likelihood),
        surprise_likelihood=to_likelihood(annotation.surprise_likelihood),
        detection_confidence=annotation.detection_confidence,
    )


class GoogleVisionProvider(VisionProvider):
    """Vision provider backed by the Google Cloud Vision API."""

    def __init__(
        self,
        client: Optional[vision.ImageAnnotatorClient] = None,
        api_key: Optional[str] = None,
        project_id: Optional[str] = None,
        credentials_file: Optional[str] = None,
    ) -> None:
        """Store configuration but do not create the client yet.

        Args:
            client: Preconfigured client, mainly for tests
            api_key: API key; takes precedence over the credentials file
            project_id: Quota project for API key requests
            credentials_file: Service account JSON file
        """
        self.api_key = api_key or settings.GOOGLE_API_KEY
        self.project_id = project_id or settings.GOOGLE_PROJECT_ID
        self.credentials_file = credentials_file or settings.GOOGLE_APPLICATION_CREDENTIALS
        self._client = client

    def _get_client(self) -> vision.ImageAnnotatorClient:
        """Get or initialize the Vision API client."""
        if self._client is None:
            try:
                if self.api_key:
                    logger.debug("Initializing Vision client with API key")
                    client_options = {"api_key": self.api_key}
                    if self.project_id:
                        client_options["quota_project_id"] = self.project_id
                    self._client = vision.ImageAnnotatorClient(client_options=client_options)
                elif self.credentials_file:
                    logger.debug("Initializing Vision client from service account file")
                    self._client = vision.ImageAnnotatorClient.from_service_account_file(
                        self.credentials_file
                    )
                else:
                    logger.debug("Allowing Vision client to discover credentials automatically")
                    self._client = vision.ImageAnnotatorClient()
            except (auth_exceptions.GoogleAuthError, OSError) as e:
                logger.error("Failed to initialize Vision client", error=str(e))
                raise VisionProviderError(f"Failed to initialize Vision client: {e}") from e
        return self._client

    def _build_image(self, image_ref: str) -> vision.Image:
        """Build the API image from a remote URI or a local file."""
        if image_ref.startswith(REMOTE_PREFIXES):
            return vision.Image(source=vision.ImageSource(image_uri=image_ref))
        path = Path(image_ref)
        try:
            return vision.Image(content=path.read_bytes())
        except OSError as e:
            raise InvalidImageReferenceError(
                f"Cannot read image file: {image_ref}", details={"image_ref": image_ref}
            ) from e

    async def _annotate(self, feature: str, image_ref: str) -> Any:
        """Run one detection feature and check the response for API errors."""
        image = self._build_image(image_ref)
        client = self._get_client()
        detect: Callable[..., Any] = getattr(client, feature)
        try:
            response = await asyncio.to_thread(detect, image=image)
        except (google_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
            logger.error("Vision API request failed", feature=feature, image_ref=image_ref, error=str(e))
            raise VisionProviderError(
                f"Vision API {feature} failed: {e}",
                details={"image_ref": image_ref, "feature": feature}
            ) from e

        if response.error.message:
            logger.error(
                "Vision API returned an error",
                feature=feature,
                image_ref=image_ref,
                error=response.error.message
            )
            raise VisionProviderError(
                f"Vision API {feature} error: {response.error.message}",
                details={"image_ref": image_ref, "feature": feature}
            )
        return response

    async def detect_faces(self, image_ref: str) -> List[RawFaceObservation]:
        """Detect faces using Vision API face detection."""
        response = await self._annotate("face_detection", image_ref)
        faces = [to_face_observation(annotation) for annotation in response.face_annotations]
        logger.debug("Face detection results", image_ref=image_ref, faces_found=len(faces))
        return faces

    async def detect_labels(self, image_ref: str) -> List[SceneLabel]:
        """Detect scene labels using Vision API label detection."""
        response = await self._annotate("label_detection", image_ref)
        return [
            SceneLabel(description=label.description, score=label.score)
            for label in response.label_annotations
        ]
