"""Tests for the Google Cloud Vision provider."""
from unittest.mock import MagicMock, patch

import pytest
from google.api_core import exceptions as google_exceptions
from google.cloud import vision

from photoverify.core.exceptions import InvalidImageReferenceError, VisionProviderError
from photoverify.domain.entities.observation import Likelihood
from photoverify.services.condition_analyzer import PhotoConditionAnalyzer
from photoverify.services.vision.google_vision import GoogleVisionProvider, to_likelihood

IMAGE_URI = "gs://progress-photos/user-1/day-7.jpg"


def _face_annotation(**overrides) -> vision.FaceAnnotation:
    fields = dict(
        bounding_poly=vision.BoundingPoly(vertices=[
            vision.Vertex(x=100, y=200),
            vision.Vertex(x=900, y=200),
            vision.Vertex(x=900, y=800),
            vision.Vertex(x=100, y=800),
        ]),
        roll_angle=-2.5,
        pan_angle=4.0,
        tilt_angle=1.5,
        detection_confidence=0.75,
        under_exposed_likelihood=vision.Likelihood.UNLIKELY,
        joy_likelihood=vision.Likelihood.VERY_UNLIKELY,
        sorrow_likelihood=vision.Likelihood.VERY_UNLIKELY,
        anger_likelihood=vision.Likelihood.VERY_UNLIKELY,
        surprise_likelihood=vision.Likelihood.POSSIBLE,
    )
    fields.update(overrides)
    return vision.FaceAnnotation(**fields)


@pytest.fixture
def client() -> MagicMock:
    client = MagicMock()
    client.face_detection.return_value = vision.AnnotateImageResponse(
        face_annotations=[_face_annotation()]
    )
    client.label_detection.return_value = vision.AnnotateImageResponse(
        label_annotations=[
            vision.EntityAnnotation(description="Wall", score=0.875),
            vision.EntityAnnotation(description="Eyebrow", score=0.75),
        ]
    )
    return client


@pytest.fixture
def provider(client) -> GoogleVisionProvider:
    return GoogleVisionProvider(client=client)


class TestConversion:
    def test_likelihood_mapping(self):
        assert to_likelihood(vision.Likelihood.VERY_LIKELY) == Likelihood.VERY_LIKELY
        assert to_likelihood(vision.Likelihood.UNLIKELY) == Likelihood.UNLIKELY
        assert to_likelihood(0) == Likelihood.UNKNOWN

    async def test_detect_faces_converts_annotations(self, provider):
        faces = await provider.detect_faces(IMAGE_URI)

        assert len(faces) == 1
        face = faces[0]
        assert [(v.x, v.y) for v in face.bounding_poly.vertices] == [
            (100, 200), (900, 200), (900, 800), (100, 800)
        ]
        assert face.roll_angle == -2.5
        assert face.pan_angle == 4.0
        assert face.tilt_angle == 1.5
        assert face.detection_confidence == 0.75
        assert face.under_exposed_likelihood == Likelihood.UNLIKELY
        assert face.surprise_likelihood == Likelihood.POSSIBLE

    async def test_detect_labels(self, provider):
        labels = await provider.detect_labels(IMAGE_URI)

        assert [(label.description, label.score) for label in labels] == [
            ("Wall", 0.875),
            ("Eyebrow", 0.75),
        ]

    async def test_no_faces(self, provider, client):
        client.face_detection.return_value = vision.AnnotateImageResponse()
        assert await provider.detect_faces(IMAGE_URI) == []


class TestImageReferences:
    @pytest.mark.parametrize(
        "image_ref",
        [IMAGE_URI, "https://cdn.example.com/day-7.jpg", "http://cdn.example.com/day-7.jpg"],
    )
    async def test_remote_references_are_sent_as_uri(self, provider, client, image_ref):
        await provider.detect_faces(image_ref)

        image = client.face_detection.call_args.kwargs["image"]
        assert image.source.image_uri == image_ref
        assert not image.content

    async def test_local_file_is_sent_as_content(self, provider, client, tmp_path):
        photo = tmp_path / "day-7.jpg"
        photo.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg")

        await provider.detect_labels(str(photo))

        image = client.label_detection.call_args.kwargs["image"]
        assert image.content == b"\xff\xd8\xff\xe0fake-jpeg"

    async def test_missing_local_file(self, provider, client, tmp_path):
        with pytest.raises(InvalidImageReferenceError):
            await provider.detect_faces(str(tmp_path / "missing.jpg"))

        client.face_detection.assert_not_called()


class TestErrors:
    async def test_api_exception_becomes_provider_error(self, provider, client):
        client.face_detection.side_effect = google_exceptions.ResourceExhausted("Quota exceeded")

        with pytest.raises(VisionProviderError, match="Quota exceeded") as exc_info:
            await provider.detect_faces(IMAGE_URI)

        assert exc_info.value.details["feature"] == "face_detection"

    async def test_error_payload_becomes_provider_error(self, provider, client):
        client.label_detection.return_value = vision.AnnotateImageResponse(
            error={"code": 7, "message": "Permission denied on image"}
        )

        with pytest.raises(VisionProviderError, match="Permission denied on image"):
            await provider.detect_labels(IMAGE_URI)

    @patch("photoverify.services.vision.google_vision.vision.ImageAnnotatorClient.from_service_account_file")
    async def test_unreadable_credentials_file(self, mock_from_file):
        mock_from_file.side_effect = FileNotFoundError("credentials.json")
        provider = GoogleVisionProvider(credentials_file="credentials.json")

        with pytest.raises(VisionProviderError, match="Failed to initialize Vision client"):
            await provider.detect_faces(IMAGE_URI)


class TestClientInitialization:
    @patch("photoverify.services.vision.google_vision.vision.ImageAnnotatorClient")
    def test_api_key_client_options(self, mock_client_cls):
        provider = GoogleVisionProvider(api_key="test-key", project_id="progress-app")

        provider._get_client()

        mock_client_cls.assert_called_once_with(
            client_options={"api_key": "test-key", "quota_project_id": "progress-app"}
        )

    @patch("photoverify.services.vision.google_vision.vision.ImageAnnotatorClient")
    def test_client_is_created_once(self, mock_client_cls):
        provider = GoogleVisionProvider(api_key="test-key")

        first = provider._get_client()
        second = provider._get_client()

        assert first is second
        mock_client_cls.assert_called_once()


async def test_analyzer_on_vision_output(provider):
    profile = await PhotoConditionAnalyzer(provider).analyze(IMAGE_URI)

    assert profile.lighting_score == 0.8
    assert profile.face_size_percent == pytest.approx(48.0)
    assert profile.pose_deviation_degrees == pytest.approx((2.5 ** 2 + 4.0 ** 2 + 1.5 ** 2) ** 0.5)
    assert profile.background_clutter == pytest.approx(0.2)
    assert profile.expression_neutral is False
