"""Domain entities package."""
from .observation import BoundingPoly, Likelihood, RawFaceObservation, SceneLabel, Vertex

__all__ = ["BoundingPoly", "Likelihood", "RawFaceObservation", "SceneLabel", "Vertex"]
