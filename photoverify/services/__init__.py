"""Application services."""
from .condition_analyzer import PhotoConditionAnalyzer
from .condition_comparator import ComparisonThresholds, ConditionComparator
from .photo_verification import PhotoVerificationService

__all__ = [
    "ComparisonThresholds",
    "ConditionComparator",
    "PhotoConditionAnalyzer",
    "PhotoVerificationService",
]
