"""Shared domain types and errors."""
from .types import (
    LandmarkIndex,
    FaceLandmarkIndex,
    Point3,
    HandFrame,
    FaceFrame,
    CapturedFrame,
    GestureRecording,
    ComparisonResult,
    NUM_HAND_LANDMARKS,
)
from .errors import SignMatchError, ConfigError, LibraryFormatError

__all__ = [
    "LandmarkIndex",
    "FaceLandmarkIndex",
    "Point3",
    "HandFrame",
    "FaceFrame",
    "CapturedFrame",
    "GestureRecording",
    "ComparisonResult",
    "NUM_HAND_LANDMARKS",
    "SignMatchError",
    "ConfigError",
    "LibraryFormatError",
]
