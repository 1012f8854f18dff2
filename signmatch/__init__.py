"""
Sign Comparison Engine
=======================

Decides whether a freshly captured sequence of hand/face landmark frames
matches one of a user's previously recorded reference signs.

Modules:
    - core: Landmark data model and error types
    - recognition: Normalization, resampling, DTW alignment, scoring, matching
    - models: Frame → feature vector extraction
    - data: Recorded-sign library loading
    - utils: Configuration, logging
"""

from .core.types import (
    Point3,
    HandFrame,
    FaceFrame,
    CapturedFrame,
    GestureRecording,
    ComparisonResult,
)
from .recognition.matcher import SignMatcher
from .recognition.similarity import SimilarityScorer
from .utils.config import ComparisonConfig, load_config

__version__ = "1.0.0"
__author__ = "HCI Team"

__all__ = [
    "Point3",
    "HandFrame",
    "FaceFrame",
    "CapturedFrame",
    "GestureRecording",
    "ComparisonResult",
    "SignMatcher",
    "SimilarityScorer",
    "ComparisonConfig",
    "load_config",
]
