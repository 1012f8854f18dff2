"""
Feature models package.

Provides:
    - SignFeatureExtractor: Keyframe → fixed-length feature vector
"""
from .feature_extractor import SignFeatureExtractor, HAND_SEGMENT_DIM, DEFAULT_FEATURE_LENGTH

__all__ = [
    "SignFeatureExtractor",
    "HAND_SEGMENT_DIM",
    "DEFAULT_FEATURE_LENGTH",
]
