"""
Similarity Combiner
====================

Blends a DTW-derived similarity with the mean per-frame cosine similarity
into a single score in [0, 1].
"""

import math
import logging
from typing import Optional, Sequence

import numpy as np

from ..core.types import CapturedFrame
from ..models.feature_extractor import SignFeatureExtractor
from ..utils.config import ComparisonConfig
from .alignment import cosine_similarity, dtw_distance
from .normalizer import FrameNormalizer
from .resampler import prepare_sequence

logger = logging.getLogger(__name__)


def _finite_or_zero(value: float) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return value


def mean_cosine_similarity(features1: Sequence, features2: Sequence) -> float:
    """Average per-frame cosine over the overlapping prefix.

    Non-finite frame results contribute nothing but still count in the
    denominator.
    """
    overlap = min(len(features1), len(features2))
    if overlap == 0:
        return 0.0
    total = 0.0
    for i in range(overlap):
        value = cosine_similarity(features1[i], features2[i])
        if math.isfinite(value):
            total += value
    return total / overlap


class SimilarityScorer:
    """
    Scores how similar two keyframe sequences are.

    Pipeline per sequence: drop incomplete frames → resample → normalize →
    extract features. The two feature sequences are then compared with DTW
    and frame-wise cosine similarity:

        final = dtw_weight * max(0, 1 - dtw / max_expected_distance)
              + cosine_weight * mean_cosine
        final = clamp(final ** sharpening_exponent, 0, 1)

    Example:
        >>> scorer = SimilarityScorer(ComparisonConfig())
        >>> similarity = scorer.score(captured_frames, recording.frames)
    """

    def __init__(self, config: Optional[ComparisonConfig] = None):
        self.config = config or ComparisonConfig()
        self._normalizer = FrameNormalizer(self.config.anchor)
        self._extractor = SignFeatureExtractor(
            feature_length=self.config.feature_length,
            key_landmark_weight=self.config.key_landmark_weight,
        )

    def features_for(self, frames: Sequence[CapturedFrame]) -> list:
        """Resample, normalize and extract features for one sequence."""
        prepared = prepare_sequence(
            frames, self.config.target_frames, self.config.min_quality_frames)
        return self._extractor.extract_sequence(
            [self._normalizer.normalize(frame) for frame in prepared])

    def combine(self, dtw_cost: float, mean_cosine: float) -> float:
        """Blend a DTW cost and a mean cosine into a clamped similarity."""
        if dtw_cost is None or not math.isfinite(dtw_cost):
            dtw_similarity = 0.0
        else:
            dtw_similarity = max(0.0, 1.0 - dtw_cost / self.config.max_expected_distance)
        mean_cosine = _finite_or_zero(mean_cosine)

        final = self.config.dtw_weight * dtw_similarity + self.config.cosine_weight * mean_cosine
        final = max(0.0, min(1.0, _finite_or_zero(final)))
        if self.config.sharpening_exponent != 1.0:
            final = final ** self.config.sharpening_exponent
        return max(0.0, min(1.0, _finite_or_zero(final)))

    def compare_sequences(self, seq1: Sequence[CapturedFrame],
                          seq2: Sequence[CapturedFrame]) -> float:
        """Unguarded comparison; malformed frames may raise."""
        if not seq1 or not seq2:
            return 0.0

        with np.errstate(all="ignore"):
            features1 = self.features_for(seq1)
            features2 = self.features_for(seq2)
            if not features1 or not features2:
                logger.debug("No usable frames after normalization (%d vs %d)",
                             len(features1), len(features2))
                return 0.0

            dtw_cost = dtw_distance(features1, features2)
            if not math.isfinite(dtw_cost):
                logger.warning("DTW produced an invalid distance: %r", dtw_cost)
            mean_cosine = mean_cosine_similarity(features1, features2)

        similarity = self.combine(dtw_cost, mean_cosine)
        logger.debug("dtw=%.4f cosine=%.4f -> similarity=%.4f",
                     dtw_cost, mean_cosine, similarity)
        return similarity

    def score(self, seq1: Sequence[CapturedFrame], seq2: Sequence[CapturedFrame]) -> float:
        """Similarity in [0, 1]; never raises, failures degrade to 0."""
        try:
            return self.compare_sequences(seq1, seq2)
        except Exception as e:
            logger.error("Sequence comparison failed: %s", e)
            return 0.0
