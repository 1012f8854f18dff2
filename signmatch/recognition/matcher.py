"""
Sign Matcher
=============

Compares a captured keyframe sequence against a library of recorded signs,
ranks the results and applies the match threshold.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from ..core.types import CapturedFrame, ComparisonResult, GestureRecording
from ..utils.config import ComparisonConfig
from ..utils.logger import log_timing
from .resampler import select_quality_frames, summarize_sequence
from .similarity import SimilarityScorer

logger = logging.getLogger(__name__)


class SignMatcher:
    """
    Ranks recorded signs by similarity to a captured sequence.

    Holds configuration only; every call is independent. Library entries
    with no frames are ignored, and an entry whose comparison fails is
    logged and skipped without aborting the rest of the catalogue.

    Example:
        >>> matcher = SignMatcher(ComparisonConfig())
        >>> match = matcher.best_match(captured_frames, recordings)
        >>> if match:
        ...     print(f"Recognised: {match.sign_name} ({match.similarity:.0%})")
    """

    def __init__(self, config: Optional[ComparisonConfig] = None,
                 scorer: Optional[SimilarityScorer] = None):
        self.config = config or ComparisonConfig()
        self.scorer = scorer or SimilarityScorer(self.config)

    @property
    def threshold(self) -> float:
        return self.config.similarity_threshold

    @log_timing
    def compare_all(self, candidate: Sequence[CapturedFrame],
                    library: Sequence[GestureRecording]) -> List[ComparisonResult]:
        """
        Score the candidate against every library entry.

        Args:
            candidate: Captured keyframes
            library: Recorded signs (read-only)

        Returns:
            Results sorted by similarity, descending; ties keep catalogue order.
            Empty when the candidate has no valid hand frame or the library
            is empty.
        """
        if not candidate:
            logger.warning("No captured frames to compare")
            return []
        if not library:
            logger.warning("No recorded signs to compare against")
            return []

        quality = summarize_sequence(candidate)
        logger.debug("Candidate: %d frames, %d with hands, %d valid",
                     quality.total_frames, quality.frames_with_hands, quality.valid_frames)
        frames = select_quality_frames(candidate)
        if not frames:
            logger.warning("No valid hand frames in candidate (%d frames)", len(candidate))
            return []

        entries = [entry for entry in library if entry.frames]
        skipped = len(library) - len(entries)
        if skipped:
            logger.warning("Ignoring %d recorded sign(s) without keyframes", skipped)

        if self.config.max_workers > 1 and len(entries) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                scored = list(pool.map(lambda e: self._compare_entry(frames, e), entries))
        else:
            scored = [self._compare_entry(frames, entry) for entry in entries]

        results = [result for result in scored if result is not None]
        results.sort(key=lambda r: r.similarity, reverse=True)
        return results

    def best_match(self, candidate: Sequence[CapturedFrame],
                   library: Sequence[GestureRecording]) -> Optional[ComparisonResult]:
        """Top-ranked result if it clears the threshold, else None."""
        results = self.compare_all(candidate, library)
        if results and results[0].is_match:
            return results[0]
        return None

    def _compare_entry(self, frames: Sequence[CapturedFrame],
                       entry: GestureRecording) -> Optional[ComparisonResult]:
        try:
            if logger.isEnabledFor(logging.DEBUG):
                quality = summarize_sequence(entry.frames)
                logger.debug("Sign '%s': %d keyframes, %d with hands, %d valid",
                             entry.name, quality.total_frames,
                             quality.frames_with_hands, quality.valid_frames)
            similarity = self.scorer.compare_sequences(frames, entry.frames)
        except Exception as e:
            logger.error("Error comparing sign '%s': %s", entry.name, e)
            return None

        return ComparisonResult(
            sign_id=entry.id,
            sign_name=entry.name,
            similarity=similarity,
            is_match=similarity >= self.threshold,
        )
