"""
Sequence Resampler
===================

Maps a variable-length keyframe sequence onto a fixed number of frames by
nearest-index selection (no interpolation), after dropping frames without
a complete hand.
"""

import math
import logging
from dataclasses import dataclass
from typing import List, Sequence

from ..core.types import CapturedFrame

logger = logging.getLogger(__name__)


@dataclass
class SequenceQuality:
    """Frame counts describing how usable a captured sequence is."""
    total_frames: int
    frames_with_hands: int
    valid_frames: int

    @property
    def valid_ratio(self) -> float:
        if self.total_frames == 0:
            return 0.0
        return self.valid_frames / self.total_frames


def round_half_up(value: float) -> int:
    """Round to nearest integer, .5 going up (away from zero for value >= 0).

    Python's built-in round() rounds half to even, which would select
    different source frames on exact .5 boundaries.
    """
    return int(math.floor(value + 0.5))


def nearest_index(i: int, source_len: int, target: int) -> int:
    """Source index selected for output index ``i``."""
    step = (source_len - 1) / (target - 1) if target > 1 else 0.0
    return min(round_half_up(i * step), source_len - 1)


def resample(frames: Sequence[CapturedFrame], target: int) -> List[CapturedFrame]:
    """Select exactly ``target`` frames by nearest index.

    Args:
        frames: Source keyframes (any length)
        target: Output length, >= 1

    Returns:
        ``target`` frames (shared references), or [] for empty input
    """
    if not frames or target < 1:
        return []
    source_len = len(frames)
    return [frames[nearest_index(i, source_len, target)] for i in range(target)]


def select_quality_frames(frames: Sequence[CapturedFrame]) -> List[CapturedFrame]:
    """Frames carrying at least one complete 21-point hand."""
    return [frame for frame in frames if frame.has_valid_hand]


def prepare_sequence(frames: Sequence[CapturedFrame], target: int,
                     min_quality_frames: int = 0) -> List[CapturedFrame]:
    """Drop incomplete frames, then resample to ``target``.

    Sequences with fewer than ``min_quality_frames`` usable frames are
    returned unresampled; downstream code compares over min(len1, len2).
    """
    quality = select_quality_frames(frames or [])
    if not quality:
        return []
    if len(quality) < min_quality_frames:
        logger.debug("Only %d quality frames (< %d), skipping resampling",
                     len(quality), min_quality_frames)
        return quality
    return resample(quality, target)


def summarize_sequence(frames: Sequence[CapturedFrame]) -> SequenceQuality:
    """Count total, hand-bearing, and fully valid frames."""
    frames = frames or []
    return SequenceQuality(
        total_frames=len(frames),
        frames_with_hands=sum(1 for f in frames if f.hands),
        valid_frames=sum(1 for f in frames if f.has_valid_hand),
    )
