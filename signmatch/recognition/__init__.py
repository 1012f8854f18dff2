"""Sign recognition: normalization, resampling, alignment, scoring, matching."""
from .normalizer import FrameNormalizer, normalize_frame
from .resampler import resample, prepare_sequence, select_quality_frames, summarize_sequence
from .alignment import euclidean_distance, cosine_similarity, dtw_distance
from .similarity import SimilarityScorer
from .matcher import SignMatcher

__all__ = [
    "FrameNormalizer",
    "normalize_frame",
    "resample",
    "prepare_sequence",
    "select_quality_frames",
    "summarize_sequence",
    "euclidean_distance",
    "cosine_similarity",
    "dtw_distance",
    "SimilarityScorer",
    "SignMatcher",
]
