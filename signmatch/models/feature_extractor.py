"""
Feature extraction: one normalized keyframe → fixed-length feature vector.

Per-hand segment layout (73 dimensions):
    [0:63]   Landmark coordinates (21 × 3), key points optionally weighted
    [63:68]  Wrist → fingertip angles, atan2(dy, dx) (thumb..pinky)
    [68:73]  Key distances: thumb-index, index-middle, middle-ring,
             ring-pinky tips, and wrist-middle tip

Two hand slots in detection order give 146 raw values; the vector is then
truncated or zero-padded to the configured length (140 by default, so the
last six distance/angle values of the second hand are dropped, as in the
shipped revision).
"""

import logging
from typing import List, Sequence

import numpy as np

from ..core.types import CapturedFrame, HandFrame, NUM_HAND_LANDMARKS

logger = logging.getLogger(__name__)

WRIST = 0
THUMB_TIP = 4
INDEX_TIP = 8
MIDDLE_TIP = 12
RING_TIP = 16
PINKY_TIP = 20

FINGER_TIPS = [THUMB_TIP, INDEX_TIP, MIDDLE_TIP, RING_TIP, PINKY_TIP]
KEY_LANDMARKS = [WRIST] + FINGER_TIPS

DISTANCE_PAIRS = [
    (THUMB_TIP, INDEX_TIP),
    (INDEX_TIP, MIDDLE_TIP),
    (MIDDLE_TIP, RING_TIP),
    (RING_TIP, PINKY_TIP),
    (WRIST, MIDDLE_TIP),
]

MAX_HANDS = 2
COORD_DIM = NUM_HAND_LANDMARKS * 3
HAND_SEGMENT_DIM = COORD_DIM + len(FINGER_TIPS) + len(DISTANCE_PAIRS)
DEFAULT_FEATURE_LENGTH = 140


class SignFeatureExtractor:
    """Converts keyframes to fixed-size feature vectors.

    ``extract`` is total: malformed or missing hands produce zero segments,
    and a frame without any valid hand yields an all-zero vector.
    """

    def __init__(self, feature_length: int = DEFAULT_FEATURE_LENGTH,
                 key_landmark_weight: float = 1.0):
        self._feature_length = feature_length
        self._coord_weights = np.ones((NUM_HAND_LANDMARKS, 1), dtype=np.float64)
        self._coord_weights[KEY_LANDMARKS] = key_landmark_weight

    @property
    def feature_length(self):
        return self._feature_length

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def extract(self, frame: CapturedFrame) -> np.ndarray:
        """Convert one keyframe → (feature_length,) float64 vector."""
        raw = np.zeros(MAX_HANDS * HAND_SEGMENT_DIM, dtype=np.float64)

        for slot, hand in enumerate(frame.hands[:MAX_HANDS]):
            if not hand.is_valid:
                continue
            start = slot * HAND_SEGMENT_DIM
            raw[start:start + HAND_SEGMENT_DIM] = self._hand_segment(hand)

        features = np.zeros(self._feature_length, dtype=np.float64)
        n = min(self._feature_length, raw.size)
        features[:n] = raw[:n]

        # Degenerate input must never leak NaN/inf into alignment
        return np.nan_to_num(features, nan=0.0, posinf=0.0, neginf=0.0)

    def extract_sequence(self, frames: Sequence[CapturedFrame]) -> List[np.ndarray]:
        """Extract every frame of a sequence, order preserved."""
        return [self.extract(frame) for frame in frames]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _hand_segment(self, hand: HandFrame) -> np.ndarray:
        landmarks = hand.to_numpy()
        segment = np.empty(HAND_SEGMENT_DIM, dtype=np.float64)

        # --- Coordinates (63 dims) ------------------------------------
        segment[0:COORD_DIM] = (landmarks * self._coord_weights).flatten()

        # --- Wrist-relative fingertip angles (5 dims) -----------------
        wrist = landmarks[WRIST]
        tips = landmarks[FINGER_TIPS]
        angles = np.arctan2(tips[:, 1] - wrist[1], tips[:, 0] - wrist[0])
        segment[COORD_DIM:COORD_DIM + 5] = angles

        # --- Key distances (5 dims) -----------------------------------
        for i, (a, b) in enumerate(DISTANCE_PAIRS):
            segment[COORD_DIM + 5 + i] = float(np.linalg.norm(landmarks[a] - landmarks[b]))

        return segment
