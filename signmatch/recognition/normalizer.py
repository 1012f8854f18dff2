"""
Frame Normalizer
=================

Re-expresses hand landmarks in a position/scale-invariant reference frame
so the same sign matches regardless of camera distance or where the
signer stands in the image.

Two anchors are supported:
- face:  (coord - face_center) / face_scale, when usable face landmarks exist.
         Frames without a face pass through unchanged.
- wrist: every hand is re-centred on its own wrist; the face is ignored.
"""

import math
import logging
from dataclasses import replace
from typing import Optional, Tuple

import numpy as np

from ..core.types import (
    CapturedFrame, FaceFrame, FaceLandmarkIndex, HandFrame, LandmarkIndex, Point3,
)

logger = logging.getLogger(__name__)

_REQUIRED_FACE_POINTS = (
    FaceLandmarkIndex.LEFT_EYE_OUTER,
    FaceLandmarkIndex.RIGHT_EYE_OUTER,
    FaceLandmarkIndex.NOSE_TIP,
    FaceLandmarkIndex.FOREHEAD,
    FaceLandmarkIndex.CHIN,
)


def face_reference(face: Optional[FaceFrame]) -> Optional[Tuple[np.ndarray, float]]:
    """Compute (center, scale) from face landmarks.

    The center is the mean of both outer eye corners and the nose tip; its
    vertical component is averaged with the nose bridge when present. The
    scale is the larger of the inter-eye and forehead-to-chin distances
    (measured in the image plane), which stays stable under head rotation.

    Returns:
        None when the mesh lacks a required point or the scale is degenerate.
    """
    if face is None or not face.landmarks:
        return None

    points = {}
    for idx in _REQUIRED_FACE_POINTS:
        point = face.get(idx)
        if point is None:
            return None
        points[idx] = np.array(point, dtype=np.float64)

    center = (points[FaceLandmarkIndex.LEFT_EYE_OUTER]
              + points[FaceLandmarkIndex.RIGHT_EYE_OUTER]
              + points[FaceLandmarkIndex.NOSE_TIP]) / 3.0
    bridge = face.get(FaceLandmarkIndex.NOSE_BRIDGE)
    if bridge is not None:
        center[1] = (center[1] + bridge.y) / 2.0

    eye_span = float(np.linalg.norm(
        points[FaceLandmarkIndex.LEFT_EYE_OUTER][:2] - points[FaceLandmarkIndex.RIGHT_EYE_OUTER][:2]))
    face_height = float(np.linalg.norm(
        points[FaceLandmarkIndex.FOREHEAD][:2] - points[FaceLandmarkIndex.CHIN][:2]))
    scale = max(eye_span, face_height)

    if not math.isfinite(scale) or scale <= 0.0 or not np.all(np.isfinite(center)):
        return None
    return center, scale


def _transform_hand(hand: HandFrame, origin: np.ndarray, scale: float = 1.0) -> HandFrame:
    coords = (hand.to_numpy() - origin) / scale
    return replace(hand, landmarks=[Point3(float(x), float(y), float(z)) for x, y, z in coords])


def normalize_to_face(frame: CapturedFrame) -> CapturedFrame:
    """Face-anchored normalization; unchanged input when no usable face."""
    reference = face_reference(frame.face)
    if reference is None:
        return frame
    center, scale = reference
    return replace(frame, hands=[_transform_hand(h, center, scale) for h in frame.hands])


def normalize_to_wrist(frame: CapturedFrame) -> CapturedFrame:
    """Re-centre each hand on its own wrist landmark."""
    hands = []
    for hand in frame.hands:
        if not hand.landmarks:
            hands.append(hand)
            continue
        wrist = np.array(hand.get(LandmarkIndex.WRIST), dtype=np.float64)
        hands.append(_transform_hand(hand, wrist))
    return replace(frame, hands=hands)


def normalize_frame(frame: CapturedFrame, anchor: str = "face") -> CapturedFrame:
    """Normalize one frame with the given anchor ("face" or "wrist")."""
    if anchor == "wrist":
        return normalize_to_wrist(frame)
    return normalize_to_face(frame)


class FrameNormalizer:
    """Stateless normalizer bound to one anchor.

    Example:
        >>> normalizer = FrameNormalizer(anchor="face")
        >>> normalized = normalizer.normalize(frame)
    """

    def __init__(self, anchor: str = "face"):
        if anchor not in ("face", "wrist"):
            raise ValueError("Unknown normalization anchor: %r" % anchor)
        self.anchor = anchor

    def normalize(self, frame: CapturedFrame) -> CapturedFrame:
        return normalize_frame(frame, self.anchor)
