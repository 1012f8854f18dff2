"""
Synthetic landmark builders shared by the test suites.
"""

import math
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from signmatch.core.types import (
    CapturedFrame, FaceFrame, FaceLandmarkIndex, GestureRecording, HandFrame, Point3,
)

FACE_MESH_SIZE = 468


def create_mock_hand(finger_states=None, base_x=0.5, base_y=0.6, scale=1.0,
                     handedness="Right"):
    """
    Create a mock 21-point hand.

    Args:
        finger_states: Dict of finger -> "up" or "down"
        base_x, base_y: Wrist position
        scale: Hand size multiplier
    """
    finger_states = finger_states or {}
    points = [Point3(base_x, base_y, 0.0)]

    # Thumb (indices 1-4)
    thumb_offset = -0.15 if finger_states.get("thumb", "down") == "up" else -0.05
    for frac, dy in ((0.3, 0.02), (0.6, 0.04), (0.8, 0.06), (1.0, 0.08)):
        points.append(Point3(base_x + thumb_offset * frac * scale, base_y - dy * scale, 0.0))

    # Index, middle, ring, pinky (indices 5-20)
    fingers = (
        ("index", -0.05, (0.08, 0.14, 0.20), 0.28, 0.10),
        ("middle", 0.0, (0.09, 0.16, 0.23), 0.32, 0.11),
        ("ring", 0.05, (0.08, 0.14, 0.20), 0.28, 0.10),
        ("pinky", 0.10, (0.06, 0.11, 0.16), 0.22, 0.08),
    )
    for name, x_off, joints, tip_up, tip_down in fingers:
        tip = tip_up if finger_states.get(name, "down") == "up" else tip_down
        for y_off in joints + (tip,):
            points.append(Point3(base_x + x_off * scale, base_y - y_off * scale, 0.01 * y_off))

    return HandFrame(landmarks=points, handedness=handedness)


def create_mock_face(center_x=0.5, center_y=0.3, size=0.2):
    """
    Create a mock face mesh with the normalizer's reference points set.

    Eye corners sit ``size / 2`` either side of the centre; forehead and chin
    are ``size`` apart vertically.
    """
    points = [Point3(center_x, center_y, 0.0)] * FACE_MESH_SIZE
    half = size / 2.0
    points[FaceLandmarkIndex.LEFT_EYE_OUTER] = Point3(center_x - half / 2, center_y, 0.0)
    points[FaceLandmarkIndex.RIGHT_EYE_OUTER] = Point3(center_x + half / 2, center_y, 0.0)
    points[FaceLandmarkIndex.NOSE_TIP] = Point3(center_x, center_y, 0.0)
    points[FaceLandmarkIndex.NOSE_BRIDGE] = Point3(center_x, center_y, 0.0)
    points[FaceLandmarkIndex.FOREHEAD] = Point3(center_x, center_y - half, 0.0)
    points[FaceLandmarkIndex.CHIN] = Point3(center_x, center_y + half, 0.0)
    return FaceFrame(landmarks=list(points))


def create_mock_sequence(n_frames, start=(0.5, 0.6), end=(0.5, 0.6), finger_states=None,
                         two_hands=False, face=None, wave=0.0):
    """
    Create a keyframe sequence with the wrist moving linearly from start to end.

    Args:
        wave: Amplitude of a vertical sine added along the path
    """
    frames = []
    for i in range(n_frames):
        t = i / (n_frames - 1) if n_frames > 1 else 0.0
        x = start[0] + (end[0] - start[0]) * t
        y = start[1] + (end[1] - start[1]) * t + wave * math.sin(2 * math.pi * t)
        hands = [create_mock_hand(finger_states, base_x=x, base_y=y)]
        if two_hands:
            hands.append(create_mock_hand(finger_states, base_x=x - 0.3, base_y=y,
                                          handedness="Left"))
        frames.append(CapturedFrame(timestamp=i / 30.0, hands=hands, face=face))
    return frames


def create_recording(sign_id, frames, name=None):
    return GestureRecording(id=sign_id, name=name or sign_id, frames=frames)


def empty_frames(n_frames):
    """Frames with no hands at all."""
    return [CapturedFrame(timestamp=i / 30.0) for i in range(n_frames)]
