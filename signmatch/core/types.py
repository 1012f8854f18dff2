"""
Shared domain types for the sign comparison engine.

Centralizes the landmark data model consumed by every stage of the
pipeline (normalize → resample → extract → align → score → match) so
modules never pass raw dictionaries or arrays between each other.

Keyframes arrive from an external hand/face detector. The dict layout
accepted by the ``from_dict`` helpers mirrors the stored keyframe JSON:

    {
        "timestamp": 1712.25,
        "hands": [{"landmarks": [{"x": .., "y": .., "z": ..}, ...],
                   "handedness": "Right"}],
        "face": {"landmarks": [{"x": .., "y": .., "z": ..}, ...]}
    }
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, List, NamedTuple

import numpy as np


NUM_HAND_LANDMARKS = 21


# =============================================================================
# Landmark Indices
# =============================================================================

class LandmarkIndex(IntEnum):
    """Hand landmark indices following MediaPipe convention."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


class FaceLandmarkIndex(IntEnum):
    """The few face-mesh indices the normalizer relies on."""
    NOSE_TIP = 1
    NOSE_BRIDGE = 6
    FOREHEAD = 10
    LEFT_EYE_OUTER = 33
    CHIN = 152
    RIGHT_EYE_OUTER = 263


# =============================================================================
# Landmark Containers
# =============================================================================

class Point3(NamedTuple):
    """A single landmark point.

    Roughly 0..1 image-space units before normalization, unit-free after.
    """
    x: float
    y: float
    z: float = 0.0

    @classmethod
    def from_any(cls, value) -> "Point3":
        """Build from a ``{"x", "y", "z"}`` mapping or an ``[x, y, z]`` sequence."""
        if isinstance(value, dict):
            return cls(float(value["x"]), float(value["y"]), float(value.get("z", 0.0)))
        coords = [float(v) for v in value]
        if len(coords) == 2:
            coords.append(0.0)
        return cls(*coords[:3])

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass
class HandFrame:
    """Landmarks of one detected hand.

    Only valid with exactly 21 points; partial detections are carried as-is
    so callers can drop them, but are never padded.
    """
    landmarks: List[Point3]
    handedness: str = "Unknown"  # "Left", "Right" or "Unknown"

    @property
    def is_valid(self) -> bool:
        return len(self.landmarks) == NUM_HAND_LANDMARKS

    def get(self, index: LandmarkIndex) -> Point3:
        """Get landmark by index."""
        return self.landmarks[index]

    def to_numpy(self) -> np.ndarray:
        """Landmarks as an (N, 3) float array."""
        if not self.landmarks:
            return np.zeros((0, 3), dtype=np.float64)
        return np.array(self.landmarks, dtype=np.float64)

    @classmethod
    def from_dict(cls, d: dict) -> "HandFrame":
        return cls(
            landmarks=[Point3.from_any(p) for p in d.get("landmarks") or []],
            handedness=d.get("handedness") or "Unknown",
        )

    def to_dict(self) -> dict:
        return {
            "landmarks": [p.to_dict() for p in self.landmarks],
            "handedness": self.handedness,
        }


@dataclass
class FaceFrame:
    """Face-mesh landmarks; topology is defined by the external detector."""
    landmarks: List[Point3]

    def get(self, index: int) -> Optional[Point3]:
        """Landmark at ``index`` or None when the mesh is too short."""
        if 0 <= index < len(self.landmarks):
            return self.landmarks[index]
        return None

    @classmethod
    def from_dict(cls, d) -> "FaceFrame":
        # Stored either as {"landmarks": [...]} or as a bare list
        points = d.get("landmarks") if isinstance(d, dict) else d
        return cls(landmarks=[Point3.from_any(p) for p in points or []])

    def to_dict(self) -> dict:
        return {"landmarks": [p.to_dict() for p in self.landmarks]}


@dataclass
class CapturedFrame:
    """One keyframe: every hand (0-2) and optionally the face at a moment in time."""
    timestamp: float = 0.0
    hands: List[HandFrame] = field(default_factory=list)
    face: Optional[FaceFrame] = None

    @property
    def valid_hands(self) -> List[HandFrame]:
        """Hands carrying the full 21-point layout, detection order preserved."""
        return [hand for hand in self.hands if hand.is_valid]

    @property
    def has_valid_hand(self) -> bool:
        return any(hand.is_valid for hand in self.hands)

    @classmethod
    def from_dict(cls, d: dict) -> "CapturedFrame":
        face = d.get("face")
        return cls(
            timestamp=float(d.get("timestamp", 0.0)),
            hands=[HandFrame.from_dict(h) for h in d.get("hands") or []],
            face=FaceFrame.from_dict(face) if face else None,
        )

    def to_dict(self) -> dict:
        out = {
            "timestamp": self.timestamp,
            "hands": [hand.to_dict() for hand in self.hands],
        }
        if self.face is not None:
            out["face"] = self.face.to_dict()
        return out


@dataclass(frozen=True)
class GestureRecording:
    """A stored reference sign. Immutable once recorded."""
    id: str
    name: str
    frames: List[CapturedFrame] = field(default_factory=list)
    duration: float = 0.0

    @classmethod
    def from_dict(cls, d: dict) -> "GestureRecording":
        return cls(
            id=str(d["id"]),
            name=str(d.get("name", d["id"])),
            frames=[CapturedFrame.from_dict(f) for f in d.get("keyframes") or []],
            duration=float(d.get("duration") or 0.0),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "keyframes": [frame.to_dict() for frame in self.frames],
            "duration": self.duration,
        }


@dataclass
class ComparisonResult:
    """Outcome of comparing a candidate against one recorded sign."""
    sign_id: str
    sign_name: str
    similarity: float
    is_match: bool

    def __repr__(self):
        return "ComparisonResult(%s, sim=%.3f, match=%s)" % (
            self.sign_name, self.similarity, self.is_match)
