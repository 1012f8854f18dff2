"""
Tests for Landmark Data Model
==============================
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from signmatch.core.types import (
    CapturedFrame, ComparisonResult, FaceFrame, GestureRecording, HandFrame,
    LandmarkIndex, Point3,
)
from mock_frames import create_mock_hand, create_mock_face


class TestPoint3:
    """Test suite for Point3."""

    def test_from_mapping(self):
        p = Point3.from_any({"x": 0.1, "y": 0.2, "z": 0.3})
        assert p == Point3(0.1, 0.2, 0.3)

    def test_from_mapping_without_z(self):
        p = Point3.from_any({"x": 1, "y": 2})
        assert p.z == 0.0

    def test_from_sequence(self):
        assert Point3.from_any([1, 2, 3]) == Point3(1.0, 2.0, 3.0)
        assert Point3.from_any((1, 2)) == Point3(1.0, 2.0, 0.0)


class TestHandFrame:
    """Test suite for HandFrame."""

    def test_complete_hand_is_valid(self):
        hand = create_mock_hand()
        assert len(hand.landmarks) == 21
        assert hand.is_valid

    def test_partial_hand_is_invalid(self):
        hand = HandFrame(landmarks=create_mock_hand().landmarks[:15])
        assert not hand.is_valid

    def test_to_numpy(self):
        arr = create_mock_hand().to_numpy()
        assert arr.shape == (21, 3)
        assert isinstance(arr, np.ndarray)

    def test_empty_to_numpy(self):
        assert HandFrame(landmarks=[]).to_numpy().shape == (0, 3)

    def test_get_landmark(self):
        hand = create_mock_hand(base_x=0.4, base_y=0.7)
        wrist = hand.get(LandmarkIndex.WRIST)
        assert wrist.x == pytest.approx(0.4)
        assert wrist.y == pytest.approx(0.7)

    def test_default_handedness(self):
        hand = HandFrame.from_dict({"landmarks": [[0, 0, 0]] * 21})
        assert hand.handedness == "Unknown"


class TestCapturedFrame:
    """Test suite for CapturedFrame."""

    def test_valid_hands_drops_partial(self):
        full = create_mock_hand()
        partial = HandFrame(landmarks=full.landmarks[:10], handedness="Left")
        frame = CapturedFrame(hands=[partial, full])

        assert frame.valid_hands == [full]
        assert frame.has_valid_hand

    def test_no_hands(self):
        frame = CapturedFrame(timestamp=1.0)
        assert not frame.has_valid_hand
        assert frame.valid_hands == []

    def test_from_dict_keyframe_shape(self):
        data = {
            "timestamp": 12.5,
            "hands": [{
                "landmarks": [{"x": 0.1 * i, "y": 0.2, "z": 0.0} for i in range(21)],
                "handedness": "Left",
            }],
            "face": {"landmarks": [{"x": 0.5, "y": 0.5, "z": 0.0}] * 5},
        }
        frame = CapturedFrame.from_dict(data)

        assert frame.timestamp == 12.5
        assert frame.hands[0].handedness == "Left"
        assert frame.hands[0].landmarks[3].x == pytest.approx(0.3)
        assert len(frame.face.landmarks) == 5

    def test_from_dict_missing_fields(self):
        frame = CapturedFrame.from_dict({"hands": None})
        assert frame.timestamp == 0.0
        assert frame.hands == []
        assert frame.face is None

    def test_to_dict_preserves_data(self):
        frame = CapturedFrame(timestamp=3.0, hands=[create_mock_hand()], face=create_mock_face())
        restored = CapturedFrame.from_dict(frame.to_dict())
        assert restored == frame


class TestFaceFrame:
    """Test suite for FaceFrame."""

    def test_get_out_of_range(self):
        face = FaceFrame(landmarks=[Point3(0, 0, 0)] * 3)
        assert face.get(2) is not None
        assert face.get(10) is None

    def test_from_bare_list(self):
        face = FaceFrame.from_dict([[0.1, 0.2, 0.3]])
        assert face.landmarks == [Point3(0.1, 0.2, 0.3)]


class TestGestureRecording:
    """Test suite for GestureRecording."""

    def test_from_dict(self):
        rec = GestureRecording.from_dict({
            "id": "abc",
            "name": "hola",
            "keyframes": [{"timestamp": 0, "hands": []}],
            "duration": 2.5,
        })
        assert rec.id == "abc"
        assert rec.name == "hola"
        assert len(rec.frames) == 1
        assert rec.duration == 2.5

    def test_name_defaults_to_id(self):
        rec = GestureRecording.from_dict({"id": 7})
        assert rec.name == "7"
        assert rec.frames == []

    def test_is_immutable(self):
        rec = GestureRecording(id="a", name="b")
        with pytest.raises(Exception):
            rec.name = "c"


class TestComparisonResult:

    def test_repr(self):
        r = ComparisonResult(sign_id="1", sign_name="hola", similarity=0.9, is_match=True)
        assert "hola" in repr(r)
        assert "0.900" in repr(r)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
