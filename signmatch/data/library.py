"""
Sign Library Files
===================

JSON persistence for recorded signs and captured keyframe sequences.

Library file: a list of sign records (or ``{"signs": [...]}``), each
``{"id", "name", "keyframes": [...], "duration"}``. Sequence file: a bare
keyframe list (or ``{"keyframes": [...]}``).
"""

import os
import json
import logging
from typing import List

from ..core.errors import LibraryFormatError
from ..core.types import CapturedFrame, GestureRecording

logger = logging.getLogger(__name__)


def _read_json(path: str):
    try:
        with open(path, "r") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise LibraryFormatError("File not found: %s" % path) from e
    except json.JSONDecodeError as e:
        raise LibraryFormatError("Invalid JSON in %s: %s" % (path, e)) from e


def load_library(path: str) -> List[GestureRecording]:
    """Load recorded signs from a JSON library file."""
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get("signs")
    if not isinstance(data, list):
        raise LibraryFormatError("%s: expected a list of sign records" % path)

    recordings = []
    for i, record in enumerate(data):
        try:
            recordings.append(GestureRecording.from_dict(record))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise LibraryFormatError("%s: sign record #%d is malformed: %r" % (path, i, e)) from e

    logger.info("Loaded %d recorded sign(s) from %s", len(recordings), path)
    return recordings


def load_sequence(path: str) -> List[CapturedFrame]:
    """Load a captured keyframe sequence from a JSON file."""
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get("keyframes")
    if not isinstance(data, list):
        raise LibraryFormatError("%s: expected a list of keyframes" % path)

    try:
        frames = [CapturedFrame.from_dict(frame) for frame in data]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise LibraryFormatError("%s: malformed keyframe: %r" % (path, e)) from e

    logger.info("Loaded %d keyframe(s) from %s", len(frames), path)
    return frames


def save_library(recordings: List[GestureRecording], path: str) -> None:
    """Write recorded signs to a JSON library file."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w") as f:
        json.dump([r.to_dict() for r in recordings], f, indent=2)
    logger.info("Saved %d recorded sign(s) to %s", len(recordings), path)
