"""
Finger-state utility.

Given the 21 MediaPipe hand landmarks (normalised), determine which of the
five fingers are currently *extended*, and how close the thumb and index
fingertips are to each other.

Detection approach
------------------
* A finger is extended when the distance from its *tip* to the *wrist* is
  greater than the distance from its *base joint* to the wrist.  The thumb
  uses its MCP joint, the other four fingers their MCP knuckles.  This is a
  simple heuristic that works regardless of hand orientation.
* Only x and y are used; z is relative depth and too noisy.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from gesture_garden.config import (
    FINGER_JOINTS,
    INDEX_TIP,
    PINCH_DISTANCE_THRESHOLD,
    PINCH_PROXIMITY_START,
    THUMB_TIP,
    WRIST,
)


@dataclass
class FingerState:
    """Boolean state for each finger."""

    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool

    def count_extended(self) -> int:
        return sum([self.thumb, self.index, self.middle, self.ring, self.pinky])

    @property
    def open_palm(self) -> bool:
        """True only when all five fingers are extended."""
        return self.count_extended() == 5


def _dist(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two 2-D points."""
    return float(np.linalg.norm(a - b))


def get_finger_state(landmarks: np.ndarray) -> FingerState:
    """Determine which fingers are extended.

    Parameters
    ----------
    landmarks : np.ndarray
        Shape ``(21, 2)`` or ``(21, 3)`` normalised landmark array.

    Returns
    -------
    FingerState
    """
    lm = np.asarray(landmarks, dtype=np.float64)[:, :2]
    wrist = lm[WRIST]

    extended = {
        name: _dist(lm[tip], wrist) > _dist(lm[joint], wrist)
        for name, (tip, joint) in FINGER_JOINTS.items()
    }
    return FingerState(**extended)


def pinch_distance(landmarks: np.ndarray) -> float:
    """Planar distance between the thumb tip and the index fingertip."""
    lm = np.asarray(landmarks, dtype=np.float64)
    return _dist(lm[THUMB_TIP, :2], lm[INDEX_TIP, :2])


def pinch_proximity(distance: float) -> float:
    """Map a thumb-index distance to a 0..1 closeness score.

    0 at ``PINCH_PROXIMITY_START`` or farther, 1 at the pinch threshold or
    closer.
    """
    span = PINCH_PROXIMITY_START - PINCH_DISTANCE_THRESHOLD
    return float(np.clip((PINCH_PROXIMITY_START - distance) / span, 0.0, 1.0))
