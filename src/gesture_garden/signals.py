"""
Signal interpreter.

Turns one tick's raw landmark sets into the semantic signals the rest of
the garden reacts to:

* **Mouth openness** (0..1): lip gap normalised by face height, so the
  value does not depend on how far the user sits from the camera.
* **Open palm**: any hand with all five fingers extended.
* **Pinch**: thumb and index fingertips touching.  Only evaluated when no
  hand shows an open palm; the open palm always wins.

The interpreter keeps no state between ticks.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from gesture_garden.config import (
    FACE_BOTTOM,
    FACE_MIN_LANDMARKS,
    FACE_TOP,
    INDEX_TIP,
    LOWER_LIP,
    MOUTH_BASELINE,
    MOUTH_GAIN,
    PINCH_DISTANCE_THRESHOLD,
    UPPER_LIP,
)
from gesture_garden.finger_state import get_finger_state, pinch_distance, pinch_proximity
from gesture_garden.models import LandmarkFrame, Point


@dataclass
class FrameSignals:
    """Instantaneous gesture signals for a single tick."""

    mouth_openness: float = 0.0
    is_pinching: bool = False
    pinch_location: Point | None = None
    pinch_proximity: float = 0.0
    any_palm_open: bool = False


def mouth_openness(face: np.ndarray | None) -> float:
    """Return how far the mouth is open, 0 (closed or no face) to 1."""
    if face is None:
        return 0.0
    lm = np.asarray(face, dtype=np.float64)
    if lm.shape[0] < FACE_MIN_LANDMARKS:
        return 0.0

    face_height = abs(lm[FACE_TOP, 1] - lm[FACE_BOTTOM, 1])
    if face_height <= 0.0:
        return 0.0
    mouth_dist = abs(lm[UPPER_LIP, 1] - lm[LOWER_LIP, 1])
    return float(np.clip((mouth_dist / face_height - MOUTH_BASELINE) * MOUTH_GAIN, 0.0, 1.0))


def interpret_frame(frame: LandmarkFrame, width: int, height: int) -> FrameSignals:
    """Interpret *frame* on a ``width`` x ``height`` pixel canvas.

    When several hands pinch at once the lowest-index hand decides the
    pinch location.
    """
    signals = FrameSignals(mouth_openness=mouth_openness(frame.face))

    hands = [np.asarray(h, dtype=np.float64) for h in frame.hands]

    # Pass 1: any open palm suppresses pinching for the whole tick.
    signals.any_palm_open = any(get_finger_state(h).open_palm for h in hands)
    if signals.any_palm_open:
        return signals

    # Pass 2: pinch proximity and location.
    for hand in hands:
        dist = pinch_distance(hand)
        signals.pinch_proximity = max(signals.pinch_proximity, pinch_proximity(dist))

        if dist < PINCH_DISTANCE_THRESHOLD and not signals.is_pinching:
            signals.is_pinching = True
            signals.pinch_location = Point(
                x=float(hand[INDEX_TIP, 0] * width),
                y=float(hand[INDEX_TIP, 1] * height),
            )

    return signals
