"""Shared landmark builders and fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from gesture_garden.config import (
    FACE_BOTTOM,
    FACE_TOP,
    INDEX_MCP,
    INDEX_TIP,
    LOWER_LIP,
    MIDDLE_MCP,
    MIDDLE_TIP,
    PINKY_MCP,
    PINKY_TIP,
    RING_MCP,
    RING_TIP,
    THUMB_MCP,
    THUMB_TIP,
    UPPER_LIP,
    WRIST,
)
from gesture_garden.garden import Garden
from gesture_garden.models import LandmarkFrame

_OTHER_FINGERS = {
    "middle": (MIDDLE_MCP, MIDDLE_TIP, 0.02),
    "ring": (RING_MCP, RING_TIP, 0.04),
    "pinky": (PINKY_MCP, PINKY_TIP, 0.06),
}


def make_hand(
    index_tip: tuple[float, float] = (0.5, 0.5),
    pinch_dist: float = 0.2,
    curled: tuple[str, ...] = ("middle", "ring", "pinky"),
) -> np.ndarray:
    """Build a (21, 3) hand with the index fingertip at *index_tip*.

    The wrist sits 0.3 below the index tip.  The thumb tip is *pinch_dist*
    to the left of the index tip; thumb and index are always extended.
    Fingers named in *curled* fold back towards the wrist.
    """
    ix, iy = index_tip
    wx, wy = ix, iy + 0.3
    lm = np.zeros((21, 3))
    lm[:, 0], lm[:, 1] = wx, wy

    lm[WRIST] = (wx, wy, 0.0)
    lm[INDEX_MCP] = (ix, iy + 0.2, 0.0)
    lm[INDEX_TIP] = (ix, iy, 0.0)
    lm[THUMB_MCP] = (wx - 0.05, wy - 0.1, 0.0)
    lm[THUMB_TIP] = (ix - pinch_dist, iy, 0.0)

    for name, (mcp, tip, dx) in _OTHER_FINGERS.items():
        lm[mcp] = (wx + dx, wy - 0.1, 0.0)
        tip_y = wy - 0.05 if name in curled else wy - 0.25
        lm[tip] = (wx + dx, tip_y, 0.0)
    return lm


def make_open_palm(index_tip: tuple[float, float] = (0.3, 0.4)) -> np.ndarray:
    return make_hand(index_tip=index_tip, pinch_dist=0.2, curled=())


def make_face(mouth_gap: float, face_height: float = 0.4) -> np.ndarray:
    """Build a (468, 3) face whose lips are *mouth_gap* apart."""
    lm = np.full((468, 3), 0.5)
    lm[:, 2] = 0.0
    lm[FACE_TOP, 1] = 0.3
    lm[FACE_BOTTOM, 1] = 0.3 + face_height
    lm[UPPER_LIP, 1] = 0.5
    lm[LOWER_LIP, 1] = 0.5 + mouth_gap
    return lm


def face_for_openness(openness: float, face_height: float = 0.4) -> np.ndarray:
    """Inverse of the mouth-openness formula for values inside (0, 1)."""
    return make_face((openness / 10 + 0.02) * face_height, face_height)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def garden(rng: np.random.Generator) -> Garden:
    return Garden(rng=rng)


@pytest.fixture
def pinch_frame() -> LandmarkFrame:
    return LandmarkFrame(hands=[make_hand(index_tip=(0.5, 0.5), pinch_dist=0.03)])


@pytest.fixture
def palm_frame() -> LandmarkFrame:
    return LandmarkFrame(hands=[make_open_palm()])
