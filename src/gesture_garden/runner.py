"""
Per-tick driver.

Decides whether detection should run this tick (only when the camera has
produced a new frame), absorbs detection failures, and always advances the
simulation so the garden keeps moving while the vision models hiccup.
"""

from __future__ import annotations

import logging
from typing import Protocol

import numpy as np

from gesture_garden.garden import Garden
from gesture_garden.models import LandmarkFrame

logger = logging.getLogger("garden.runner")


class Detector(Protocol):
    def detect(self, bgr_frame: np.ndarray, timestamp_ms: float) -> LandmarkFrame: ...


class GardenRunner:
    """Feeds camera frames through a detector into a :class:`Garden`."""

    def __init__(self, garden: Garden, detector: Detector) -> None:
        self.garden = garden
        self.detector = detector
        self._last_video_ts: float | None = None
        self._last_tick_ms: float | None = None
        self._size: tuple[int, int] | None = None

    def tick(
        self,
        image: np.ndarray | None,
        video_ts_ms: float,
        now_ms: float,
    ) -> float:
        """Run one tick and return the elapsed milliseconds used for it.

        *image* is ``None`` when the camera has no frame ready.  Detection is
        skipped when *video_ts_ms* has not changed since the last detection.
        """
        delta_ms = 0.0 if self._last_tick_ms is None else now_ms - self._last_tick_ms
        self._last_tick_ms = now_ms

        if image is not None:
            self._size = image.shape[:2]

        if image is not None and video_ts_ms != self._last_video_ts:
            self._last_video_ts = video_ts_ms
            height, width = self._size
            try:
                frame = self.detector.detect(image, now_ms)
                self.garden.interact(frame, width, height, delta_ms)
            except Exception as exc:
                logger.warning("Detection error (skipping frame): %s", exc)

        # The canvas size is unknown until the first frame arrives.
        if self._size is not None:
            self.garden.advance(self._size[0], delta_ms)
        return delta_ms
