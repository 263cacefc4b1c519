"""
MediaPipe face + hand landmarker wrapper (Tasks API, mediapipe >= 0.10).

Accepts a BGR frame from OpenCV, runs face and hand landmark detection in
VIDEO mode, and returns the normalised landmarks as a
:class:`~gesture_garden.models.LandmarkFrame`.
"""

from __future__ import annotations

import logging
import os

import mediapipe as mp
import numpy as np

from gesture_garden.config import (
    FACE_MODEL_PATH,
    HAND_MODEL_PATH,
    MP_MAX_NUM_FACES,
    MP_MAX_NUM_HANDS,
    MP_MIN_DETECTION_CONFIDENCE,
    MP_MIN_TRACKING_CONFIDENCE,
)
from gesture_garden.models import LandmarkFrame

logger = logging.getLogger("garden.landmarks")

BaseOptions = mp.tasks.BaseOptions
FaceLandmarker = mp.tasks.vision.FaceLandmarker
FaceLandmarkerOptions = mp.tasks.vision.FaceLandmarkerOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
RunningMode = mp.tasks.vision.RunningMode


def _to_array(mp_landmarks: list) -> np.ndarray:
    return np.array([(lm.x, lm.y, lm.z) for lm in mp_landmarks], dtype=np.float64)


class LandmarkDetector:
    """Runs both landmarkers on the same frame.

    Raises ``RuntimeError`` if either model cannot be loaded.
    """

    def __init__(
        self,
        face_model_path: str = FACE_MODEL_PATH,
        hand_model_path: str = HAND_MODEL_PATH,
    ) -> None:
        for path in (face_model_path, hand_model_path):
            if not os.path.isfile(path):
                raise RuntimeError(f"Landmarker model not found: {path}")

        try:
            self._face = FaceLandmarker.create_from_options(
                FaceLandmarkerOptions(
                    base_options=BaseOptions(model_asset_path=face_model_path),
                    running_mode=RunningMode.VIDEO,
                    num_faces=MP_MAX_NUM_FACES,
                    min_face_detection_confidence=MP_MIN_DETECTION_CONFIDENCE,
                    min_tracking_confidence=MP_MIN_TRACKING_CONFIDENCE,
                )
            )
            self._hands = HandLandmarker.create_from_options(
                HandLandmarkerOptions(
                    base_options=BaseOptions(model_asset_path=hand_model_path),
                    running_mode=RunningMode.VIDEO,
                    num_hands=MP_MAX_NUM_HANDS,
                    min_hand_detection_confidence=MP_MIN_DETECTION_CONFIDENCE,
                    min_tracking_confidence=MP_MIN_TRACKING_CONFIDENCE,
                )
            )
        except (RuntimeError, ValueError) as exc:
            raise RuntimeError(f"Could not load vision models: {exc}") from exc

        # The VIDEO running mode requires a strictly increasing timestamp.
        self._last_ts_ms: int = -1
        logger.info("Vision models loaded")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def detect(self, bgr_frame: np.ndarray, timestamp_ms: float) -> LandmarkFrame:
        """Run both landmarkers on a BGR frame."""
        ts = max(int(timestamp_ms), self._last_ts_ms + 1)
        self._last_ts_ms = ts

        # Convert BGR -> RGB and wrap in a MediaPipe Image.
        rgb = np.ascontiguousarray(bgr_frame[:, :, ::-1])
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)

        face_result = self._face.detect_for_video(mp_image, ts)
        hand_result = self._hands.detect_for_video(mp_image, ts)

        face = _to_array(face_result.face_landmarks[0]) if face_result.face_landmarks else None
        hands = [_to_array(lms) for lms in hand_result.hand_landmarks]
        return LandmarkFrame(face=face, hands=hands)

    def close(self) -> None:
        """Release MediaPipe resources."""
        self._face.close()
        self._hands.close()
