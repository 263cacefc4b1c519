"""
Entry point: webcam capture loop.

Wires together:
  VideoCapture  ->  LandmarkDetector  ->  Garden (signals, debounce, simulation)
                                      ->  Overlay

Keys: ``h`` toggles the control panel, ``0`` picks random species, ``1``-``5``
pick a species, ``+``/``-`` change the height factor, ``q``/Esc quits.
"""

from __future__ import annotations

import logging
import sys
import time

import cv2
from pydantic import ValidationError

from gesture_garden.config import (
    CAMERA_HEIGHT,
    CAMERA_INDEX,
    CAMERA_MAX_FAILED_READS,
    CAMERA_SRC,
    CAMERA_WIDTH,
    DEFAULT_HEIGHT_FACTOR,
    DEFAULT_SPECIES,
    HEADLESS,
    HEIGHT_FACTOR_STEP,
)
from gesture_garden.garden import Garden
from gesture_garden.landmarks import LandmarkDetector
from gesture_garden.models import RANDOM, PlantConfig, Species, parse_species_selection
from gesture_garden.overlay import draw_garden
from gesture_garden.runner import GardenRunner

logger = logging.getLogger("garden.main")

_WINDOW_NAME = "Gesture Garden"
_SPECIES_KEYS = {ord(str(i + 1)): s for i, s in enumerate(Species)}


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(name)-24s  %(levelname)-7s  %(message)s",
        datefmt="%H:%M:%S",
    )


def _initial_config() -> PlantConfig:
    try:
        return PlantConfig(
            selected_species=parse_species_selection(DEFAULT_SPECIES),
            growth_height_factor=float(DEFAULT_HEIGHT_FACTOR),
        )
    except (ValueError, ValidationError) as exc:
        logger.warning("Ignoring invalid garden settings from environment: %s", exc)
        return PlantConfig()


def _camera_source() -> int | str:
    # Allow overriding the camera via CAMERA_SRC: a device number or a
    # stream URL / device path.
    if CAMERA_SRC is None:
        return CAMERA_INDEX
    try:
        return int(CAMERA_SRC)
    except ValueError:
        return CAMERA_SRC


def handle_key(key: int, garden: Garden, show_panel: bool) -> tuple[bool, bool]:
    """Apply a keypress.  Returns ``(keep_running, show_panel)``."""
    if key in (ord("q"), 27):
        return False, show_panel
    if key in (ord("h"), ord("H")):
        return True, not show_panel
    if key == ord("0"):
        garden.select_species(RANDOM)
    elif key in _SPECIES_KEYS:
        garden.select_species(_SPECIES_KEYS[key])
    elif key in (ord("+"), ord("=")):
        factor = min(1.0, garden.config.growth_height_factor + HEIGHT_FACTOR_STEP)
        garden.set_height_factor(round(factor, 2))
    elif key in (ord("-"), ord("_")):
        factor = max(0.0, garden.config.growth_height_factor - HEIGHT_FACTOR_STEP)
        garden.set_height_factor(round(factor, 2))
    return True, show_panel


def run() -> int:
    """Run the garden until the user quits.  Returns the process exit code."""
    logger.info("Initialising vision models...")
    try:
        detector = LandmarkDetector()
    except RuntimeError as exc:
        logger.error("Error loading vision models: %s", exc)
        return 1

    camera_src = _camera_source()
    cap = cv2.VideoCapture(camera_src)
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAMERA_WIDTH)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAMERA_HEIGHT)
    if not cap.isOpened():
        logger.error("Camera access denied or unavailable: %s", camera_src)
        detector.close()
        return 1
    logger.info("Camera opened: %s", camera_src)

    garden = Garden(config=_initial_config())
    runner = GardenRunner(garden, detector)
    show_panel = True
    frame_count = 0
    failed_reads = 0
    exit_code = 0

    logger.info("Gesture garden started. Press 'q' to quit, 'h' to toggle the panel.")

    try:
        while True:
            ret, frame = cap.read()
            now_ms = time.perf_counter() * 1000.0
            if not ret or frame is None:
                failed_reads += 1
                if failed_reads >= CAMERA_MAX_FAILED_READS:
                    logger.error(
                        "No frames from camera after %d attempts, stopping: %s",
                        failed_reads,
                        camera_src,
                    )
                    exit_code = 1
                    break
                runner.tick(None, -1.0, now_ms)
                time.sleep(0.01)
                continue

            failed_reads = 0
            frame_count += 1
            # Some backends report 0 for live devices; fall back to a counter.
            video_ts = cap.get(cv2.CAP_PROP_POS_MSEC) or float(frame_count)

            # Mirror the frame so it feels natural (like a mirror).
            frame = cv2.flip(frame, 1)

            runner.tick(frame, video_ts, now_ms)
            frame = draw_garden(frame, garden, show_panel=show_panel)

            if HEADLESS:
                time.sleep(0.01)
                continue

            cv2.imshow(_WINDOW_NAME, frame)
            key = cv2.waitKey(1) & 0xFF
            if key != 0xFF:
                running, show_panel = handle_key(key, garden, show_panel)
                if not running:
                    break
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        detector.close()
        cap.release()
        if not HEADLESS:
            cv2.destroyAllWindows()
    return exit_code


def main() -> None:
    _configure_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
