import logging

import numpy as np
import pytest

from conftest import make_hand
from gesture_garden.models import LandmarkFrame, Point
from gesture_garden.runner import GardenRunner


class FakeDetector:
    def __init__(self, frame=None, error=None):
        self.frame = frame or LandmarkFrame()
        self.error = error
        self.calls = 0

    def detect(self, bgr_frame, timestamp_ms):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.frame


@pytest.fixture
def image():
    return np.zeros((720, 1280, 3), dtype=np.uint8)


def test_first_tick_has_zero_delta(garden, image):
    runner = GardenRunner(garden, FakeDetector())
    assert runner.tick(image, 1.0, 5000.0) == 0.0
    assert runner.tick(image, 2.0, 5016.0) == 16.0


def test_detection_only_runs_on_new_video_frames(garden, image):
    detector = FakeDetector()
    runner = GardenRunner(garden, detector)
    runner.tick(image, 33.0, 0.0)
    runner.tick(image, 33.0, 16.0)
    runner.tick(image, 66.0, 32.0)
    assert detector.calls == 2


def test_pinch_flows_through_to_garden(garden, image):
    frame = LandmarkFrame(hands=[make_hand(index_tip=(0.5, 0.5), pinch_dist=0.03)])
    runner = GardenRunner(garden, FakeDetector(frame))
    runner.tick(image, 1.0, 0.0)
    (seed,) = garden.seeds
    # Spawned at (640, 360), then fell one tick.
    assert (seed.x, seed.y) == (640.0, 365.0)


def test_detection_error_is_logged_and_simulation_continues(garden, image, caplog):
    runner = GardenRunner(garden, FakeDetector(error=RuntimeError("graph failed")))
    garden.interaction.mouth_openness = 0.7
    seed = garden.spawn_seed(Point(10.0, 10.0))

    with caplog.at_level(logging.WARNING, logger="garden.runner"):
        runner.tick(image, 1.0, 0.0)

    assert "graph failed" in caplog.text
    assert seed.y == 15.0
    # Previous interaction state is kept.
    assert garden.interaction.mouth_openness == 0.7


def test_missing_image_still_advances_after_first_frame(garden, image):
    detector = FakeDetector()
    runner = GardenRunner(garden, detector)
    runner.tick(image, 1.0, 0.0)
    seed = garden.spawn_seed(Point(10.0, 10.0))
    runner.tick(None, -1.0, 16.0)
    assert detector.calls == 1
    assert seed.y == 15.0


def test_nothing_happens_before_the_first_image(garden):
    runner = GardenRunner(garden, FakeDetector())
    seed = garden.spawn_seed(Point(10.0, 10.0))
    runner.tick(None, -1.0, 0.0)
    assert seed.y == 10.0
