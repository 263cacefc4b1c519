"""
Configuration constants for the gesture garden.

All tunable thresholds, cooldowns, physics constants, and palette entries
live here so they can be adjusted in one place without touching the
interaction or simulation logic.  A handful of runtime settings can be
overridden through environment variables (or a local ``.env`` file).
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# MediaPipe landmarker configuration
# ---------------------------------------------------------------------------
MP_MAX_NUM_HANDS = 2
MP_MAX_NUM_FACES = 1
MP_MIN_DETECTION_CONFIDENCE = 0.5
MP_MIN_TRACKING_CONFIDENCE = 0.5

_MODEL_DIR = os.path.join(os.path.dirname(__file__), "models")
FACE_MODEL_PATH = os.environ.get(
    "FACE_MODEL_PATH", os.path.join(_MODEL_DIR, "face_landmarker.task")
)
HAND_MODEL_PATH = os.environ.get(
    "HAND_MODEL_PATH", os.path.join(_MODEL_DIR, "hand_landmarker.task")
)

# ---------------------------------------------------------------------------
# MediaPipe face landmark indices (Face Mesh topology)
# ---------------------------------------------------------------------------
FACE_TOP = 10
UPPER_LIP = 13
LOWER_LIP = 14
FACE_BOTTOM = 152

# Face sets shorter than this cannot be interpreted.
FACE_MIN_LANDMARKS = FACE_BOTTOM + 1

# ---------------------------------------------------------------------------
# MediaPipe hand landmark indices
# ---------------------------------------------------------------------------
WRIST = 0
THUMB_MCP = 2
THUMB_TIP = 4
INDEX_MCP = 5
INDEX_TIP = 8
MIDDLE_MCP = 9
MIDDLE_TIP = 12
RING_MCP = 13
RING_TIP = 16
PINKY_MCP = 17
PINKY_TIP = 20

# (tip, base joint) pairs compared against the wrist for the extension test.
FINGER_JOINTS = {
    "thumb": (THUMB_TIP, THUMB_MCP),
    "index": (INDEX_TIP, INDEX_MCP),
    "middle": (MIDDLE_TIP, MIDDLE_MCP),
    "ring": (RING_TIP, RING_MCP),
    "pinky": (PINKY_TIP, PINKY_MCP),
}

# ---------------------------------------------------------------------------
# Mouth openness
# ---------------------------------------------------------------------------
# Resting lip gap as a fraction of face height; subtracted before scaling.
MOUTH_BASELINE = 0.02
MOUTH_GAIN = 10.0

# ---------------------------------------------------------------------------
# Pinch detection
# ---------------------------------------------------------------------------
# Normalised thumb-index distance below which the hand counts as pinching.
PINCH_DISTANCE_THRESHOLD = 0.05

# Distance at which the proximity meter starts filling (proximity = 0).
PINCH_PROXIMITY_START = 0.15

# ---------------------------------------------------------------------------
# Debounce timings (milliseconds)
# ---------------------------------------------------------------------------
PINCH_COOLDOWN_MS = 500.0

# How long an open palm must be held before every plant is cleared.
CLEAR_HOLD_MS = 5000.0

# Releasing the palm drains the clear timer this many times faster.
CLEAR_DECAY_FACTOR = 2.0

# ---------------------------------------------------------------------------
# Seed physics (pixels, per tick)
# ---------------------------------------------------------------------------
SEED_INITIAL_VY = 5.0
SEED_GRAVITY = 0.5

# Seeds land this many pixels above the bottom edge of the canvas.
GROUND_OFFSET = 20.0

# ---------------------------------------------------------------------------
# Plant growth
# ---------------------------------------------------------------------------
PLANT_MIN_HEIGHT = 200.0
PLANT_HEIGHT_RANGE = 150.0
PLANT_SHAPE_SEED_RANGE = 100.0

# Mouth openness below this value freezes growth.
GROWTH_THRESHOLD = 0.05
GROWTH_RATE = 0.001
GROWTH_SPEED = 7.5

# ---------------------------------------------------------------------------
# Particles (pixels, per tick)
# ---------------------------------------------------------------------------
PARTICLE_GRAVITY = 0.2
PARTICLE_DECAY = 0.02

FLOWER_BURST_COUNT = 20
STEM_BURST_COUNT = 10

# Horizontal sway of the flower head, scaled by cos(plant.seed).
FLOWER_HEAD_SWAY = 10.0

# ---------------------------------------------------------------------------
# Palette (hex strings, as shown on screen)
# ---------------------------------------------------------------------------
DEFAULT_FLOWER_COLOR = "#eab308"   # amber
STEM_COLOR = "#4ade80"
LEAF_COLOR = "#22c55e"
STEM_PARTICLE_COLOR = "#22c55e"

# ---------------------------------------------------------------------------
# Overlay / visualisation
# ---------------------------------------------------------------------------
OVERLAY_FONT_SCALE = 0.55
OVERLAY_THICKNESS = 1
OVERLAY_PINCH_RING_RADIUS = 20
OVERLAY_HUD_WIDTH = 256
OVERLAY_PANEL_WIDTH = 320

HEIGHT_FACTOR_STEP = 0.05

# ---------------------------------------------------------------------------
# Webcam
# ---------------------------------------------------------------------------
CAMERA_INDEX = 0
CAMERA_WIDTH = 1280
CAMERA_HEIGHT = 720

# Consecutive failed reads before the capture loop gives up.
CAMERA_MAX_FAILED_READS = 100

# Optional camera source override (device index or stream URL).
CAMERA_SRC = os.environ.get("CAMERA_SRC")

HEADLESS = os.environ.get("HEADLESS", "0") in ("1", "true", "True")

# Initial plant configuration.
DEFAULT_SPECIES = os.environ.get("GARDEN_SPECIES", "Random")
DEFAULT_HEIGHT_FACTOR = os.environ.get("GARDEN_HEIGHT_FACTOR", "1.0")
