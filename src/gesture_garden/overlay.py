"""
Visual overlay renderer.

Draws seeds, plants, explosion particles, the pinch indicator, the HUD and
the optional control panel onto the OpenCV frame.  Everything here only
reads garden state.
"""

from __future__ import annotations

import math

import cv2
import numpy as np

from gesture_garden.config import (
    DEFAULT_FLOWER_COLOR,
    FLOWER_HEAD_SWAY,
    LEAF_COLOR,
    OVERLAY_FONT_SCALE,
    OVERLAY_HUD_WIDTH,
    OVERLAY_PANEL_WIDTH,
    OVERLAY_PINCH_RING_RADIUS,
    OVERLAY_THICKNESS,
    STEM_COLOR,
)
from gesture_garden.garden import Garden, HudState
from gesture_garden.models import RANDOM, Particle, Plant, PlantConfig, Seed, Species

Color = tuple[int, int, int]

_FONT = cv2.FONT_HERSHEY_SIMPLEX

# Number of straight segments used to approximate each curve.
_CURVE_SEGMENTS = 16


def hex_to_bgr(value: str) -> Color:
    """Convert ``#rrggbb`` to an OpenCV BGR tuple."""
    value = value.lstrip("#")
    r, g, b = int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
    return (b, g, r)


def adjust_brightness(color: Color, percent: float) -> Color:
    """Lighten (positive) or darken (negative) a colour by *percent*."""
    amount = round(2.55 * percent)
    return tuple(int(np.clip(c + amount, 0, 255)) for c in color)


def draw_garden(frame: np.ndarray, garden: Garden, show_panel: bool = False) -> np.ndarray:
    """Draw all overlay elements onto *frame* (mutates in place and returns it)."""
    hud = garden.hud()

    # 1. Pinch ring at the fingertip.
    state = garden.interaction
    if state.is_pinching and state.pinch_location is not None:
        centre = (int(state.pinch_location.x), int(state.pinch_location.y))
        cv2.circle(frame, centre, OVERLAY_PINCH_RING_RADIUS, hex_to_bgr("#4ade80"), 4, cv2.LINE_AA)

    # 2. Entities, in simulation order.
    for seed in garden.seeds:
        draw_seed(frame, seed)
    for particle in garden.particles:
        draw_particle(frame, particle)
    height_factor = garden.config.growth_height_factor
    for plant in garden.plants:
        draw_plant(frame, plant, height_factor)

    # 3. HUD and control panel.
    draw_hud(frame, hud)
    if show_panel:
        draw_control_panel(frame, garden.config)
    return frame


# ------------------------------------------------------------------
# Entities
# ------------------------------------------------------------------

def _blend_circle(
    frame: np.ndarray,
    centre: tuple[int, int],
    radius: int,
    color: Color,
    alpha: float,
) -> None:
    """Draw a filled circle with opacity *alpha*, touching only its bounding box."""
    h, w = frame.shape[:2]
    x0, y0 = max(centre[0] - radius, 0), max(centre[1] - radius, 0)
    x1, y1 = min(centre[0] + radius + 1, w), min(centre[1] + radius + 1, h)
    if x0 >= x1 or y0 >= y1:
        return
    roi = frame[y0:y1, x0:x1]
    layer = roi.copy()
    cv2.circle(layer, (centre[0] - x0, centre[1] - y0), radius, color, -1, cv2.LINE_AA)
    frame[y0:y1, x0:x1] = cv2.addWeighted(layer, alpha, roi, 1.0 - alpha, 0)


def draw_seed(frame: np.ndarray, seed: Seed) -> None:
    """A glowing dot: soft coloured halo with a white core."""
    centre = (int(seed.x), int(seed.y))
    color = hex_to_bgr(seed.color)
    _blend_circle(frame, centre, 10, color, 0.35)
    cv2.circle(frame, centre, 6, color, -1, cv2.LINE_AA)
    cv2.circle(frame, centre, 2, (255, 255, 255), -1, cv2.LINE_AA)


def draw_particle(frame: np.ndarray, particle: Particle) -> None:
    alpha = float(np.clip(particle.life, 0.0, 1.0))
    if alpha <= 0:
        return
    radius = max(1, int(round(particle.size)))
    _blend_circle(frame, (int(particle.x), int(particle.y)), radius, hex_to_bgr(particle.color), alpha)


def _quadratic_curve(
    p0: tuple[float, float],
    p1: tuple[float, float],
    p2: tuple[float, float],
) -> np.ndarray:
    t = np.linspace(0.0, 1.0, _CURVE_SEGMENTS + 1)[:, None]
    pts = (1 - t) ** 2 * np.array(p0) + 2 * (1 - t) * t * np.array(p1) + t**2 * np.array(p2)
    return np.round(pts).astype(np.int32)


def _cubic_curve(
    p0: tuple[float, float],
    p1: tuple[float, float],
    p2: tuple[float, float],
    p3: tuple[float, float],
) -> np.ndarray:
    t = np.linspace(0.0, 1.0, _CURVE_SEGMENTS + 1)[:, None]
    pts = (
        (1 - t) ** 3 * np.array(p0)
        + 3 * (1 - t) ** 2 * t * np.array(p1)
        + 3 * (1 - t) * t**2 * np.array(p2)
        + t**3 * np.array(p3)
    )
    return pts


def draw_plant(frame: np.ndarray, plant: Plant, height_factor: float) -> None:
    """Stem, leaves past 30 % and a flower head past 60 % effective progress."""
    progress = plant.growth_progress * height_factor
    if progress < 0.01:
        return

    height = plant.max_height * progress
    start = (plant.x, plant.y)
    head = (plant.x + math.cos(plant.seed) * FLOWER_HEAD_SWAY, plant.y - height)

    # Stem: a quadratic curve bent sideways by the plant's shape seed.
    control = (plant.x + math.sin(plant.seed) * 20, plant.y - height / 2)
    stem = _quadratic_curve(start, control, head)
    thickness = max(1, int(round(4 * progress)))
    cv2.polylines(frame, [stem], False, hex_to_bgr(STEM_COLOR), thickness, cv2.LINE_AA)

    if progress > 0.3:
        leaf_count = 2
        leaf_size = 20 * progress
        for i in range(leaf_count):
            leaf_y = plant.y - height * ((i + 1) / (leaf_count + 1))
            side = 1 if i % 2 == 0 else -1
            cv2.ellipse(
                frame,
                (int(plant.x + side * 5), int(leaf_y)),
                (max(1, int(leaf_size)), max(1, int(leaf_size / 3))),
                side * 45,
                0,
                360,
                hex_to_bgr(LEAF_COLOR),
                -1,
                cv2.LINE_AA,
            )

    if progress > 0.6:
        scale = (progress - 0.6) / 0.4
        draw_flower_head(frame, plant.species, plant.color, head, scale)


# ------------------------------------------------------------------
# Flower heads
# ------------------------------------------------------------------

def _petal_ring(
    frame: np.ndarray,
    centre: tuple[float, float],
    scale: float,
    count: int,
    distance: float,
    axes: tuple[float, float],
    color: Color,
) -> None:
    for i in range(1, count + 1):
        theta = 2 * math.pi * i / count
        cx = centre[0] - distance * scale * math.sin(theta)
        cy = centre[1] + distance * scale * math.cos(theta)
        cv2.ellipse(
            frame,
            (int(cx), int(cy)),
            (max(1, int(axes[0] * scale)), max(1, int(axes[1] * scale))),
            math.degrees(theta),
            0,
            360,
            color,
            -1,
            cv2.LINE_AA,
        )


def _draw_sunflower(frame, centre, scale, color):
    _petal_ring(frame, centre, scale, 14, 20, (6, 18), hex_to_bgr("#f59e0b"))
    cv2.circle(frame, _ipt(centre), max(1, int(14 * scale)), hex_to_bgr("#78350f"), -1, cv2.LINE_AA)


def _draw_tulip(frame, centre, scale, color):
    def at(dx, dy):
        return (centre[0] + dx * scale, centre[1] + dy * scale)

    left = _cubic_curve(at(0, 0), at(-15, -20), at(-15, -40), at(0, -50))
    right = _cubic_curve(at(0, -50), at(15, -40), at(15, -20), at(0, 0))
    cup = np.round(np.vstack([left, right])).astype(np.int32)
    cv2.fillPoly(frame, [cup], hex_to_bgr(color), cv2.LINE_AA)


def _draw_rose(frame, centre, scale, color):
    bgr = hex_to_bgr(color)
    for i in range(3):
        c = (centre[0] + math.sin(i * 2) * 3 * scale, centre[1] + math.cos(i * 2) * 3 * scale)
        cv2.circle(frame, _ipt(c), max(1, int((10 + i * 4) * scale)), bgr, -1, cv2.LINE_AA)
    cv2.circle(frame, _ipt(centre), max(1, int(8 * scale)), adjust_brightness(bgr, -30), 1, cv2.LINE_AA)


def _draw_dandelion(frame, centre, scale, color):
    for i in range(1, 49):
        theta = 2 * math.pi * i / 48
        tip = (centre[0] - 24 * scale * math.sin(theta), centre[1] + 24 * scale * math.cos(theta))
        cv2.line(frame, _ipt(centre), _ipt(tip), (240, 240, 240), 1, cv2.LINE_AA)
        cv2.circle(frame, _ipt(tip), max(1, int(1.5 * scale)), (255, 255, 255), -1, cv2.LINE_AA)
    cv2.circle(frame, _ipt(centre), max(1, int(3 * scale)), hex_to_bgr("#d1d5db"), -1, cv2.LINE_AA)


def _draw_wild_chrysanthemum(frame, centre, scale, color):
    petal = "#fde047" if color == DEFAULT_FLOWER_COLOR else color
    _petal_ring(frame, centre, scale, 12, 12, (4, 10), hex_to_bgr(petal))
    cv2.circle(frame, _ipt(centre), max(1, int(5 * scale)), hex_to_bgr("#d97706"), -1, cv2.LINE_AA)


_FLOWER_DRAWERS = {
    Species.SUNFLOWER: _draw_sunflower,
    Species.TULIP: _draw_tulip,
    Species.ROSE: _draw_rose,
    Species.DANDELION: _draw_dandelion,
    Species.WILD_CHRYSANTHEMUM: _draw_wild_chrysanthemum,
}


def _ipt(p: tuple[float, float]) -> tuple[int, int]:
    return (int(round(p[0])), int(round(p[1])))


def draw_flower_head(
    frame: np.ndarray,
    species: Species,
    color: str,
    centre: tuple[float, float],
    scale: float,
) -> None:
    if scale <= 0:
        return
    _FLOWER_DRAWERS[species](frame, centre, scale, color)


# ------------------------------------------------------------------
# HUD
# ------------------------------------------------------------------

def _panel(frame: np.ndarray, top_left: tuple[int, int], size: tuple[int, int], border: Color) -> None:
    """Translucent black box with a thin border."""
    x, y = top_left
    w, h = size
    roi = frame[y:y + h, x:x + w]
    if roi.size == 0:
        return
    frame[y:y + h, x:x + w] = cv2.addWeighted(roi, 0.4, np.zeros_like(roi), 0.6, 0)
    cv2.rectangle(frame, (x, y), (x + w - 1, y + h - 1), border, 1)


def _meter(
    frame: np.ndarray,
    top: int,
    title: str,
    value_text: str,
    ratio: float,
    bar_color: Color,
    text_color: Color,
    border: Color = (60, 60, 60),
) -> None:
    left, width, height = 16, OVERLAY_HUD_WIDTH, 54
    _panel(frame, (left, top), (width, height), border)
    cv2.putText(frame, title, (left + 10, top + 20), _FONT, OVERLAY_FONT_SCALE * 0.8,
                (210, 210, 210), OVERLAY_THICKNESS, cv2.LINE_AA)
    (tw, _), _ = cv2.getTextSize(value_text, _FONT, OVERLAY_FONT_SCALE * 0.8, OVERLAY_THICKNESS)
    cv2.putText(frame, value_text, (left + width - 10 - tw, top + 20), _FONT,
                OVERLAY_FONT_SCALE * 0.8, text_color, OVERLAY_THICKNESS, cv2.LINE_AA)

    bar_x, bar_y, bar_w = left + 10, top + 34, width - 20
    cv2.rectangle(frame, (bar_x, bar_y), (bar_x + bar_w, bar_y + 8), (70, 65, 55), -1)
    fill = int(bar_w * float(np.clip(ratio, 0.0, 1.0)))
    if fill > 0:
        cv2.rectangle(frame, (bar_x, bar_y), (bar_x + fill, bar_y + 8), bar_color, -1)


def pinch_status(hud: HudState) -> str:
    if hud.is_palm_open:
        return "Blocked (palm)"
    if hud.is_pinching:
        return "Seeded!"
    return "Pinching..." if hud.pinch_proximity > 0.1 else "Waiting"


def draw_hud(frame: np.ndarray, hud: HudState) -> None:
    """Pinch, growth and clear meters in the top-left corner."""
    # Pinch
    if hud.is_palm_open:
        color, ratio = hex_to_bgr("#64748b"), 0.0
    elif hud.is_pinching:
        color, ratio = hex_to_bgr("#22c55e"), hud.pinch_proximity
    else:
        color, ratio = hex_to_bgr("#06b6d4"), hud.pinch_proximity
    _meter(frame, 16, "SEED (pinch)", pinch_status(hud), ratio, color, color)

    # Growth
    growth = min(hud.mouth_openness, 1.0)
    yellow = hex_to_bgr("#facc15")
    _meter(frame, 80, "GROW (mouth)", f"{growth * 100:.0f}%", growth, yellow, yellow)

    # Clear
    red = hex_to_bgr("#ef4444")
    text = f"{hud.clear_seconds:.1f}s"
    border = (60, 60, 60)
    if hud.is_palm_open:
        border = adjust_brightness(red, -40 + 40 * hud.clear_ratio)
        if hud.clear_ratio >= 1.0:
            text = "Cleared!"
    _meter(frame, 144, "CLEAR (hold palm)", text, hud.clear_ratio, red, red, border)


def draw_control_panel(frame: np.ndarray, config: PlantConfig) -> None:
    """Settings and gesture legend on the right-hand side."""
    h, w = frame.shape[:2]
    left = max(0, w - OVERLAY_PANEL_WIDTH - 16)
    _panel(frame, (left, 16), (OVERLAY_PANEL_WIDTH, 300), (90, 90, 90))

    lines: list[tuple[str, Color]] = [("Control panel  [h] hide", (255, 255, 255))]
    options = [(RANDOM, "Random")] + [(s, s.label) for s in Species]
    for key, (value, label) in enumerate(options):
        selected = config.selected_species == value
        marker = ">" if selected else " "
        color = hex_to_bgr("#22c55e") if selected else (200, 200, 200)
        lines.append((f"{marker} [{key}] {label}", color))
    lines.append((f"Height [-/+]: {config.growth_height_factor * 100:.0f}%", hex_to_bgr("#4ade80")))
    lines.append(("Pinch: plant a seed", (170, 170, 170)))
    lines.append(("Open mouth: grow", (170, 170, 170)))
    lines.append(("Hold open palm 5s: clear all", (170, 170, 170)))

    y = 44
    for text, color in lines:
        cv2.putText(frame, text, (left + 14, y), _FONT, OVERLAY_FONT_SCALE * 0.9,
                    color, OVERLAY_THICKNESS, cv2.LINE_AA)
        y += 24
