"""Data models for seeds, plants, particles, and the interaction state."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from gesture_garden.config import DEFAULT_FLOWER_COLOR


def new_id() -> str:
    return uuid.uuid4().hex


class Species(str, Enum):
    """The five flower species a seed can grow into."""

    ROSE = "rose"
    DANDELION = "dandelion"
    WILD_CHRYSANTHEMUM = "wild_chrysanthemum"
    TULIP = "tulip"
    SUNFLOWER = "sunflower"

    @property
    def label(self) -> str:
        return {
            Species.ROSE: "Rose",
            Species.DANDELION: "Dandelion",
            Species.WILD_CHRYSANTHEMUM: "Daisy",
            Species.TULIP: "Tulip",
            Species.SUNFLOWER: "Sunflower",
        }[self]


RANDOM = "Random"

SpeciesSelection = Union[Species, Literal["Random"]]

SPECIES_COLORS: dict[Species, str] = {
    Species.ROSE: "#e11d48",               # red
    Species.TULIP: "#a855f7",              # purple
    Species.WILD_CHRYSANTHEMUM: "#facc15", # yellow
    Species.SUNFLOWER: "#f59e0b",          # amber
    Species.DANDELION: "#cbd5e1",          # slate
}


def species_color(species: object) -> str:
    """Return the natural colour of *species* (amber for anything unknown)."""
    try:
        return SPECIES_COLORS.get(Species(species), DEFAULT_FLOWER_COLOR)
    except ValueError:
        return DEFAULT_FLOWER_COLOR


def parse_species_selection(value: str) -> SpeciesSelection:
    """Parse ``"Random"`` or a species value/name (case-insensitive)."""
    text = value.strip()
    if text.lower() == RANDOM.lower():
        return RANDOM
    for species in Species:
        if text.lower() in (species.value, species.name.lower(), species.label.lower()):
            return species
    raise ValueError(f"Unknown species: {value!r}")


@dataclass
class LandmarkFrame:
    """One tick's detector output, read-only to the core.

    ``face`` is a ``(N, 3)`` array of normalised face landmarks (N >= 153) or
    ``None``; ``hands`` holds one ``(21, 3)`` array per detected hand.
    """

    face: np.ndarray | None = None
    hands: list[np.ndarray] = field(default_factory=list)


@dataclass
class Point:
    """A pixel-space point on the canvas."""

    x: float
    y: float


@dataclass
class Seed:
    """A falling seed.  Becomes a :class:`Plant` the tick it lands."""

    x: float
    y: float
    vy: float
    species: Species
    color: str
    is_landed: bool = False
    id: str = field(default_factory=new_id)


@dataclass
class Plant:
    """A rooted plant.  ``x, y`` is the ground anchor and never changes."""

    id: str
    x: float
    y: float
    max_height: float
    species: Species
    color: str
    # Procedural shape-variation scalar (stem bend, flower-head sway).
    seed: float
    growth_progress: float = 0.0
    stem_control_points: list[Point] = field(default_factory=list)

    def effective_height(self, height_factor: float) -> float:
        """Rendered height after applying the global height factor."""
        return self.max_height * self.growth_progress * height_factor


@dataclass
class Particle:
    """A single explosion fragment."""

    x: float
    y: float
    vx: float
    vy: float
    color: str
    size: float
    life: float = 1.0
    id: str = field(default_factory=new_id)


@dataclass
class InteractionState:
    """Gesture signals for the current tick plus the clear-hold timer (ms)."""

    is_pinching: bool = False
    pinch_location: Point | None = None
    pinch_proximity: float = 0.0
    mouth_openness: float = 0.0
    is_palm_open: bool = False
    clear_timer: float = 0.0


class PlantConfig(BaseModel):
    """User-facing settings: which species to plant and how tall to draw it."""

    model_config = ConfigDict(frozen=True)

    selected_species: SpeciesSelection = RANDOM
    growth_height_factor: float = Field(default=1.0, ge=0.0, le=1.0)

    @property
    def is_random(self) -> bool:
        return self.selected_species == RANDOM
