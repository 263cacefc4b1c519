"""
Garden controller.

Wires together:
  LandmarkFrame  ->  interpret_frame  ->  GestureDebouncer  ->  triggers
                                                            ->  World (spawn / explode)
                                                            ->  simulation.step

The :class:`Garden` is the single writer of the :class:`World`; renderers
and the HUD only get read access through its properties.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from gesture_garden.config import (
    CLEAR_HOLD_MS,
    FLOWER_BURST_COUNT,
    FLOWER_HEAD_SWAY,
    SEED_INITIAL_VY,
    STEM_BURST_COUNT,
    STEM_PARTICLE_COLOR,
)
from gesture_garden.gesture_detector import GestureDebouncer, TriggerEvent
from gesture_garden.models import (
    InteractionState,
    LandmarkFrame,
    Particle,
    Plant,
    PlantConfig,
    Point,
    Seed,
    Species,
    SpeciesSelection,
    species_color,
)
from gesture_garden.signals import interpret_frame
from gesture_garden.simulation import World, step

logger = logging.getLogger("garden.garden")


@dataclass(frozen=True)
class HudState:
    """Plain numbers for the heads-up display."""

    pinch_proximity: float
    is_pinching: bool
    mouth_openness: float
    is_palm_open: bool
    clear_ratio: float
    clear_seconds: float


class Garden:
    """Owns the simulation world and applies gesture triggers to it."""

    def __init__(
        self,
        config: PlantConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.world = World(
            config=config or PlantConfig(),
            rng=rng if rng is not None else np.random.default_rng(),
        )
        self.debouncer = GestureDebouncer()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def seeds(self) -> tuple[Seed, ...]:
        return tuple(self.world.seeds)

    @property
    def plants(self) -> tuple[Plant, ...]:
        return tuple(self.world.plants)

    @property
    def particles(self) -> tuple[Particle, ...]:
        return tuple(self.world.particles)

    @property
    def interaction(self) -> InteractionState:
        return self.world.interaction

    @property
    def config(self) -> PlantConfig:
        return self.world.config

    def hud(self) -> HudState:
        state = self.world.interaction
        return HudState(
            pinch_proximity=state.pinch_proximity,
            is_pinching=state.is_pinching,
            mouth_openness=state.mouth_openness,
            is_palm_open=state.is_palm_open,
            clear_ratio=min(state.clear_timer / CLEAR_HOLD_MS, 1.0),
            clear_seconds=state.clear_timer / 1000.0,
        )

    # ------------------------------------------------------------------
    # Per-tick entry points
    # ------------------------------------------------------------------

    def interact(
        self,
        frame: LandmarkFrame,
        width: int,
        height: int,
        delta_ms: float,
    ) -> list[TriggerEvent]:
        """Interpret *frame*, debounce, and apply the resulting triggers."""
        signals = interpret_frame(frame, width, height)
        triggers = self.debouncer.update(signals, self.world.interaction, delta_ms)

        for trigger in triggers:
            if trigger is TriggerEvent.SPAWN_SEED and signals.pinch_location is not None:
                self.spawn_seed(signals.pinch_location)
            elif trigger is TriggerEvent.CLEAR_ALL:
                self.explode_plants()
        return triggers

    def advance(self, ground_level: float, delta_ms: float) -> None:
        step(self.world, ground_level, delta_ms)

    def tick(
        self,
        frame: LandmarkFrame | None,
        width: int,
        height: int,
        delta_ms: float,
    ) -> list[TriggerEvent]:
        """One full tick: interaction (if a fresh frame exists) then physics."""
        triggers: list[TriggerEvent] = []
        if frame is not None:
            triggers = self.interact(frame, width, height, delta_ms)
        self.advance(height, delta_ms)
        return triggers

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    def _pick_species(self) -> Species:
        config = self.world.config
        if config.is_random:
            options = list(Species)
            return options[int(self.world.rng.integers(len(options)))]
        return Species(config.selected_species)

    def spawn_seed(self, location: Point) -> Seed:
        species = self._pick_species()
        seed = Seed(
            x=location.x,
            y=location.y,
            vy=SEED_INITIAL_VY,
            species=species,
            color=species_color(species),
        )
        self.world.seeds.append(seed)
        logger.debug("Spawned %s seed at (%.0f, %.0f)", species.value, seed.x, seed.y)
        return seed

    def explode_plants(self) -> int:
        """Burst every plant into particles, then clear plants and seeds.

        Returns the number of particles emitted.
        """
        rng = self.world.rng
        height_factor = self.world.config.growth_height_factor
        emitted: list[Particle] = []

        for plant in self.world.plants:
            effective_height = plant.effective_height(height_factor)
            head_x = plant.x + math.cos(plant.seed) * FLOWER_HEAD_SWAY
            head_y = plant.y - effective_height

            for _ in range(FLOWER_BURST_COUNT):
                angle = rng.random() * math.pi * 2
                emitted.append(
                    Particle(
                        x=head_x,
                        y=head_y,
                        vx=math.cos(angle) * (rng.random() * 5),
                        vy=math.sin(angle) * (rng.random() * 5) - 5,  # upward burst
                        color=plant.color,
                        size=rng.random() * 5 + 2,
                    )
                )

            for _ in range(STEM_BURST_COUNT):
                emitted.append(
                    Particle(
                        x=plant.x,
                        y=plant.y - effective_height / 2,
                        vx=(rng.random() - 0.5) * 5,
                        vy=(rng.random() - 0.5) * 5,
                        color=STEM_PARTICLE_COLOR,
                        size=rng.random() * 3 + 1,
                    )
                )

        if self.world.plants:
            logger.info(
                "Cleared %d plants (%d particles)", len(self.world.plants), len(emitted)
            )
        self.world.particles.extend(emitted)
        self.world.plants = []
        self.world.seeds = []
        return len(emitted)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_config(self, config: PlantConfig) -> None:
        """Apply a new configuration.

        Choosing a concrete species recolours every live seed and plant to
        that species straight away; going back to ``"Random"`` leaves them
        as they are.
        """
        self.world.config = config
        if config.is_random:
            return

        target = Species(config.selected_species)
        color = species_color(target)
        for entity in (*self.world.plants, *self.world.seeds):
            entity.species = target
            entity.color = color
        logger.info(
            "Species set to %s (%d plants, %d seeds retargeted)",
            target.value, len(self.world.plants), len(self.world.seeds),
        )

    def select_species(self, selection: SpeciesSelection) -> None:
        self.set_config(
            PlantConfig(
                selected_species=selection,
                growth_height_factor=self.world.config.growth_height_factor,
            )
        )

    def set_height_factor(self, factor: float) -> None:
        self.set_config(
            PlantConfig(
                selected_species=self.world.config.selected_species,
                growth_height_factor=factor,
            )
        )
