"""
Entity simulation.

The :class:`World` is the whole mutable state of the garden.  The step
functions below advance it by one tick, always in the order
seeds -> particles -> plants.

Seed fall and particle decay use fixed per-tick increments while plant
growth is scaled by elapsed milliseconds, so faster displays make seeds
fall and particles fade faster in wall-clock time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from gesture_garden.config import (
    GROUND_OFFSET,
    GROWTH_RATE,
    GROWTH_SPEED,
    GROWTH_THRESHOLD,
    PARTICLE_DECAY,
    PARTICLE_GRAVITY,
    PLANT_HEIGHT_RANGE,
    PLANT_MIN_HEIGHT,
    PLANT_SHAPE_SEED_RANGE,
    SEED_GRAVITY,
)
from gesture_garden.models import InteractionState, Particle, Plant, PlantConfig, Seed

logger = logging.getLogger("garden.simulation")


@dataclass
class World:
    """Simulation context: entity collections, interaction state, config."""

    seeds: list[Seed] = field(default_factory=list)
    plants: list[Plant] = field(default_factory=list)
    particles: list[Particle] = field(default_factory=list)
    interaction: InteractionState = field(default_factory=InteractionState)
    config: PlantConfig = field(default_factory=PlantConfig)
    rng: np.random.Generator = field(default_factory=np.random.default_rng)


def update_seeds(world: World, ground_level: float) -> list[Plant]:
    """Let every seed fall one tick; landed seeds become plants immediately.

    Returns the plants created this tick.
    """
    landing_y = ground_level - GROUND_OFFSET
    sprouted: list[Plant] = []

    for seed in world.seeds:
        if seed.is_landed:
            continue
        seed.y += seed.vy
        seed.vy += SEED_GRAVITY

        if seed.y >= landing_y:
            seed.y = landing_y
            seed.is_landed = True
            plant = Plant(
                id=seed.id,
                x=seed.x,
                y=seed.y,
                max_height=PLANT_MIN_HEIGHT + world.rng.random() * PLANT_HEIGHT_RANGE,
                species=seed.species,
                color=seed.color,
                seed=world.rng.random() * PLANT_SHAPE_SEED_RANGE,
            )
            sprouted.append(plant)
            logger.debug("Seed %s landed at x=%.0f", seed.id, seed.x)

    world.plants.extend(sprouted)
    world.seeds = [s for s in world.seeds if not s.is_landed]
    return sprouted


def update_particles(world: World) -> None:
    """Move particles under gravity and fade them; drop the dead ones."""
    for p in world.particles:
        p.x += p.vx
        p.y += p.vy
        p.vy += PARTICLE_GRAVITY
        p.life -= PARTICLE_DECAY
    world.particles = [p for p in world.particles if p.life > 0]


def update_plants(world: World, delta_ms: float) -> None:
    """Grow every plant in proportion to mouth openness and elapsed time."""
    openness = world.interaction.mouth_openness
    if openness <= GROWTH_THRESHOLD or delta_ms <= 0:
        return

    increment = openness * GROWTH_RATE * GROWTH_SPEED * delta_ms
    for plant in world.plants:
        if plant.growth_progress < 1.0:
            plant.growth_progress = min(1.0, plant.growth_progress + increment)


def step(world: World, ground_level: float, delta_ms: float) -> None:
    """Advance the world by one tick."""
    update_seeds(world, ground_level)
    update_particles(world)
    update_plants(world, delta_ms)
