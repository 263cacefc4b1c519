import math

import pytest
from pydantic import ValidationError

from conftest import face_for_openness, make_hand, make_open_palm
from gesture_garden.config import STEM_PARTICLE_COLOR
from gesture_garden.garden import Garden
from gesture_garden.gesture_detector import TriggerEvent
from gesture_garden.models import (
    RANDOM,
    LandmarkFrame,
    Plant,
    PlantConfig,
    Point,
    Species,
    species_color,
)


def _plant(garden, x=100.0, progress=0.5, seed=2.0, species=Species.ROSE):
    plant = Plant(
        id=f"plant-{x}",
        x=x,
        y=700.0,
        max_height=300.0,
        species=species,
        color=species_color(species),
        seed=seed,
        growth_progress=progress,
    )
    garden.world.plants.append(plant)
    return plant


class TestSpawning:
    def test_pinch_spawns_seed_at_fingertip(self, garden, pinch_frame):
        triggers = garden.interact(pinch_frame, 1280, 720, 16)
        assert triggers == [TriggerEvent.SPAWN_SEED]
        (seed,) = garden.seeds
        assert (seed.x, seed.y) == (640.0, 360.0)
        assert seed.vy == 5.0
        assert seed.color == species_color(seed.species)

    def test_held_pinch_spawns_once_per_cooldown(self, garden, pinch_frame):
        for _ in range(20):
            garden.interact(pinch_frame, 1280, 720, 20)
        assert len(garden.seeds) == 1
        for _ in range(10):
            garden.interact(pinch_frame, 1280, 720, 20)
        assert len(garden.seeds) == 2

    def test_configured_species(self, rng):
        garden = Garden(config=PlantConfig(selected_species=Species.SUNFLOWER), rng=rng)
        seed = garden.spawn_seed(Point(1.0, 2.0))
        assert seed.species is Species.SUNFLOWER
        assert seed.color == "#f59e0b"

    def test_random_species_covers_all_five(self, garden):
        species = {garden.spawn_seed(Point(0.0, 0.0)).species for _ in range(200)}
        assert species == set(Species)


class TestClearAll:
    def test_explosion_adds_thirty_particles_per_plant(self, garden):
        for x in (100.0, 300.0, 500.0):
            _plant(garden, x=x)
        garden.spawn_seed(Point(10.0, 10.0))

        emitted = garden.explode_plants()

        assert emitted == 90
        assert len(garden.particles) == 90
        assert garden.plants == ()
        assert garden.seeds == ()

    def test_particle_origins_and_colours(self, garden):
        garden.world.config = PlantConfig(growth_height_factor=0.5)
        plant = _plant(garden, progress=0.4, seed=2.0)
        garden.explode_plants()

        effective = 300.0 * 0.4 * 0.5
        flower = garden.particles[:20]
        stem = garden.particles[20:]
        assert len(stem) == 10
        for p in flower:
            assert p.x == pytest.approx(plant.x + math.cos(2.0) * 10)
            assert p.y == pytest.approx(plant.y - effective)
            assert p.color == plant.color
            assert p.life == 1.0
            assert 2.0 <= p.size < 7.0
        for p in stem:
            assert (p.x, p.y) == (plant.x, pytest.approx(plant.y - effective / 2))
            assert p.color == STEM_PARTICLE_COLOR
            assert 1.0 <= p.size < 4.0
            assert abs(p.vx) <= 2.5 and abs(p.vy) <= 2.5

    def test_holding_open_palm_clears_the_garden(self, garden, palm_frame):
        _plant(garden, x=100.0)
        _plant(garden, x=200.0)
        fired = []
        for _ in range(51):
            fired.extend(garden.interact(palm_frame, 1280, 720, 100))
        assert fired == [TriggerEvent.CLEAR_ALL]
        assert garden.plants == ()
        assert len(garden.particles) == 60
        assert garden.interaction.clear_timer == 0

    def test_clear_with_no_plants(self, garden):
        assert garden.explode_plants() == 0
        assert garden.particles == ()


class TestConfig:
    def test_concrete_species_retargets_live_entities(self, garden):
        _plant(garden, species=Species.ROSE)
        garden.spawn_seed(Point(5.0, 5.0))

        garden.set_config(PlantConfig(selected_species=Species.TULIP))

        for entity in (*garden.plants, *garden.seeds):
            assert entity.species is Species.TULIP
            assert entity.color == "#a855f7"

    def test_back_to_random_keeps_existing_species(self, garden):
        garden.select_species(Species.DANDELION)
        garden.spawn_seed(Point(5.0, 5.0))
        _plant(garden, species=Species.DANDELION)

        garden.select_species(RANDOM)

        assert garden.config.is_random
        assert all(s.species is Species.DANDELION for s in garden.seeds)
        assert all(p.species is Species.DANDELION for p in garden.plants)

    def test_height_factor_keeps_species(self, garden):
        garden.select_species(Species.ROSE)
        garden.set_height_factor(0.25)
        assert garden.config == PlantConfig(
            selected_species=Species.ROSE, growth_height_factor=0.25
        )

    def test_height_factor_is_validated(self, garden):
        with pytest.raises(ValidationError):
            garden.set_height_factor(1.5)
        assert garden.config.growth_height_factor == 1.0


class TestTick:
    def test_mouth_grows_plants(self, garden):
        plant = _plant(garden, progress=0.0)
        frame = LandmarkFrame(face=face_for_openness(0.2))
        garden.tick(frame, 1280, 720, 1000)
        assert garden.interaction.mouth_openness == pytest.approx(0.2)
        assert plant.growth_progress == 1.0

    def test_tick_without_frame_only_advances(self, garden, pinch_frame):
        garden.interact(pinch_frame, 1280, 720, 16)
        assert garden.tick(None, 1280, 720, 16) == []
        assert garden.seeds[0].y == 365.0

    def test_seed_lands_and_grows(self, garden, pinch_frame):
        garden.interact(pinch_frame, 1280, 720, 16)
        seed_id = garden.seeds[0].id
        idle = LandmarkFrame(hands=[make_hand(pinch_dist=0.3)])
        for _ in range(100):
            garden.tick(idle, 1280, 720, 16)
        assert garden.seeds == ()
        assert [p.id for p in garden.plants] == [seed_id]
        assert garden.plants[0].growth_progress == 0.0

    def test_hud(self, garden):
        garden.tick(LandmarkFrame(hands=[make_open_palm()]), 1280, 720, 0)
        for _ in range(25):
            garden.tick(LandmarkFrame(hands=[make_open_palm()]), 1280, 720, 100)
        hud = garden.hud()
        assert hud.is_palm_open
        assert not hud.is_pinching
        assert hud.clear_ratio == pytest.approx(0.5)
        assert hud.clear_seconds == pytest.approx(2.5)
