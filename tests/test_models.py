import pytest
from pydantic import ValidationError

from gesture_garden.models import (
    RANDOM,
    Plant,
    PlantConfig,
    Species,
    parse_species_selection,
    species_color,
)


@pytest.mark.parametrize(
    "species, color",
    [
        (Species.ROSE, "#e11d48"),
        (Species.TULIP, "#a855f7"),
        (Species.WILD_CHRYSANTHEMUM, "#facc15"),
        (Species.SUNFLOWER, "#f59e0b"),
        (Species.DANDELION, "#cbd5e1"),
    ],
)
def test_species_color(species, color):
    assert species_color(species) == color


@pytest.mark.parametrize("value", ["orchid", RANDOM, None])
def test_unknown_species_falls_back_to_amber(value):
    assert species_color(value) == "#eab308"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Random", RANDOM),
        ("random", RANDOM),
        ("rose", Species.ROSE),
        ("SUNFLOWER", Species.SUNFLOWER),
        ("Daisy", Species.WILD_CHRYSANTHEMUM),
        (" wild_chrysanthemum ", Species.WILD_CHRYSANTHEMUM),
    ],
)
def test_parse_species_selection(text, expected):
    assert parse_species_selection(text) == expected


def test_parse_species_selection_rejects_unknown():
    with pytest.raises(ValueError):
        parse_species_selection("cactus")


class TestPlantConfig:
    def test_defaults(self):
        config = PlantConfig()
        assert config.is_random
        assert config.growth_height_factor == 1.0

    def test_accepts_species_values(self):
        assert PlantConfig(selected_species="tulip").selected_species is Species.TULIP

    @pytest.mark.parametrize("factor", [-0.1, 1.01])
    def test_height_factor_bounds(self, factor):
        with pytest.raises(ValidationError):
            PlantConfig(growth_height_factor=factor)

    def test_rejects_unknown_species(self):
        with pytest.raises(ValidationError):
            PlantConfig(selected_species="cactus")

    def test_is_frozen(self):
        config = PlantConfig()
        with pytest.raises(ValidationError):
            config.growth_height_factor = 0.5


def test_effective_height():
    plant = Plant(
        id="a", x=0.0, y=0.0, max_height=300.0, species=Species.ROSE,
        color="#e11d48", seed=0.0, growth_progress=0.5,
    )
    assert plant.effective_height(0.5) == pytest.approx(75.0)
