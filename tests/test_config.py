import math

import pytest
from orbit_physics.config import DEFAULT_CONFIG, PhysicsConfig, config_from_dict
from orbit_physics.constants import EARTH_MASS, EARTH_RADIUS, G
from orbit_physics.types import BodyConfig


def test_defaults_match_constants():
    cfg = PhysicsConfig()
    assert cfg == DEFAULT_CONFIG
    assert math.isclose(cfg.mu, G * EARTH_MASS)
    assert cfg.crash_radius == EARTH_RADIUS + 50_000.0
    assert cfg.drag_ceiling == 500_000.0
    assert cfg.max_trail_length == 1000
    assert cfg.drag_model == "exponential"
    assert cfg.advance_mode == "all"


def test_config_is_immutable():
    with pytest.raises(AttributeError):
        DEFAULT_CONFIG.earth_radius = 1.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"drag_model": "msis"},
        {"advance_mode": "some"},
        {"earth_mass": 0.0},
        {"earth_radius": float("nan")},
        {"max_trail_length": 0},
        {"crash_margin": -1.0},
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        PhysicsConfig(**kwargs)


def test_config_from_dict():
    cfg = config_from_dict({
        "max_trail_length": "200",
        "drag_model": "banded",
        "crash_margin": 10_000,
        "not_a_setting": True,
    })
    assert cfg.max_trail_length == 200
    assert cfg.drag_model == "banded"
    assert cfg.crash_margin == 10_000.0
    assert cfg.earth_radius == EARTH_RADIUS


def test_config_from_dict_bad_value():
    with pytest.raises(ValueError):
        config_from_dict({"earth_mass": "heavy"})


def test_launch_config_geometry():
    cfg = BodyConfig.from_launch(height=300_000.0, speed=5000.0, direction_deg=45.0, mass=50.0)
    assert cfg.position == (EARTH_RADIUS + 300_000.0, 0.0, 0.0)
    vx, vy, vz = cfg.velocity
    assert math.isclose(vx, 5000.0 / math.sqrt(2))
    assert math.isclose(vy, 5000.0 / math.sqrt(2))
    assert vz == 0.0
    assert cfg.mass == 50.0
