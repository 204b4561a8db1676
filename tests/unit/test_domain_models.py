"""Unit tests for mission and planet snapshots."""

import math

import pytest

from stellarion.domain.army import Army
from stellarion.domain.enums import Objective, Side
from stellarion.domain.models import Mission, MissionID, Planet, PlanetID, PlayerID
from stellarion.domain.units import Ship


def _mission(**overrides) -> Mission:
    values = {
        "id": MissionID(1),
        "owner": PlayerID(1),
        "origin": PlanetID(10),
        "destination": PlanetID(20),
        "objective": Objective.ATTACK,
        "army": Army({Ship.CRUISER: 2, Ship.PROBE: 1}),
        "origin_controlled": PlayerID(1),
    }
    values.update(overrides)
    return Mission(**values)


class TestMission:
    def test_origin_still_controlled(self):
        assert _mission().origin_still_controlled
        assert not _mission(origin_controlled=PlayerID(2)).origin_still_controlled
        assert not _mission(origin_controlled=None).origin_still_controlled

    def test_speed_and_fuel(self):
        mission = _mission()
        assert mission.speed() == 2.5
        assert mission.fuel_consumption(2.0) == (18 * 2 + 5) * 2

    def test_jump_gate_is_instant_and_free(self):
        mission = _mission(jump_gate=True)
        assert mission.speed() == math.inf
        assert mission.fuel_consumption(10.0) == 0

    def test_jump_cost_and_total(self):
        mission = _mission()
        assert mission.jump_cost() == 3 * 2 + 1
        assert mission.total() == 3


class TestPlanet:
    def test_defaults(self):
        planet = Planet(id=PlanetID(1))
        assert planet.army == Army()
        assert planet.destroy_probability == 0.1
        assert planet.controlled is None

    @pytest.mark.parametrize("probability", [-0.01, 1.01])
    def test_invalid_destroy_probability(self, probability):
        with pytest.raises(ValueError, match="destroy_probability"):
            Planet(id=PlanetID(1), destroy_probability=probability)


def test_side_opposite():
    assert Side.ATTACKER.opposite() is Side.DEFENDER
    assert Side.DEFENDER.opposite() is Side.ATTACKER
