"""Unit kinds and their static capability table.

Every unit kind belongs to exactly one of three closed families: buildings,
ships and defenses.  ``CATALOG`` maps each kind to a frozen ``UnitType``
entry; a kind without an entry is a defect and fails at import time.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum


class Building(StrEnum):
    """Planetary buildings; never take part in combat."""

    METAL_MINE = "metal_mine"
    CRYSTAL_MINE = "crystal_mine"
    DEUTERIUM_SYNTHESIZER = "deuterium_synthesizer"
    SHIPYARD = "shipyard"
    FACTORY = "factory"
    MISSILE_SILO = "missile_silo"
    PLANETARY_SHIELD = "planetary_shield"
    JUMP_GATE = "jump_gate"
    SENSOR_PHALANX = "sensor_phalanx"
    ORBITAL_RADAR = "orbital_radar"
    LABORATORY = "laboratory"
    SENATE = "senate"
    NEXUS = "nexus"
    TERRAFORMER = "terraformer"


class Ship(StrEnum):
    """Mobile units dispatched on missions."""

    PROBE = "probe"
    COLONY_SHIP = "colony_ship"
    LIGHT_FIGHTER = "light_fighter"
    HEAVY_FIGHTER = "heavy_fighter"
    DESTROYER = "destroyer"
    CRUISER = "cruiser"
    BOMBER = "bomber"
    BATTLESHIP = "battleship"
    DREADNOUGHT = "dreadnought"
    WAR_SUN = "war_sun"


class Defense(StrEnum):
    """Stationary planetary defenses and missiles."""

    ROCKET_LAUNCHER = "rocket_launcher"
    LIGHT_LASER = "light_laser"
    HEAVY_LASER = "heavy_laser"
    GAUSS_CANNON = "gauss_cannon"
    ION_CANNON = "ion_cannon"
    PLASMA_TURRET = "plasma_turret"
    CRAWLER = "crawler"
    SPACE_DOCK = "space_dock"
    ANTIBALLISTIC_MISSILE = "antiballistic_missile"
    INTERPLANETARY_MISSILE = "interplanetary_missile"


Unit = Building | Ship | Defense

ALL_UNITS: tuple[Unit, ...] = (*Building, *Ship, *Defense)


@dataclass(frozen=True, slots=True)
class Resources:
    """Amounts of the three tradeable resources."""

    metal: int = 0
    crystal: int = 0
    deuterium: int = 0

    def __add__(self, other: Resources) -> Resources:
        return Resources(
            metal=self.metal + other.metal,
            crystal=self.crystal + other.crystal,
            deuterium=self.deuterium + other.deuterium,
        )

    def __mul__(self, factor: int) -> Resources:
        return Resources(
            metal=self.metal * factor,
            crystal=self.crystal * factor,
            deuterium=self.deuterium * factor,
        )


@dataclass(frozen=True, slots=True)
class UnitType:
    """Static attributes shared by every unit of one kind."""

    hull: int = 0
    shield: int = 0
    damage: int = 0
    speed: float = 0.0
    fuel_consumption: int = 0
    production: int = 1
    price: Resources = Resources()
    rapid_fire: Mapping[Unit, int] = field(default_factory=dict)


_PROBE_RAPID_FIRE: Mapping[Unit, int] = {Ship.PROBE: 80}

CATALOG: dict[Unit, UnitType] = {
    **{building: UnitType() for building in Building},
    Ship.PROBE: UnitType(
        hull=10, speed=4.0, fuel_consumption=5, production=1, price=Resources(0, 10, 0)
    ),
    Ship.COLONY_SHIP: UnitType(
        hull=0, speed=1.5, fuel_consumption=50, production=2, price=Resources(100, 200, 100)
    ),
    Ship.LIGHT_FIGHTER: UnitType(
        hull=40,
        shield=1,
        damage=5,
        speed=3.5,
        fuel_consumption=10,
        production=1,
        price=Resources(30, 10, 0),
        rapid_fire=_PROBE_RAPID_FIRE,
    ),
    Ship.HEAVY_FIGHTER: UnitType(
        hull=100,
        shield=3,
        damage=15,
        speed=2.5,
        fuel_consumption=15,
        production=1,
        price=Resources(60, 40, 0),
        rapid_fire=_PROBE_RAPID_FIRE,
    ),
    Ship.DESTROYER: UnitType(
        hull=270,
        shield=10,
        damage=40,
        speed=3.0,
        fuel_consumption=15,
        production=2,
        price=Resources(60, 70, 20),
        rapid_fire={Ship.PROBE: 80, Ship.LIGHT_FIGHTER: 70, Defense.ROCKET_LAUNCHER: 70},
    ),
    Ship.CRUISER: UnitType(
        hull=350,
        shield=20,
        damage=70,
        speed=2.5,
        fuel_consumption=18,
        production=3,
        price=Resources(100, 100, 0),
        rapid_fire=_PROBE_RAPID_FIRE,
    ),
    Ship.BOMBER: UnitType(
        hull=350,
        shield=40,
        damage=60,
        speed=1.5,
        fuel_consumption=21,
        production=3,
        price=Resources(100, 200, 35),
        rapid_fire={
            Ship.PROBE: 80,
            Defense.ROCKET_LAUNCHER: 80,
            Defense.LIGHT_LASER: 80,
            Defense.HEAVY_LASER: 60,
            Defense.GAUSS_CANNON: 60,
            Defense.ION_CANNON: 40,
            Defense.PLASMA_TURRET: 40,
        },
    ),
    Ship.BATTLESHIP: UnitType(
        hull=500,
        shield=40,
        damage=80,
        speed=2.0,
        fuel_consumption=24,
        production=4,
        price=Resources(150, 200, 100),
        rapid_fire={
            Ship.PROBE: 80,
            Ship.HEAVY_FIGHTER: 70,
            Ship.DESTROYER: 60,
            Ship.CRUISER: 50,
        },
    ),
    Ship.DREADNOUGHT: UnitType(
        hull=700,
        shield=50,
        damage=100,
        speed=1.5,
        fuel_consumption=27,
        production=4,
        price=Resources(250, 200, 150),
        rapid_fire={
            Ship.PROBE: 80,
            Ship.BOMBER: 40,
            Ship.BATTLESHIP: 40,
            Ship.DREADNOUGHT: 30,
        },
    ),
    Ship.WAR_SUN: UnitType(
        hull=1000,
        shield=100,
        damage=250,
        speed=1.0,
        fuel_consumption=36,
        production=5,
        price=Resources(1000, 500, 250),
        rapid_fire={
            Ship.PROBE: 80,
            Ship.LIGHT_FIGHTER: 80,
            Ship.HEAVY_FIGHTER: 80,
            Ship.DESTROYER: 70,
            Ship.CRUISER: 60,
            Ship.BOMBER: 50,
            Ship.BATTLESHIP: 50,
            Ship.DREADNOUGHT: 40,
            Defense.ROCKET_LAUNCHER: 80,
            Defense.LIGHT_LASER: 80,
            Defense.HEAVY_LASER: 60,
            Defense.GAUSS_CANNON: 60,
            Defense.ION_CANNON: 40,
        },
    ),
    Defense.ROCKET_LAUNCHER: UnitType(
        hull=20, shield=2, damage=8, production=1, price=Resources(20, 0, 0)
    ),
    Defense.LIGHT_LASER: UnitType(
        hull=25, shield=3, damage=10, production=1, price=Resources(15, 5, 0)
    ),
    Defense.HEAVY_LASER: UnitType(
        hull=80, shield=10, damage=25, production=2, price=Resources(60, 20, 0)
    ),
    Defense.GAUSS_CANNON: UnitType(
        hull=350, shield=20, damage=110, production=3, price=Resources(200, 150, 20)
    ),
    Defense.ION_CANNON: UnitType(
        hull=100, shield=50, damage=15, production=4, price=Resources(50, 150, 0)
    ),
    Defense.PLASMA_TURRET: UnitType(
        hull=1000, shield=30, damage=300, production=5, price=Resources(500, 500, 300)
    ),
    Defense.CRAWLER: UnitType(
        hull=60, shield=10, production=2, price=Resources(50, 50, 0)
    ),
    Defense.SPACE_DOCK: UnitType(
        hull=500, production=3, price=Resources(200, 100, 0)
    ),
    Defense.ANTIBALLISTIC_MISSILE: UnitType(
        hull=10, production=1, price=Resources(20, 0, 20)
    ),
    Defense.INTERPLANETARY_MISSILE: UnitType(
        hull=10, damage=120, speed=3.0, production=2, price=Resources(50, 20, 50)
    ),
}

_missing = [unit for unit in ALL_UNITS if unit not in CATALOG]
if _missing:
    raise RuntimeError(f"unit catalog has no entry for: {', '.join(_missing)}")

FIRING_ORDER: tuple[Unit, ...] = (
    Defense.INTERPLANETARY_MISSILE,
    Defense.ANTIBALLISTIC_MISSILE,
    Ship.PROBE,
    Ship.LIGHT_FIGHTER,
    Ship.HEAVY_FIGHTER,
    Ship.DESTROYER,
    Ship.CRUISER,
    Ship.BOMBER,
    Ship.BATTLESHIP,
    Ship.DREADNOUGHT,
    Ship.WAR_SUN,
    Defense.ROCKET_LAUNCHER,
    Defense.LIGHT_LASER,
    Defense.HEAVY_LASER,
    Defense.GAUSS_CANNON,
    Defense.ION_CANNON,
    Defense.PLASMA_TURRET,
    Defense.CRAWLER,
    Defense.SPACE_DOCK,
)

_FIRING_RANK = {unit: rank for rank, unit in enumerate(FIRING_ORDER)}
_CATALOG_INDEX = {unit: index for index, unit in enumerate(ALL_UNITS)}

MISSILES = frozenset({Defense.ANTIBALLISTIC_MISSILE, Defense.INTERPLANETARY_MISSILE})
TURRETS = frozenset(
    {
        Defense.ROCKET_LAUNCHER,
        Defense.LIGHT_LASER,
        Defense.HEAVY_LASER,
        Defense.GAUSS_CANNON,
        Defense.ION_CANNON,
        Defense.PLASMA_TURRET,
    }
)
ECONOMIC_BUILDINGS = frozenset(
    {Building.METAL_MINE, Building.CRYSTAL_MINE, Building.DEUTERIUM_SYNTHESIZER}
)
INDUSTRIAL_BUILDINGS = frozenset({Building.SHIPYARD, Building.FACTORY, Building.MISSILE_SILO})


def stats(unit: Unit) -> UnitType:
    """Return the catalog entry for ``unit``."""
    return CATALOG[unit]


def rapid_fire(firer: Unit, target: Unit, *, never: int) -> int:
    """Rapid-fire percentage of ``firer`` against ``target``; ``never`` when absent."""
    return CATALOG[firer].rapid_fire.get(target, never)


def firing_rank(unit: Unit) -> int:
    """Position in the firing order; unranked kinds sort after every ranked one."""
    return _FIRING_RANK.get(unit, len(FIRING_ORDER))


def catalog_index(unit: Unit) -> int:
    return _CATALOG_INDEX[unit]


def display_name(unit: Unit) -> str:
    return unit.value.replace("_", " ").title()


def is_building(unit: Unit) -> bool:
    return isinstance(unit, Building)


def is_ship(unit: Unit) -> bool:
    return isinstance(unit, Ship)


def is_defense(unit: Unit) -> bool:
    return isinstance(unit, Defense)


def is_missile(unit: Unit) -> bool:
    return unit in MISSILES


def is_combat_ship(unit: Unit) -> bool:
    """Ships that can fight; probes and colony ships cannot."""
    return is_ship(unit) and unit not in (Ship.PROBE, Ship.COLONY_SHIP)


def is_turret(unit: Unit) -> bool:
    return unit in TURRETS


def is_economic_building(unit: Unit) -> bool:
    return unit in ECONOMIC_BUILDINGS


def is_industrial_building(unit: Unit) -> bool:
    return unit in INDUSTRIAL_BUILDINGS


_BY_KIND: dict[str, Unit] = {unit.value: unit for unit in ALL_UNITS}


def unit_from_kind(kind: str) -> Unit:
    """Look up a unit by its serialized kind, e.g. ``"war_sun"``.

    Raises:
        ValueError: If no unit has that kind
    """
    try:
        return _BY_KIND[kind]
    except KeyError:
        raise ValueError(f"unknown unit kind: {kind!r}") from None
