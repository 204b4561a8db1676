"""Property-based tests for combat resolution."""

from __future__ import annotations

from collections import Counter

from hypothesis import given, settings
from hypothesis import strategies as st

from stellarion.domain import units as catalog
from stellarion.domain.army import Army
from stellarion.domain.combat import resolve_combat
from stellarion.domain.enums import Objective
from stellarion.domain.models import Mission, MissionID, Planet, PlanetID, PlayerID
from stellarion.domain.report import MissionReport
from stellarion.domain.units import Defense, Ship
from stellarion.serialization import dump_report
from stellarion.utils.rng import make_rng

SHIPS = [
    Ship.PROBE,
    Ship.LIGHT_FIGHTER,
    Ship.HEAVY_FIGHTER,
    Ship.DESTROYER,
    Ship.CRUISER,
    Ship.BOMBER,
    Ship.BATTLESHIP,
]
DEFENSES = [
    Defense.ROCKET_LAUNCHER,
    Defense.LIGHT_LASER,
    Defense.HEAVY_LASER,
    Defense.GAUSS_CANNON,
    Defense.ION_CANNON,
    Defense.CRAWLER,
    Defense.SPACE_DOCK,
]

attacker_armies = st.dictionaries(
    st.sampled_from(SHIPS), st.integers(min_value=1, max_value=6), min_size=1, max_size=4
).map(Army)
defender_armies = st.dictionaries(
    st.sampled_from(SHIPS + DEFENSES), st.integers(min_value=1, max_value=6), max_size=4
).map(Army)
seeds = st.text(min_size=1, max_size=12)
combat_probes = st.booleans()


def _resolve(attacker: Army, defender: Army, seed: str, **mission_fields) -> MissionReport:
    mission = Mission(
        id=MissionID(3),
        owner=PlayerID(1),
        origin=PlanetID(1),
        destination=PlanetID(2),
        objective=mission_fields.pop("objective", Objective.ATTACK),
        army=attacker,
        origin_controlled=PlayerID(1),
        **mission_fields,
    )
    planet = Planet(id=PlanetID(2), owned=PlayerID(2), controlled=PlayerID(2), army=defender)
    return resolve_combat(5, mission, planet, rng=make_rng(seed))


def _kills(report: MissionReport, *, by_attacker: bool) -> Counter:
    kills: Counter = Counter()
    if report.combat_report is None:
        return kills
    for round_report in report.combat_report.rounds:
        firers = round_report.attacker if by_attacker else round_report.defender
        for combat_unit in firers:
            for shot in combat_unit.shots:
                if shot.killed:
                    kills[shot.unit] += 1
    return kills


@settings(max_examples=40, deadline=None)
@given(attacker=attacker_armies, defender=defender_armies, seed=seeds)
def test_replay_is_byte_identical(attacker, defender, seed):
    first = _resolve(attacker, defender, seed)
    second = _resolve(attacker, defender, seed)
    assert dump_report(first) == dump_report(second)


@settings(max_examples=40, deadline=None)
@given(attacker=attacker_armies, defender=defender_armies, seed=seeds, probes=combat_probes)
def test_every_unit_is_accounted_for(attacker, defender, seed, probes):
    report = _resolve(attacker, defender, seed, combat_probes=probes)

    attacker_losses = _kills(report, by_attacker=False)
    for unit, count in attacker:
        assert count == report.surviving_attacker.amount(unit) + attacker_losses[unit]

    defender_losses = _kills(report, by_attacker=True)
    for unit, count in defender:
        assert count == report.surviving_defender.amount(unit) + defender_losses[unit]


@settings(max_examples=40, deadline=None)
@given(attacker=attacker_armies, defender=defender_armies, seed=seeds)
def test_shots_respect_shield_and_hull(attacker, defender, seed):
    report = _resolve(attacker, defender, seed)
    if report.combat_report is None:
        return

    for round_report in report.combat_report.rounds:
        for combat_unit in (*round_report.attacker, *round_report.defender):
            damage = catalog.stats(combat_unit.unit).damage
            for shot in combat_unit.shots:
                target = catalog.stats(shot.unit)
                assert shot.shield_damage <= target.shield
                assert shot.hull_damage <= target.hull
                assert shot.shield_damage + shot.hull_damage <= damage
                if shot.missed:
                    assert shot.shield_damage == shot.hull_damage == 0
                    assert not shot.killed


@settings(max_examples=40, deadline=None)
@given(attacker=attacker_armies, defender=defender_armies, seed=seeds)
def test_dead_units_never_return(attacker, defender, seed):
    report = _resolve(attacker, defender, seed)
    if report.combat_report is None:
        return

    dead: set[int] = set()
    for round_report in report.combat_report.rounds:
        present = [
            combat_unit.id for combat_unit in (*round_report.attacker, *round_report.defender)
        ]
        assert len(present) == len(set(present))
        assert dead.isdisjoint(present)
        dead.update(
            combat_unit.id
            for combat_unit in (*round_report.attacker, *round_report.defender)
            if combat_unit.hull <= 0
        )


@settings(max_examples=40, deadline=None)
@given(
    interceptors=st.integers(min_value=1, max_value=6),
    data=st.data(),
    others=st.dictionaries(
        st.sampled_from(DEFENSES), st.integers(min_value=1, max_value=4), max_size=3
    ),
    seed=seeds,
)
def test_missile_strike_is_one_sided(interceptors, data, others, seed):
    missiles = data.draw(st.integers(min_value=1, max_value=interceptors))
    defender = Army({**others, Defense.ANTIBALLISTIC_MISSILE: interceptors})
    report = _resolve(
        Army({Defense.INTERPLANETARY_MISSILE: missiles}),
        defender,
        seed,
        objective=Objective.MISSILE_STRIKE,
    )

    # interceptors never act, so each one keeps its single record for the battle
    fired: set[int] = set()
    for round_report in report.combat_report.rounds:
        assert round_report.antiballistic_fired <= interceptors
        for combat_unit in round_report.defender:
            if combat_unit.shots:
                assert combat_unit.unit is Defense.ANTIBALLISTIC_MISSILE
                assert len(combat_unit.shots) == 1
                fired.add(combat_unit.id)
    assert len(fired) == report.combat_report.rounds[-1].antiballistic_fired
