"""Combat resolution for a mission arriving at a planet.

``resolve_combat`` is a pure function over one mission and one destination
snapshot.  All randomness comes from the generator handed in (or one seeded
from the turn and mission id), so the same inputs replay to the same report.

A battle runs in rounds.  Each round the attacker fires, then the defender
(skipped for missile strikes), crawlers repair turrets, bombers hit
buildings once the planetary shield is gone, the round is recorded, and the
dead are removed.
"""

from __future__ import annotations

import copy
import itertools
import logging
import random
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, replace

from stellarion.domain import units as catalog
from stellarion.domain.army import Army
from stellarion.domain.combat_data import CombatUnit, ShotReport
from stellarion.domain.enums import BombingRaid, Objective, Side
from stellarion.domain.models import Mission, Planet, ReportID
from stellarion.domain.report import CombatReport, MissionReport, RoundReport
from stellarion.domain.rules_config import DEFAULT_RULES, CombatRules, RulesConfig
from stellarion.domain.units import Building, Defense, Ship, Unit
from stellarion.utils.rng import chance, choose, generate_seed, make_rng

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BattleState:
    """Mutable state of one battle, threaded through the round helpers."""

    mission: Mission
    rng: random.Random
    rules: CombatRules
    attackers: list[CombatUnit]
    defenders: list[CombatUnit]
    buildings: dict[Unit, int]
    planetary_shield: int
    used_antiballistic: set[int] = field(default_factory=set)
    round: int = 1
    returning_probes: int = 0
    shots_fired: int = 0
    planet_destroyed: bool = False

    def sides(self, side: Side) -> tuple[list[CombatUnit], list[CombatUnit]]:
        """Return ``(own, enemy)`` unit lists for ``side``."""
        if side is Side.ATTACKER:
            return self.attackers, self.defenders
        return self.defenders, self.attackers


def combat_seed(turn: int, mission: Mission) -> str:
    """Seed used when the caller does not supply a generator."""
    return generate_seed(turn, int(mission.id), "combat")


def resolve_combat(
    turn: int,
    mission: Mission,
    destination: Planet,
    *,
    rng: random.Random | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> MissionReport:
    """Resolve the arrival of ``mission`` at ``destination``.

    Neither input is mutated.  The caller applies ``surviving_attacker`` and
    ``surviving_defender`` back to the world and fills in the post-battle
    ownership fields.
    """
    if rng is None:
        rng = make_rng(combat_seed(turn, mission))
    report_id = ReportID(rng.getrandbits(63))

    if _is_uncontested(mission, destination):
        logger.debug("mission %s reaches planet %s unopposed", mission.id, destination.id)
        return MissionReport(
            id=report_id,
            turn=turn,
            mission=copy.deepcopy(mission),
            planet=copy.deepcopy(destination),
            scout_probes=0,
            surviving_attacker=mission.army.copy(),
            surviving_defender=destination.army.copy(),
            planet_colonized=mission.objective is Objective.COLONIZE,
            planet_destroyed=False,
            destination_owned=destination.owned,
            destination_controlled=destination.controlled,
            hidden=not mission.origin_still_controlled,
        )

    state = _setup(mission, destination, rng, rules.combat)
    logger.info(
        "resolving %s of planet %s by mission %s: %d attackers vs %d defenders",
        mission.objective,
        destination.id,
        mission.id,
        len(state.attackers),
        len(state.defenders),
    )

    combat_report = CombatReport()
    while (state.attackers and state.defenders) or state.round == 1:
        if not state.attackers and not state.defenders:
            break
        if state.round > rules.combat.max_rounds:
            logger.warning(
                "mission %s stopped after %d rounds without a decision",
                mission.id,
                rules.combat.max_rounds,
            )
            break

        round_report = _fight_round(state, destination)
        combat_report.rounds.append(round_report)
        logger.debug(
            "round %d: %d attackers, %d defenders, planetary shield %d",
            state.round,
            len(state.attackers),
            len(state.defenders),
            state.planetary_shield,
        )
        state.round += 1

        if state.shots_fired == 0:
            break

    surviving_attacker, surviving_defender = _survivors(state, mission, destination)
    planet_colonized = mission.objective is Objective.COLONIZE and not state.defenders
    if planet_colonized and Ship.COLONY_SHIP in surviving_attacker:
        colony_ships = surviving_attacker.amount(Ship.COLONY_SHIP)
        surviving_attacker = surviving_attacker.with_amount(Ship.COLONY_SHIP, colony_ships - 1)

    keep_report = combat_report.has_shots() or mission.objective is Objective.DESTROY
    logger.info(
        "mission %s resolved after %d rounds (colonized=%s, destroyed=%s)",
        mission.id,
        len(combat_report.rounds),
        planet_colonized,
        state.planet_destroyed,
    )
    return MissionReport(
        id=report_id,
        turn=turn,
        mission=copy.deepcopy(mission),
        planet=copy.deepcopy(destination),
        scout_probes=state.returning_probes,
        surviving_attacker=surviving_attacker,
        surviving_defender=surviving_defender,
        planet_colonized=planet_colonized,
        planet_destroyed=state.planet_destroyed,
        combat_report=combat_report if keep_report else None,
        hidden=False,
    )


def _is_uncontested(mission: Mission, destination: Planet) -> bool:
    if mission.objective is Objective.DEPLOY:
        return True
    return mission.objective is Objective.COLONIZE and destination.controlled == mission.owner


def _defends(unit: Unit, objective: Objective) -> bool:
    if catalog.is_building(unit) or unit is Ship.COLONY_SHIP:
        return False
    if objective is Objective.MISSILE_STRIKE:
        return unit is not Defense.INTERPLANETARY_MISSILE
    return not catalog.is_missile(unit)


def _explode(army: Army, ids: Iterator[int]) -> list[CombatUnit]:
    combat_units = [
        CombatUnit.spawn(unit, next(ids)) for unit, count in army for _ in range(count)
    ]
    combat_units.sort(key=lambda combat_unit: catalog.firing_rank(combat_unit.unit))
    return combat_units


def _setup(
    mission: Mission, destination: Planet, rng: random.Random, rules: CombatRules
) -> BattleState:
    ids = itertools.count(1)
    attackers = _explode(mission.army.filter(lambda unit: unit is not Ship.COLONY_SHIP), ids)
    defenders = _explode(
        destination.army.filter(lambda unit: _defends(unit, mission.objective)), ids
    )
    shield_levels = destination.army.amount(Building.PLANETARY_SHIELD)
    return BattleState(
        mission=mission,
        rng=rng,
        rules=rules,
        attackers=attackers,
        defenders=defenders,
        buildings=dict(destination.army.buildings().units),
        planetary_shield=shield_levels * rules.planetary_shield_per_level,
    )


def _fight_round(state: BattleState, destination: Planet) -> RoundReport:
    state.shots_fired = 0
    for side in Side:
        if side is Side.DEFENDER and state.mission.objective is Objective.MISSILE_STRIKE:
            continue
        _fire(state, side)

    _repair(state)
    _bomb(state)

    attacker = [combat_unit.snapshot() for combat_unit in state.attackers]
    defender = [combat_unit.snapshot() for combat_unit in state.defenders]
    buildings = Army(dict(state.buildings))
    planetary_shield = state.planetary_shield
    antiballistic_fired = len(state.used_antiballistic)

    state.attackers[:] = [combat_unit for combat_unit in state.attackers if combat_unit.alive]
    state.defenders[:] = [combat_unit for combat_unit in state.defenders if combat_unit.alive]

    if state.round == 1:
        _withdraw_probes(state)

    destroy_probability = 0.0
    if state.mission.objective is Objective.DESTROY:
        destroy_probability = _attempt_destruction(state, destination)

    return RoundReport(
        attacker=attacker,
        defender=defender,
        planetary_shield=planetary_shield,
        antiballistic_fired=antiballistic_fired,
        buildings=buildings,
        destroy_probability=destroy_probability,
    )


def _fire(state: BattleState, side: Side) -> None:
    own, enemies = state.sides(side)
    for combat_unit in own:
        combat_unit.reset_logs()
    for enemy in enemies:
        enemy.reset_shield()

    for firer in own:
        if firer.unit is Defense.INTERPLANETARY_MISSILE and _intercept(state, firer, enemies):
            continue
        if catalog.stats(firer.unit).damage == 0:
            continue
        _fire_unit(state, side, firer, enemies)


def _intercept(state: BattleState, missile: CombatUnit, enemies: list[CombatUnit]) -> bool:
    """Let one unused antiballistic missile try to stop ``missile``."""
    interceptor = next(
        (
            enemy
            for enemy in enemies
            if enemy.unit is Defense.ANTIBALLISTIC_MISSILE
            and enemy.id not in state.used_antiballistic
        ),
        None,
    )
    if interceptor is None:
        return False

    state.used_antiballistic.add(interceptor.id)
    destroyed = chance(state.rng, state.rules.interception_probability)
    _record(
        state,
        interceptor,
        ShotReport(unit=Defense.INTERPLANETARY_MISSILE, killed=destroyed, missed=not destroyed),
    )
    if destroyed:
        missile.hull = 0
    return destroyed


def _fire_unit(
    state: BattleState, side: Side, firer: CombatUnit, enemies: list[CombatUnit]
) -> None:
    """Fire ``firer`` until rapid fire runs out or nothing is left to hit."""
    damage = catalog.stats(firer.unit).damage
    while True:
        target = _select_target(state, side, firer, enemies)
        if target is None:
            return
        if isinstance(target, ShotReport):
            _record(state, firer, _hit_planetary_shield(state, damage))
            return

        shot = _apply_damage(target, damage)
        percentage = catalog.rapid_fire(
            firer.unit, target.unit, never=state.rules.rapid_fire_never
        )
        if percentage / 100 > state.rng.random():
            _record(state, firer, shot)
            return
        _record(state, firer, replace(shot, rapid_fire=True))


def _record(state: BattleState, firer: CombatUnit, shot: ShotReport) -> None:
    firer.shots.append(shot)
    state.shots_fired += 1


_PLANETARY_SHIELD_HIT = ShotReport(unit=Building.PLANETARY_SHIELD)


def _select_target(
    state: BattleState, side: Side, firer: CombatUnit, enemies: list[CombatUnit]
) -> CombatUnit | ShotReport | None:
    """Pick a unit to shoot, or the planetary shield marker, or ``None``."""
    if firer.unit is Defense.INTERPLANETARY_MISSILE:
        return choose(state.rng, [enemy for enemy in enemies if _missile_target(enemy.unit)])

    if (
        firer.unit is Ship.BOMBER
        and side is Side.ATTACKER
        and state.planetary_shield > 0
        and state.mission.bombing is not BombingRaid.NONE
    ):
        return _PLANETARY_SHIELD_HIT

    target = choose(
        state.rng, [enemy for enemy in enemies if not catalog.is_missile(enemy.unit)]
    )
    if target is not None and _under_planetary_shield(target.unit) and state.planetary_shield > 0:
        return _PLANETARY_SHIELD_HIT
    return target


def _missile_target(unit: Unit) -> bool:
    if not catalog.is_defense(unit) or catalog.is_missile(unit):
        return False
    return unit is not Defense.SPACE_DOCK


def _under_planetary_shield(unit: Unit) -> bool:
    return catalog.is_defense(unit) and unit is not Defense.SPACE_DOCK


def _hit_planetary_shield(state: BattleState, damage: int) -> ShotReport:
    absorbed = min(damage, state.planetary_shield)
    state.planetary_shield -= absorbed
    return replace(_PLANETARY_SHIELD_HIT, planetary_shield_damage=absorbed)


def _apply_damage(target: CombatUnit, damage: int) -> ShotReport:
    """Apply one shot to ``target``: shield first, then hull."""
    if not target.alive:
        return ShotReport(unit=target.unit, missed=True)

    shield_damage = min(damage, target.shield)
    target.shield -= shield_damage
    hull_damage = min(damage - shield_damage, target.hull)
    target.hull -= hull_damage
    return ShotReport(
        unit=target.unit,
        shield_damage=shield_damage,
        hull_damage=hull_damage,
        killed=not target.alive,
    )


def _repair(state: BattleState) -> None:
    crawlers = sum(
        1
        for combat_unit in state.defenders
        if combat_unit.unit is Defense.CRAWLER and combat_unit.alive
    )
    for _ in range(crawlers):
        target = choose(
            state.rng,
            [
                combat_unit
                for combat_unit in state.defenders
                if catalog.is_turret(combat_unit.unit) and combat_unit.damaged
            ],
        )
        if target is None:
            continue
        missing = catalog.stats(target.unit).hull - target.hull
        healed = min(missing, state.rules.crawler_healing_per_round)
        target.hull += healed
        target.repairs.append(healed)


_RAID_TARGETS: dict[BombingRaid, Callable[[Unit], bool]] = {
    BombingRaid.ECONOMIC: catalog.is_economic_building,
    BombingRaid.INDUSTRIAL: catalog.is_industrial_building,
}


def _bomb(state: BattleState) -> None:
    raid = state.mission.bombing
    if raid is BombingRaid.NONE or state.planetary_shield > 0:
        return

    is_target = _RAID_TARGETS[raid]
    bombers = [
        combat_unit
        for combat_unit in state.attackers
        if combat_unit.unit is Ship.BOMBER and combat_unit.alive
    ]
    for bomber in bombers:
        building = choose(
            state.rng,
            [unit for unit, count in state.buildings.items() if is_target(unit) and count > 0],
        )
        if building is None:
            continue
        if chance(state.rng, state.rules.bombing_success_probability):
            state.buildings[building] -= 1
            _record(state, bomber, ShotReport(unit=building, killed=True))
        else:
            _record(state, bomber, ShotReport(unit=building, missed=True))


def _withdraw_probes(state: BattleState) -> None:
    probes = sum(1 for combat_unit in state.attackers if combat_unit.unit is Ship.PROBE)
    if probes == 0:
        return
    keep_fighting = state.mission.combat_probes or not state.defenders
    if keep_fighting and state.mission.objective is not Objective.SPY:
        return

    state.attackers[:] = [
        combat_unit for combat_unit in state.attackers if combat_unit.unit is not Ship.PROBE
    ]
    state.returning_probes = probes


def _attempt_destruction(state: BattleState, destination: Planet) -> float:
    """Roll once per War Sun against the planet; return the combined chance."""
    if any(
        catalog.is_ship(combat_unit.unit) or combat_unit.unit is Defense.SPACE_DOCK
        for combat_unit in state.defenders
    ):
        return 0.0

    war_suns = sum(1 for combat_unit in state.attackers if combat_unit.unit is Ship.WAR_SUN)
    decay = state.rules.destroy_probability_decay * (state.round - 1)
    probability = max(destination.destroy_probability - decay, 0.0)
    for _ in range(war_suns):
        if chance(state.rng, probability):
            state.defenders.clear()
            state.planet_destroyed = True

    return 1 - (1 - probability) ** war_suns


def _survivors(state: BattleState, mission: Mission, destination: Planet) -> tuple[Army, Army]:
    attacker = Army.tally(combat_unit.unit for combat_unit in state.attackers)
    defender = Army.tally(combat_unit.unit for combat_unit in state.defenders)

    if state.attackers or not state.defenders:
        attacker = attacker.with_amount(
            Ship.COLONY_SHIP, mission.army.amount(Ship.COLONY_SHIP)
        )
    else:
        antiballistic = destination.army.amount(Defense.ANTIBALLISTIC_MISSILE)
        unused = antiballistic - len(state.used_antiballistic)
        defender = (
            defender.with_amount(Ship.COLONY_SHIP, destination.army.amount(Ship.COLONY_SHIP))
            .with_amount(Defense.ANTIBALLISTIC_MISSILE, unused)
            .with_amount(
                Defense.INTERPLANETARY_MISSILE,
                destination.army.amount(Defense.INTERPLANETARY_MISSILE),
            )
        )

    attacker = attacker.with_amount(
        Ship.PROBE, attacker.amount(Ship.PROBE) + state.returning_probes
    )
    if not state.planet_destroyed:
        defender = defender.merge(Army(dict(state.buildings)))
    return attacker, defender
