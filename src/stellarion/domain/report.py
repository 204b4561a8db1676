"""Reports produced by the combat simulator.

Reports are passive records.  The queries below answer presentation
questions (who won, what may a given player see) and never re-run any part
of the battle.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from stellarion.domain import units as catalog
from stellarion.domain.army import Army
from stellarion.domain.combat_data import CombatUnit
from stellarion.domain.enums import Objective, ReportOutcome, Side
from stellarion.domain.models import Mission, Planet, PlayerID, ReportID
from stellarion.domain.rules_config import DEFAULT_RULES, RulesConfig
from stellarion.domain.units import Ship, Unit


@dataclass(frozen=True, slots=True)
class RoundReport:
    """State of both sides at the end of one round, before casualties are removed."""

    attacker: list[CombatUnit]
    defender: list[CombatUnit]
    planetary_shield: int
    antiballistic_fired: int
    buildings: Army
    destroy_probability: float = 0.0

    def units(self, side: Side) -> list[CombatUnit]:
        return self.attacker if side is Side.ATTACKER else self.defender


@dataclass(slots=True)
class CombatReport:
    """Ordered round reports of one battle."""

    rounds: list[RoundReport] = field(default_factory=list)

    def has_shots(self) -> bool:
        return any(
            combat_unit.shots
            for round_report in self.rounds
            for combat_unit in (*round_report.attacker, *round_report.defender)
        )


@dataclass(frozen=True, slots=True)
class UnitTally:
    """What a viewer learns about one unit kind on one side.

    ``lost`` is ``None`` when only the starting count is known.
    """

    unit: Unit
    total: int
    lost: int | None


@dataclass(slots=True)
class MissionReport:
    """Final outcome of a mission's arrival."""

    id: ReportID
    turn: int
    mission: Mission
    planet: Planet
    scout_probes: int
    surviving_attacker: Army
    surviving_defender: Army
    planet_colonized: bool = False
    planet_destroyed: bool = False
    destination_owned: PlayerID | None = None
    destination_controlled: PlayerID | None = None
    combat_report: CombatReport | None = None
    hidden: bool = False

    def winner(self) -> PlayerID | None:
        """Return the winning player, ``None`` for a spy mission whose probes came back."""
        if self.mission.objective is Objective.SPY and self.scout_probes > 0:
            return None

        for unit, count in self.surviving_attacker:
            baseline = self.scout_probes if unit is Ship.PROBE else 0
            if count > baseline:
                return self.mission.owner

        return self.planet.controlled

    def can_see(self, side: Side, viewer: PlayerID) -> bool:
        """Whether ``viewer`` may inspect the units on ``side``."""
        if side is Side.ATTACKER:
            return (
                viewer == self.mission.owner
                or viewer == self.planet.owned
                or viewer == self.winner()
                or self.mission.objective is Objective.SPY
            )
        return viewer == self.planet.controlled or viewer == self.winner()

    def outcome(self, viewer: PlayerID) -> ReportOutcome:
        if self.mission.objective is Objective.MISSILE_STRIKE:
            return ReportOutcome.MISSILE
        if self.mission.objective is Objective.SPY and self.scout_probes > 0:
            return ReportOutcome.SCOUTED
        if self.winner() == viewer:
            return ReportOutcome.WON
        return ReportOutcome.LOST

    def tally(
        self,
        side: Side,
        unit: Unit,
        viewer: PlayerID,
        *,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> UnitTally | None:
        """Return what ``viewer`` knows about ``unit`` on ``side``.

        A viewer who cannot see the side still learns the starting count of
        a defending kind when enough of their probes came back: each
        production tier above the first needs another
        ``probes_per_production_level`` scouts.
        """
        if side is Side.ATTACKER:
            total = self.mission.army.amount(unit)
            survived = self.surviving_attacker.amount(unit)
        else:
            total = self.planet.army.amount(unit)
            survived = self.surviving_defender.amount(unit)

        if self.can_see(side, viewer):
            return UnitTally(unit=unit, total=total, lost=total - survived)

        threshold = (catalog.stats(unit).production - 1) * rules.reports.probes_per_production_level
        if side is Side.DEFENDER and viewer == self.mission.owner and self.scout_probes > threshold:
            return UnitTally(unit=unit, total=total, lost=None)
        return None
