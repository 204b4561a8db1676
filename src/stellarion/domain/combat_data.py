"""Battle data structures for Stellarion.

Combat units are the exploded, individually tracked form of an army entry.
They live only for the duration of one battle.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from stellarion.domain import units as catalog
from stellarion.domain.units import Unit


@dataclass(frozen=True, slots=True)
class ShotReport:
    """Outcome of a single shot.

    ``unit`` names the kind that was hit even when no unit instance was, as
    with planetary shield hits.  ``rapid_fire`` marks a shot after which the
    firer fired again in the same round.
    """

    unit: Unit | None = None
    shield_damage: int = 0
    hull_damage: int = 0
    missed: bool = False
    killed: bool = False
    planetary_shield_damage: int = 0
    rapid_fire: bool = False


@dataclass(slots=True)
class CombatUnit:
    """One unit instance taking part in a battle."""

    id: int
    unit: Unit
    hull: int
    shield: int
    repairs: list[int] = field(default_factory=list)
    shots: list[ShotReport] = field(default_factory=list)

    @classmethod
    def spawn(cls, unit: Unit, unit_id: int) -> CombatUnit:
        """Create a unit at full hull and shield."""
        unit_type = catalog.stats(unit)
        return cls(id=unit_id, unit=unit, hull=unit_type.hull, shield=unit_type.shield)

    @property
    def alive(self) -> bool:
        return self.hull > 0

    @property
    def damaged(self) -> bool:
        return 0 < self.hull < catalog.stats(self.unit).hull

    def reset_shield(self) -> None:
        self.shield = catalog.stats(self.unit).shield

    def reset_logs(self) -> None:
        self.repairs = []
        self.shots = []

    def snapshot(self) -> CombatUnit:
        """Copy of the current state for a round report."""
        return CombatUnit(
            id=self.id,
            unit=self.unit,
            hull=self.hull,
            shield=self.shield,
            repairs=list(self.repairs),
            shots=list(self.shots),
        )
