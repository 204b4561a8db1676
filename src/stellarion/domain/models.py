"""Snapshots of the world state the combat engine reads.

The map, turn orchestration and persistence layers own the real planets
and missions.  The dataclasses below carry only the fields combat needs,
and the simulator never mutates them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import NewType

from stellarion.domain.army import Army
from stellarion.domain.enums import BombingRaid, Objective

# --- Strongly typed identifiers -------------------------------------------------

PlayerID = NewType("PlayerID", int)
PlanetID = NewType("PlanetID", int)
MissionID = NewType("MissionID", int)
ReportID = NewType("ReportID", int)


# --- Snapshots ------------------------------------------------------------------


@dataclass(slots=True)
class Planet:
    """Pre-battle state of a mission's destination."""

    id: PlanetID
    name: str = ""
    owned: PlayerID | None = None
    controlled: PlayerID | None = None
    army: Army = field(default_factory=Army)
    destroy_probability: float = 0.1

    def __post_init__(self) -> None:
        if not 0.0 <= self.destroy_probability <= 1.0:
            raise ValueError(
                f"destroy_probability must be between 0.0 and 1.0, got {self.destroy_probability}"
            )


@dataclass(slots=True)
class Mission:
    """An army dispatched from an origin to a destination with an objective."""

    id: MissionID
    owner: PlayerID
    origin: PlanetID
    destination: PlanetID
    objective: Objective
    army: Army = field(default_factory=Army)
    send: int = 0
    origin_owned: PlayerID | None = None
    origin_controlled: PlayerID | None = None
    bombing: BombingRaid = BombingRaid.NONE
    combat_probes: bool = False
    jump_gate: bool = False

    @property
    def origin_still_controlled(self) -> bool:
        return self.origin_controlled == self.owner

    def speed(self) -> float:
        if self.jump_gate:
            return math.inf
        return self.army.speed()

    def fuel_consumption(self, distance: float) -> int:
        if self.jump_gate:
            return 0
        return self.army.fuel_consumption(distance)

    def jump_cost(self) -> int:
        return self.army.total_production()

    def total(self) -> int:
        return self.army.total()
