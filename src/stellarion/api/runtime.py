"""Runtime primitives backing the Stellarion HTTP API."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stellarion.config import Settings, get_settings
from stellarion.domain import units as catalog
from stellarion.domain.combat import combat_seed, resolve_combat
from stellarion.domain.models import Mission, Planet
from stellarion.domain.report import MissionReport
from stellarion.domain.rules_config import DEFAULT_RULES, RulesConfig
from stellarion.domain.units import Unit
from stellarion.utils.rng import make_rng

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Simulation:
    """A resolved combat together with the seed that produced it."""

    seed: str
    report: MissionReport


class CombatService:
    """Runs stateless combat simulations on behalf of the API."""

    def __init__(self, *, rules: RulesConfig, max_units_per_side: int) -> None:
        self._rules = rules
        self._max_units_per_side = max_units_per_side

    def simulate(
        self,
        turn: int,
        mission: Mission,
        destination: Planet,
        *,
        seed: str | None = None,
    ) -> Simulation:
        """Resolve one arrival; raise ``ValueError`` for oversized armies."""

        for label, army in (("mission", mission.army), ("destination", destination.army)):
            if army.total() > self._max_units_per_side:
                raise ValueError(
                    f"{label} army has {army.total()} units, "
                    f"limit is {self._max_units_per_side}"
                )

        seed = seed if seed is not None else combat_seed(turn, mission)
        logger.info("simulating mission %s at turn %d with seed %r", mission.id, turn, seed)
        report = resolve_combat(turn, mission, destination, rng=make_rng(seed), rules=self._rules)
        return Simulation(seed=seed, report=report)

    @staticmethod
    def describe(unit: Unit) -> dict[str, object]:
        """Return a JSON-friendly catalog entry."""

        unit_type = catalog.stats(unit)
        return {
            "kind": unit.value,
            "name": catalog.display_name(unit),
            "family": type(unit).__name__.lower(),
            "hull": unit_type.hull,
            "shield": unit_type.shield,
            "damage": unit_type.damage,
            "speed": unit_type.speed,
            "fuel_consumption": unit_type.fuel_consumption,
            "production": unit_type.production,
            "price": {
                "metal": unit_type.price.metal,
                "crystal": unit_type.price.crystal,
                "deuterium": unit_type.price.deuterium,
            },
            "rapid_fire": {target.value: value for target, value in unit_type.rapid_fire.items()},
        }


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig = DEFAULT_RULES
    ) -> None:
        self.settings = settings or get_settings()
        self.rules = rules
        self.combat = CombatService(
            rules=rules,
            max_units_per_side=self.settings.max_units_per_side,
        )


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
