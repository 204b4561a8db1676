"""Domain model for the Stellarion combat engine.

This package hosts every rule needed to resolve a mission's arrival at a
planet.  It exposes:

* The unit catalog and the ``Army`` multiset (see :mod:`units`, :mod:`army`).
* Enumerations and strongly-typed identifiers (see :mod:`enums`, :mod:`models`).
* Rule configuration objects (see :mod:`rules_config`).
* The combat simulator and the report it produces (see :mod:`combat`,
  :mod:`report`).

Everything here is pure and in-memory; persistence and turn orchestration
belong to the caller.
"""

from . import army, combat, combat_data, enums, models, report, rules_config, units

__all__ = [
    "army",
    "combat",
    "combat_data",
    "enums",
    "models",
    "report",
    "rules_config",
    "units",
]
