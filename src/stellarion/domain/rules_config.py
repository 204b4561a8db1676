"""Declarative rule configuration for the combat engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Constants driving battle resolution."""

    planetary_shield_per_level: int = 100
    crawler_healing_per_round: int = 50
    interception_probability: float = 0.5
    bombing_success_probability: float = 0.1
    destroy_probability_decay: float = 0.01  # per round after the first
    rapid_fire_never: int = 101  # percent; above any draw, so the firer always stops
    max_rounds: int = 100


@dataclass(frozen=True, slots=True)
class ReportRules:
    """Constants for what reports reveal to each player."""

    probes_per_production_level: int = 5


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Aggregate of all rule sets."""

    combat: CombatRules = CombatRules()
    reports: ReportRules = ReportRules()


DEFAULT_RULES = RulesConfig()
