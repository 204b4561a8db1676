"""Enumerations for the Stellarion domain."""

from __future__ import annotations

from enum import StrEnum


class Objective(StrEnum):
    """What a mission intends to do once it reaches its destination."""

    COLONIZE = "colonize"
    ATTACK = "attack"
    SPY = "spy"
    MISSILE_STRIKE = "missile_strike"
    DESTROY = "destroy"
    DEPLOY = "deploy"


class BombingRaid(StrEnum):
    """Building category targeted by bombers once the planetary shield is down."""

    NONE = "none"
    ECONOMIC = "economic"
    INDUSTRIAL = "industrial"


class Side(StrEnum):
    """Side of a battle."""

    ATTACKER = "attacker"
    DEFENDER = "defender"

    def opposite(self) -> Side:
        return Side.DEFENDER if self is Side.ATTACKER else Side.ATTACKER


class ReportOutcome(StrEnum):
    """Icon shown next to a mission report in a player's history."""

    MISSILE = "missile"
    SCOUTED = "scouted"
    WON = "won"
    LOST = "lost"
