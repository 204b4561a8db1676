"""JSON encoding for mission reports and the inputs that produce them.

Reports are plain dataclasses; pydantic ``TypeAdapter`` instances do the
encoding so the surrounding system can persist or transmit them as-is.
"""

from __future__ import annotations

from pydantic import TypeAdapter

from stellarion.domain.models import Mission, Planet
from stellarion.domain.report import CombatReport, MissionReport

REPORT_ADAPTER: TypeAdapter[MissionReport] = TypeAdapter(MissionReport)
COMBAT_REPORT_ADAPTER: TypeAdapter[CombatReport] = TypeAdapter(CombatReport)
MISSION_ADAPTER: TypeAdapter[Mission] = TypeAdapter(Mission)
PLANET_ADAPTER: TypeAdapter[Planet] = TypeAdapter(Planet)


def dump_report(report: MissionReport, *, indent: int | None = None) -> bytes:
    """Serialize a mission report to JSON bytes."""

    return REPORT_ADAPTER.dump_json(report, indent=indent)


def load_report(data: bytes | str) -> MissionReport:
    """Rebuild a mission report from JSON produced by :func:`dump_report`."""

    return REPORT_ADAPTER.validate_json(data)


def dump_combat_report(report: CombatReport) -> bytes:
    return COMBAT_REPORT_ADAPTER.dump_json(report)


def load_mission(data: bytes | str) -> Mission:
    return MISSION_ADAPTER.validate_json(data)


def load_planet(data: bytes | str) -> Planet:
    return PLANET_ADAPTER.validate_json(data)
