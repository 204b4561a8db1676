"""Army multiset: unit kind to count."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field

from stellarion.domain import units as catalog
from stellarion.domain.units import Resources, Unit


@dataclass(slots=True)
class Army:
    """Multiset of unit kinds.

    Non-positive counts are dropped and entries are kept in catalog order, so
    two armies with the same composition compare and serialize identically.
    """

    units: dict[Unit, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.units = {
            unit: self.units[unit]
            for unit in sorted(self.units, key=catalog.catalog_index)
            if self.units[unit] > 0
        }

    @classmethod
    def tally(cls, units: Iterable[Unit]) -> Army:
        """Count individual units back into an army."""
        return cls(dict(Counter(units)))

    def __iter__(self) -> Iterator[tuple[Unit, int]]:
        return iter(self.units.items())

    def __len__(self) -> int:
        return len(self.units)

    def __contains__(self, unit: object) -> bool:
        return unit in self.units

    def amount(self, unit: Unit) -> int:
        return self.units.get(unit, 0)

    def filter(self, predicate: Callable[[Unit], bool]) -> Army:
        return Army({unit: count for unit, count in self.units.items() if predicate(unit)})

    def merge(self, other: Army) -> Army:
        """Return a new army holding the summed counts of both."""
        merged = dict(self.units)
        for unit, count in other:
            merged[unit] = merged.get(unit, 0) + count
        return Army(merged)

    def with_amount(self, unit: Unit, count: int) -> Army:
        return Army({**self.units, unit: count})

    def copy(self) -> Army:
        return Army(dict(self.units))

    def buildings(self) -> Army:
        return self.filter(catalog.is_building)

    def ships(self) -> Army:
        return self.filter(catalog.is_ship)

    def defenses(self) -> Army:
        return self.filter(catalog.is_defense)

    def total(self) -> int:
        return sum(self.units.values())

    def total_production(self) -> int:
        """Sum of production tiers, which is what a jump gate charges."""
        return sum(catalog.stats(unit).production * count for unit, count in self)

    def speed(self) -> float:
        """Speed of the slowest member; ``0.0`` for an empty army."""
        return min((catalog.stats(unit).speed for unit in self.units), default=0.0)

    def fuel_consumption(self, distance: float) -> int:
        fuel = sum(catalog.stats(unit).fuel_consumption * count for unit, count in self)
        return math.ceil(fuel * distance)

    def price(self) -> Resources:
        total = Resources()
        for unit, count in self:
            total = total + catalog.stats(unit).price * count
        return total
