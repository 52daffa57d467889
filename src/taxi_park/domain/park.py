# taxi_park/domain/park.py
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from taxi_park.domain.entities.driver import Driver
from taxi_park.domain.entities.passenger import Passenger
from taxi_park.domain.entities.trip import Trip


@dataclass(frozen=True)
class TaxiPark:
    """
    Read-only snapshot of a taxi park: the registered drivers and passengers
    plus every trip performed, in the order they were recorded.

    A trip's driver is not required to be registered in ``all_drivers``.
    """

    all_drivers: frozenset[Driver] = field(default_factory=frozenset)
    all_passengers: frozenset[Passenger] = field(default_factory=frozenset)
    trips: tuple[Trip, ...] = ()

    @classmethod
    def of(
        cls,
        drivers: Iterable[Driver],
        passengers: Iterable[Passenger],
        trips: Iterable[Trip],
    ) -> TaxiPark:
        return cls(frozenset(drivers), frozenset(passengers), tuple(trips))

    def trips_of(self, driver: Driver) -> list[Trip]:
        return [t for t in self.trips if t.driver == driver]

    @property
    def total_income(self) -> float:
        return sum(t.cost for t in self.trips)
