# domain/entities/trip.py
from dataclasses import dataclass

from taxi_park.domain.entities.driver import Driver
from taxi_park.domain.entities.passenger import Passenger


@dataclass(frozen=True)
class Trip:
    driver: Driver
    passengers: frozenset[Passenger]
    duration: int  # minutes
    cost: float
    discount: float | None = None  # None or 0.0 => full fare

    @property
    def is_discounted(self) -> bool:
        return (self.discount or 0.0) > 0.0
