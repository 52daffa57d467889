from math import isfinite
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from taxi_park.domain.entities.driver import Driver
from taxi_park.domain.entities.passenger import Passenger
from taxi_park.domain.entities.trip import Trip
from taxi_park.domain.park import TaxiPark


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class AnalyticsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    min_trips: int = 2  # faithful passenger threshold used by reports
    period_width: int = 10  # minutes
    driver_share: float = 0.2
    income_share: float = 0.8

    @field_validator("min_trips")
    @classmethod
    def _nonneg(cls, v: int) -> int:
        if v < 0:
            raise ValueError("min_trips must be >= 0")
        return v

    @field_validator("period_width")
    @classmethod
    def _positive_width(cls, v: int) -> int:
        if v < 1:
            raise ValueError("period_width must be >= 1")
        return v

    @field_validator("driver_share", "income_share")
    @classmethod
    def _share(cls, v: float, info: ValidationInfo) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError(f"{info.field_name} must be in (0, 1]")
        return v


# ----------------- DATASET ---------------------


class TripModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    driver: str
    passengers: list[str]
    duration: int  # minutes
    cost: float
    discount: float | None = None

    @field_validator("passengers")
    @classmethod
    def _non_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("a trip needs at least one passenger")
        return v

    @field_validator("duration", "cost", "discount")
    @classmethod
    def _nonneg(cls, v, info: ValidationInfo):
        if v is not None and v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    def to_trip(self) -> Trip:
        return Trip(
            driver=Driver(self.driver),
            passengers=frozenset(Passenger(p) for p in self.passengers),
            duration=self.duration,
            cost=self.cost,
            discount=self.discount,
        )


class TaxiParkModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    drivers: list[str] = Field(default_factory=list)
    passengers: list[str] = Field(default_factory=list)
    trips: list[TripModel] = Field(default_factory=list)
    # off by default: trips may reference drivers missing from the roster
    strict_membership: bool = False

    @model_validator(mode="after")
    def _check_membership(self):
        if not self.strict_membership:
            return self
        drivers, passengers = set(self.drivers), set(self.passengers)
        for i, t in enumerate(self.trips):
            if t.driver not in drivers:
                raise ValueError(f"trips[{i}]: unknown driver {t.driver!r}")
            unknown = sorted(set(t.passengers) - passengers)
            if unknown:
                raise ValueError(f"trips[{i}]: unknown passengers {unknown}")
        return self

    def to_park(self) -> TaxiPark:
        return TaxiPark.of(
            (Driver(d) for d in self.drivers),
            (Passenger(p) for p in self.passengers),
            (t.to_trip() for t in self.trips),
        )


class GeneratorModel(BaseModel):
    """Synthetic park parameters."""

    model_config = ConfigDict(extra="forbid")
    seed: int = 123
    drivers: int = Field(default=10, ge=0)
    passengers: int = Field(default=30, ge=1)
    trips: int = Field(default=100, ge=0)
    max_passengers_per_trip: int = Field(default=4, ge=1)
    max_duration: int = Field(default=60, ge=0)  # minutes
    max_cost: float = Field(default=50.0, ge=0.0)
    discount_rate: float = Field(default=0.3, ge=0.0, le=1.0)
    driver_weights: list[float] | None = None  # skews trips towards some drivers

    @field_validator("driver_weights", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        # [] or "" should mean "uniform"
        if v is None:
            return None
        if isinstance(v, (list, tuple, str)) and len(v) == 0:
            return None
        return v

    @model_validator(mode="after")
    def _check_fleet(self):
        if self.trips > 0 and self.drivers == 0:
            raise ValueError("cannot generate trips without drivers")
        w = self.driver_weights
        if w is None:
            return self
        if len(w) != self.drivers:
            raise ValueError(f"driver_weights must have length {self.drivers}, got {len(w)}")
        if any(not isfinite(x) or x < 0 for x in w):
            raise ValueError("driver_weights must be finite and >= 0")
        if sum(w) <= 0:
            raise ValueError("driver_weights must sum to a positive value")
        return self


# ------------------------------------------------------------------


class AppModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    run_id: str = "local"
    log: LogModel = LogModel()
    analytics: AnalyticsModel = AnalyticsModel()
    park: TaxiParkModel | None = None
    generator: GeneratorModel | None = None

    @model_validator(mode="after")
    def _one_source(self):
        if (self.park is None) == (self.generator is None):
            raise ValueError("exactly one of 'park' or 'generator' must be set")
        return self
