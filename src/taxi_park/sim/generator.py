# sim/generator.py
import numpy as np

from taxi_park.config.models import GeneratorModel
from taxi_park.domain.entities.driver import Driver
from taxi_park.domain.entities.passenger import Passenger
from taxi_park.domain.entities.trip import Trip
from taxi_park.domain.park import TaxiPark
from taxi_park.sim.rng import RNGRegistry

DISCOUNTS = (0.1, 0.2, 0.3, 0.4)


class ParkGenerator:
    """Builds random but reproducible parks from a GeneratorModel."""

    def __init__(self, cfg: GeneratorModel, *, rng_registry: RNGRegistry | None = None):
        self.cfg = cfg
        self.rng_registry = rng_registry or RNGRegistry(cfg.seed, dataset="park")
        self.drivers = [Driver(f"D-{i}") for i in range(cfg.drivers)]
        self.passengers = [Passenger(f"P-{i}") for i in range(cfg.passengers)]
        self._p = self._normalize_weights(cfg.driver_weights)

    @staticmethod
    def _normalize_weights(weights):
        # lengths and signs are checked by GeneratorModel
        if weights is None:
            return None  # uniform in Generator.choice
        w = np.asarray(weights, dtype=float)
        return w / w.sum()

    def _trip(self, rng: np.random.Generator) -> Trip:
        cfg = self.cfg
        driver = self.drivers[int(rng.choice(len(self.drivers), p=self._p))]
        k = int(rng.integers(1, min(cfg.max_passengers_per_trip, len(self.passengers)) + 1))
        riders = rng.choice(len(self.passengers), size=k, replace=False)
        discount = None
        if rng.random() < cfg.discount_rate:
            discount = float(rng.choice(DISCOUNTS))
        return Trip(
            driver=driver,
            passengers=frozenset(self.passengers[int(i)] for i in riders),
            duration=int(rng.integers(0, cfg.max_duration + 1)),
            cost=round(float(rng.uniform(0.0, cfg.max_cost)), 2),
            discount=discount,
        )

    def generate(self) -> TaxiPark:
        # trip i draws from its own substream, so it does not depend on the trip count
        rngs = (self.rng_registry.substream("trip", i) for i in range(self.cfg.trips))
        trips = [self._trip(rng) for rng in rngs]
        return TaxiPark.of(self.drivers, self.passengers, trips)
