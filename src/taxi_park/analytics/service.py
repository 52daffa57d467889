# analytics/service.py
import time
from collections.abc import Callable
from dataclasses import dataclass

from taxi_park.analytics import queries
from taxi_park.analytics.hooks import NoopHooks, QueryHooks
from taxi_park.config.models import AnalyticsModel
from taxi_park.domain.entities.driver import Driver
from taxi_park.domain.entities.passenger import Passenger
from taxi_park.domain.park import TaxiPark


@dataclass
class ParkReport:
    fake_drivers: set[Driver]
    faithful_passengers: set[Passenger]
    frequent_passengers: dict[Driver, set[Passenger]]
    smart_passengers: set[Passenger]
    most_frequent_period: range | None
    pareto: bool


class TaxiParkAnalytics:
    """Runs the park queries with the configured thresholds and reports each one to the hooks."""

    def __init__(
        self,
        park: TaxiPark,
        settings: AnalyticsModel | None = None,
        hooks: QueryHooks | None = None,
    ):
        self.park = park
        self.settings = settings or AnalyticsModel()
        self._hooks = hooks or NoopHooks()

    def _run(self, name: str, fn: Callable, **params):
        self._hooks.query_start(name, **params)
        t0 = time.perf_counter()
        try:
            result = fn(self.park, **params)
        except Exception as exc:
            self._hooks.error(name, exc=exc)
            raise
        self._hooks.query_end(name, result=result, ms=(time.perf_counter() - t0) * 1000)
        return result

    def fake_drivers(self) -> set[Driver]:
        return self._run("fake_drivers", queries.find_fake_drivers)

    def faithful_passengers(self, min_trips: int | None = None) -> set[Passenger]:
        if min_trips is None:
            min_trips = self.settings.min_trips
        return self._run(
            "faithful_passengers", queries.find_faithful_passengers, min_trips=min_trips
        )

    def frequent_passengers(self, driver: Driver) -> set[Passenger]:
        return self._run("frequent_passengers", queries.find_frequent_passengers, driver=driver)

    def smart_passengers(self) -> set[Passenger]:
        return self._run("smart_passengers", queries.find_smart_passengers)

    def most_frequent_period(self) -> range | None:
        return self._run(
            "most_frequent_period",
            queries.find_the_most_frequent_trip_duration_period,
            width=self.settings.period_width,
        )

    def pareto(self) -> bool:
        return self._run(
            "pareto",
            queries.check_pareto_principle,
            driver_share=self.settings.driver_share,
            income_share=self.settings.income_share,
        )

    def report(self) -> ParkReport:
        return ParkReport(
            fake_drivers=self.fake_drivers(),
            faithful_passengers=self.faithful_passengers(),
            frequent_passengers={
                d: self.frequent_passengers(d) for d in sorted(self.park.all_drivers)
            },
            smart_passengers=self.smart_passengers(),
            most_frequent_period=self.most_frequent_period(),
            pareto=self.pareto(),
        )
