# taxi_park/analytics/queries.py
from collections import Counter, defaultdict
from fractions import Fraction
from math import floor

from taxi_park.domain.entities.driver import Driver
from taxi_park.domain.entities.passenger import Passenger
from taxi_park.domain.park import TaxiPark

PERIOD_WIDTH = 10  # minutes
PARETO_DRIVER_SHARE = 0.2
PARETO_INCOME_SHARE = 0.8


def find_fake_drivers(park: TaxiPark) -> set[Driver]:
    """Drivers who performed no trips."""
    active = {t.driver for t in park.trips}
    return set(park.all_drivers) - active


def find_faithful_passengers(park: TaxiPark, min_trips: int) -> set[Passenger]:
    """Passengers who completed at least ``min_trips`` trips."""
    counts: Counter[Passenger] = Counter()
    for t in park.trips:
        counts.update(t.passengers)
    return {p for p in park.all_passengers if counts[p] >= min_trips}


def find_frequent_passengers(park: TaxiPark, driver: Driver) -> set[Passenger]:
    """Passengers taken by ``driver`` more than once."""
    counts: Counter[Passenger] = Counter()
    for t in park.trips_of(driver):
        counts.update(t.passengers)
    return {p for p in park.all_passengers if counts[p] > 1}


def find_smart_passengers(park: TaxiPark) -> set[Passenger]:
    """Passengers who had a discount on the strict majority of their trips."""
    # passenger -> [discounted, full fare]
    tally: dict[Passenger, list[int]] = defaultdict(lambda: [0, 0])
    for t in park.trips:
        slot = 0 if t.is_discounted else 1
        for p in t.passengers:
            tally[p][slot] += 1
    return {p for p, (disc, full) in tally.items() if disc > full}


def find_the_most_frequent_trip_duration_period(
    park: TaxiPark, *, width: int = PERIOD_WIDTH
) -> range | None:
    """
    Most frequent duration period among 0..9, 10..19, 20..29 and so on.

    Returns the period as ``range(start, start + width)``, or None when the
    park has no trips. Among equally frequent periods the one seen first wins.
    """
    buckets = Counter(t.duration // width for t in park.trips)
    if not buckets:
        return None
    key, _ = buckets.most_common(1)[0]
    start = key * width
    return range(start, start + width)


def check_pareto_principle(
    park: TaxiPark,
    *,
    driver_share: float = PARETO_DRIVER_SHARE,
    income_share: float = PARETO_INCOME_SHARE,
) -> bool:
    """Check whether 20% of the drivers contribute at least 80% of the income."""
    if not park.trips:
        return False

    income: dict[Driver, float] = defaultdict(float)
    for t in park.trips:
        income[t.driver] += t.cost
    ranked = sorted(income.values(), reverse=True)

    # exact floor of n * share; float products can land just below an integer
    top_n = floor(len(park.all_drivers) * Fraction(str(driver_share)))
    return sum(ranked[:top_n]) >= park.total_income * income_share
