# taxi_park/services/queries.py
"""
The six park queries. Each one is a pure function of a TaxiPark (plus parameters),
never mutates it and returns the same answer when called twice on the same park.
"""

from collections import Counter

import numpy as np

from taxi_park.domain.entities.driver import Driver
from taxi_park.domain.entities.passenger import Passenger
from taxi_park.domain.park import TaxiPark
from taxi_park.runtime.registries import register_query

DEFAULT_PERIOD_MIN = 10
DEFAULT_DRIVER_SHARE = 0.2
DEFAULT_INCOME_SHARE = 0.8


@register_query("fake_drivers")
def find_fake_drivers(park: TaxiPark) -> set[Driver]:
    """Drivers who performed no trips."""
    active = {t.driver for t in park.trips}
    return set(park.all_drivers - active)


@register_query("faithful_passengers")
def find_faithful_passengers(park: TaxiPark, min_trips: int) -> set[Passenger]:
    """Passengers who completed at least `min_trips` trips."""
    if min_trips < 0:
        raise ValueError(f"min_trips must be >= 0, got {min_trips}")
    counts = Counter(p for t in park.trips for p in t.passengers)
    return {p for p in park.all_passengers if counts[p] >= min_trips}


@register_query("frequent_passengers")
def find_frequent_passengers(park: TaxiPark, driver: Driver) -> set[Passenger]:
    """Passengers taken by `driver` more than once."""
    counts = Counter(p for t in park.trips_of(driver) for p in t.passengers)
    return {p for p, n in counts.items() if n > 1 and p in park.all_passengers}


@register_query("smart_passengers")
def find_smart_passengers(park: TaxiPark) -> set[Passenger]:
    """Passengers who had a discount on the strict majority of their trips."""
    smart: set[Passenger] = set()
    for p in park.all_passengers:
        trips = park.trips_with(p)
        discounted = sum(1 for t in trips if t.has_discount)
        if discounted > len(trips) - discounted:
            smart.add(p)
    return smart


@register_query("duration_period")
def find_most_frequent_trip_duration_period(
    park: TaxiPark, width: int = DEFAULT_PERIOD_MIN
) -> range | None:
    """
    Most frequent duration period among 0..9, 10..19, 20..29 and so on.
    Returns range(start, start + width), or None if there are no trips.
    Ties go to the shortest period.
    """
    if width <= 0:
        raise ValueError(f"width must be > 0, got {width}")
    if not park.trips:
        return None
    # bucket index -> trip count
    counts = Counter(t.duration // width for t in park.trips)
    top = max(counts.values())
    k = min(b for b, n in counts.items() if n == top)
    start = k * width
    return range(start, start + width)


@register_query("pareto_principle")
def check_pareto_principle(
    park: TaxiPark,
    driver_share: float = DEFAULT_DRIVER_SHARE,
    income_share: float = DEFAULT_INCOME_SHARE,
) -> bool:
    """
    Whether the top `driver_share` of all drivers (rounded down) earn at least
    `income_share` of the total income. False for a park without trips.
    """
    if not park.trips:
        return False
    total = park.total_income()
    incomes = np.sort(np.fromiter(park.income_by_driver().values(), dtype=float))[::-1]
    top_n = int(driver_share * len(park.all_drivers))
    return float(incomes[:top_n].sum()) >= income_share * total
