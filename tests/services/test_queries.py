# tests/services/test_queries.py
import pytest

from taxi_park.domain.entities.driver import Driver
from taxi_park.domain.entities.passenger import Passenger
from taxi_park.domain.entities.trip import Trip
from taxi_park.domain.park import TaxiPark
from taxi_park.services.queries import (
    check_pareto_principle,
    find_fake_drivers,
    find_faithful_passengers,
    find_frequent_passengers,
    find_most_frequent_trip_duration_period,
    find_smart_passengers,
)

D = [Driver(i) for i in range(6)]
P = [Passenger(i) for i in range(6)]


def park(drivers, passengers, *trips) -> TaxiPark:
    return TaxiPark(frozenset(drivers), frozenset(passengers), tuple(trips))


def trip(d, ps=(), duration=10, cost=10.0, discount=None) -> Trip:
    return Trip(driver=D[d], passengers=frozenset(P[i] for i in ps), duration=duration, cost=cost, discount=discount)


EMPTY = park(D[:3], P[:3])

SAMPLE = park(
    D[:4],
    P[:5],
    trip(0, [0, 1], duration=5, cost=10.0),
    trip(0, [0], duration=12, cost=20.0, discount=0.1),
    trip(0, [0, 2], duration=15, cost=15.0, discount=0.2),
    trip(1, [1, 2], duration=27, cost=30.0, discount=0.3),
    trip(1, [1], duration=3, cost=5.0),
    trip(2, [3], duration=11, cost=12.0, discount=0.1),
)


# ------------------ FAKE DRIVERS ------------------


def test_fake_drivers_are_those_without_trips():
    assert find_fake_drivers(SAMPLE) == {D[3]}


def test_fake_drivers_all_when_no_trips():
    assert find_fake_drivers(EMPTY) == set(D[:3])


def test_fake_drivers_empty_park():
    assert find_fake_drivers(TaxiPark()) == set()


def test_fake_drivers_iff_no_trip_drives():
    fake = find_fake_drivers(SAMPLE)
    for d in SAMPLE.all_drivers:
        assert (d in fake) == (not any(t.driver == d for t in SAMPLE.trips))


# ------------------ FAITHFUL PASSENGERS ------------------


def test_faithful_zero_returns_all_passengers():
    assert find_faithful_passengers(SAMPLE, 0) == set(SAMPLE.all_passengers)
    assert find_faithful_passengers(EMPTY, 0) == set(EMPTY.all_passengers)


def test_faithful_counts_trips_per_passenger():
    # P0: 3 trips, P1: 3, P2: 2, P3: 1, P4: 0
    assert find_faithful_passengers(SAMPLE, 1) == {P[0], P[1], P[2], P[3]}
    assert find_faithful_passengers(SAMPLE, 2) == {P[0], P[1], P[2]}
    assert find_faithful_passengers(SAMPLE, 3) == {P[0], P[1]}
    assert find_faithful_passengers(SAMPLE, 4) == set()


def test_faithful_is_monotonic_in_min_trips():
    prev = find_faithful_passengers(SAMPLE, 0)
    for k in range(1, 6):
        cur = find_faithful_passengers(SAMPLE, k)
        assert cur <= prev
        prev = cur


def test_faithful_rejects_negative_min_trips():
    with pytest.raises(ValueError):
        find_faithful_passengers(SAMPLE, -1)


# ------------------ FREQUENT PASSENGERS ------------------


def test_frequent_passengers_need_more_than_one_trip_with_driver():
    assert find_frequent_passengers(SAMPLE, D[0]) == {P[0]}
    assert find_frequent_passengers(SAMPLE, D[1]) == {P[1]}
    assert find_frequent_passengers(SAMPLE, D[2]) == set()


def test_frequent_passengers_for_idle_or_unknown_driver():
    assert find_frequent_passengers(SAMPLE, D[3]) == set()
    assert find_frequent_passengers(SAMPLE, Driver(99)) == set()


def test_frequent_passengers_ignore_other_drivers_trips():
    p = park(D[:2], P[:1], trip(0, [0]), trip(1, [0]))
    assert find_frequent_passengers(p, D[0]) == set()
    assert find_frequent_passengers(p, D[1]) == set()


# ------------------ SMART PASSENGERS ------------------


def test_smart_passengers_strict_majority():
    # P0: 2 of 3 discounted, P1: 1 of 3, P2: 2 of 2, P3: 1 of 1, P4: no trips
    assert find_smart_passengers(SAMPLE) == {P[0], P[2], P[3]}


def test_smart_passengers_exclude_ties():
    p = park(D[:1], P[:1], trip(0, [0], discount=0.5), trip(0, [0]))
    assert find_smart_passengers(p) == set()


def test_smart_passenger_with_single_discounted_trip():
    p = park(D[:1], P[:2], trip(0, [0], discount=0.1))
    assert find_smart_passengers(p) == {P[0]}


def test_zero_discount_still_counts_as_discount():
    p = park(D[:1], P[:1], trip(0, [0], discount=0.0))
    assert find_smart_passengers(p) == {P[0]}


# ------------------ DURATION PERIOD ------------------


def test_duration_period_none_without_trips():
    assert find_most_frequent_trip_duration_period(EMPTY) is None


def test_duration_period_picks_most_populated_bucket():
    p = park(D[:1], P[:1], *(trip(0, duration=d) for d in [5, 12, 15, 27]))
    period = find_most_frequent_trip_duration_period(p)
    assert period == range(10, 20)
    assert (period.start, period[-1]) == (10, 19)


def test_duration_period_bucket_edges():
    p = park(D[:1], P[:1], *(trip(0, duration=d) for d in [9, 20, 29, 30]))
    assert find_most_frequent_trip_duration_period(p) == range(20, 30)


def test_duration_period_tie_goes_to_shortest():
    p = park(D[:1], P[:1], *(trip(0, duration=d) for d in [41, 2, 45, 7]))
    assert find_most_frequent_trip_duration_period(p) == range(0, 10)


def test_duration_period_custom_width():
    p = park(D[:1], P[:1], *(trip(0, duration=d) for d in [1, 16, 17, 29]))
    assert find_most_frequent_trip_duration_period(p, width=15) == range(15, 30)


def test_duration_period_with_very_long_trip():
    p = park(D[:1], P[:1], *(trip(0, duration=d) for d in [5, 7, 10**12]))
    assert find_most_frequent_trip_duration_period(p) == range(0, 10)
    lone = park(D[:1], P[:1], trip(0, duration=10**12))
    assert find_most_frequent_trip_duration_period(lone) == range(10**12, 10**12 + 10)


def test_duration_period_beyond_int64():
    p = park(D[:1], P[:1], *(trip(0, duration=d) for d in [5, 2**63, 2**63 + 1]))
    start = 2**63 // 10 * 10
    assert find_most_frequent_trip_duration_period(p) == range(start, start + 10)


def test_duration_period_far_apart_tie_goes_to_shortest():
    far = 10**15
    p = park(D[:1], P[:1], *(trip(0, duration=d) for d in [far, far + 3, 42, 47]))
    assert find_most_frequent_trip_duration_period(p) == range(40, 50)


def test_duration_period_rejects_bad_width():
    with pytest.raises(ValueError):
        find_most_frequent_trip_duration_period(SAMPLE, width=0)


# ------------------ PARETO ------------------


def _income_park(incomes):
    return park(D[: len(incomes)], P[:1], *(trip(i, cost=c) for i, c in enumerate(incomes)))


def test_pareto_false_without_trips():
    assert check_pareto_principle(EMPTY) is False


def test_pareto_fails_when_top_driver_earns_too_little():
    assert check_pareto_principle(_income_park([100.0, 50.0, 20.0, 20.0, 10.0])) is False


def test_pareto_holds_on_exact_threshold():
    assert check_pareto_principle(_income_park([160.0, 10.0, 10.0, 10.0, 10.0])) is True


def test_pareto_sums_income_over_trips_per_driver():
    p = park(
        D[:5],
        P[:1],
        trip(4, cost=90.0),
        trip(4, cost=90.0),
        trip(0, cost=10.0),
        trip(1, cost=10.0),
    )
    assert check_pareto_principle(p) is True


def test_pareto_with_fewer_than_five_drivers_takes_no_one():
    # int(0.2 * 4) == 0 drivers; 0 >= 0.8 * total only when total is 0
    assert check_pareto_principle(_income_park([100.0, 0.0, 0.0, 0.0])) is False
    assert check_pareto_principle(_income_park([0.0, 0.0])) is True


def test_pareto_custom_shares():
    p = _income_park([50.0, 50.0, 0.0, 0.0])
    assert check_pareto_principle(p, driver_share=0.5, income_share=1.0) is True
    assert check_pareto_principle(p, driver_share=0.25, income_share=0.6) is False


# ------------------ GENERAL ------------------


def test_queries_are_repeatable_and_do_not_touch_the_park():
    before = (SAMPLE.all_drivers, SAMPLE.all_passengers, SAMPLE.trips)
    calls = [
        lambda: find_fake_drivers(SAMPLE),
        lambda: find_faithful_passengers(SAMPLE, 2),
        lambda: find_frequent_passengers(SAMPLE, D[0]),
        lambda: find_smart_passengers(SAMPLE),
        lambda: find_most_frequent_trip_duration_period(SAMPLE),
        lambda: check_pareto_principle(SAMPLE),
    ]
    for call in calls:
        assert call() == call()
    assert (SAMPLE.all_drivers, SAMPLE.all_passengers, SAMPLE.trips) == before
