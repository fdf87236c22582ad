# sim/generator.py
import numpy as np

from taxi_park.config.models import GeneratorModel
from taxi_park.domain.entities.driver import Driver
from taxi_park.domain.entities.passenger import Passenger
from taxi_park.domain.entities.trip import Trip
from taxi_park.domain.park import TaxiPark
from taxi_park.sim.rng import RNGRegistry


def _sample_discount(rng: np.random.Generator, model: GeneratorModel) -> float | None:
    if rng.random() >= model.discount_rate:
        return None
    return round(float(rng.uniform(0.0, model.max_discount)), 2)


def generate_park(model: GeneratorModel, rng: RNGRegistry | None = None) -> TaxiPark:
    """
    Draw a synthetic park. Drivers and passengers are numbered from 0; the last
    `idle_driver_share` of the drivers never drive. Identical seeds give identical parks;
    draws advance the registry streams, so a second call on the same registry gives another park.
    """
    rng = rng or RNGRegistry(model.seed)
    supply = rng.stream("supply")
    demand = rng.stream("demand")
    pricing = rng.stream("pricing")

    drivers = [Driver(i) for i in range(model.drivers)]
    passengers = [Passenger(i) for i in range(model.passengers)]

    n_active = max(1, model.drivers - int(model.idle_driver_share * model.drivers))
    active = drivers[:n_active]

    trips: list[Trip] = []
    max_group = min(model.max_passengers_per_trip, len(passengers))
    for _ in range(model.trips):
        driver = active[int(supply.integers(len(active)))]
        size = int(demand.integers(0, max_group + 1))
        picked = demand.choice(len(passengers), size=size, replace=False) if size else []
        duration = int(round(demand.exponential(model.mean_duration_min)))
        discount = _sample_discount(pricing, model)
        fare = duration * model.fare_per_min * (1.0 - (discount or 0.0))
        trips.append(
            Trip(
                driver=driver,
                passengers=frozenset(passengers[int(i)] for i in picked),
                duration=duration,
                cost=round(fare, 2),
                discount=discount,
            )
        )

    return TaxiPark(frozenset(drivers), frozenset(passengers), tuple(trips))
