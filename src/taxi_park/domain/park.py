# taxi_park/domain/park.py
from collections import defaultdict
from dataclasses import dataclass, field

from taxi_park.domain.entities.driver import Driver
from taxi_park.domain.entities.passenger import Passenger
from taxi_park.domain.entities.trip import Trip


@dataclass(frozen=True)
class TaxiPark:
    """
    Read-only view over one park: every driver, every passenger and the trips between them.
    Queries assume every trip references members of the park; see check_consistency().
    """

    all_drivers: frozenset[Driver] = field(default_factory=frozenset)
    all_passengers: frozenset[Passenger] = field(default_factory=frozenset)
    trips: tuple[Trip, ...] = ()

    def __post_init__(self):
        if not isinstance(self.all_drivers, frozenset):
            object.__setattr__(self, "all_drivers", frozenset(self.all_drivers))
        if not isinstance(self.all_passengers, frozenset):
            object.__setattr__(self, "all_passengers", frozenset(self.all_passengers))
        if not isinstance(self.trips, tuple):
            object.__setattr__(self, "trips", tuple(self.trips))

    def trips_of(self, driver: Driver) -> list[Trip]:
        return [t for t in self.trips if t.driver == driver]

    def trips_with(self, passenger: Passenger) -> list[Trip]:
        return [t for t in self.trips if passenger in t.passengers]

    def income_by_driver(self) -> dict[Driver, float]:
        """Total cost per driver, only for drivers with at least one trip."""
        income: dict[Driver, float] = defaultdict(float)
        for t in self.trips:
            income[t.driver] += t.cost
        return dict(income)

    def total_income(self) -> float:
        return sum(t.cost for t in self.trips)

    def consistency_problems(self) -> list[str]:
        problems: list[str] = []
        for i, t in enumerate(self.trips):
            if t.driver not in self.all_drivers:
                problems.append(f"trip {i}: unknown driver {t.driver}")
            for p in sorted(t.passengers - self.all_passengers, key=lambda p: p.id):
                problems.append(f"trip {i}: unknown passenger {p}")
        return problems

    def check_consistency(self) -> None:
        problems = self.consistency_problems()
        if problems:
            raise ValueError("inconsistent taxi park: " + "; ".join(problems))
