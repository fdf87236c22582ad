# app/analyzer.py
import time
from dataclasses import dataclass
from typing import Any

from taxi_park.app.hooks import NoopHooks, QueryHooks
from taxi_park.config.models import QueryModel
from taxi_park.domain.entities.driver import Driver
from taxi_park.domain.entities.passenger import Passenger
from taxi_park.domain.park import TaxiPark
from taxi_park.runtime.registries import get_query
from taxi_park.services import queries as _queries  # noqa: F401  (registers the queries)


@dataclass(frozen=True)
class ParkReport:
    fake_drivers: frozenset[Driver]
    faithful_passengers: frozenset[Passenger]
    frequent_passengers: dict[Driver, frozenset[Passenger]]
    smart_passengers: frozenset[Passenger]
    duration_period: range | None
    pareto_principle: bool


class ParkAnalyzer:
    """Runs registered queries against one park, reporting each call to the hooks."""

    def __init__(self, park: TaxiPark, hooks: QueryHooks | None = None):
        self.park = park
        self._hooks = hooks or NoopHooks()
        self._seq = 0

    def run(self, name: str, **params) -> Any:
        query = get_query(name)
        self._seq += 1
        seq = self._seq
        self._hooks.query_start(name, seq=seq, params=params)
        t0 = time.perf_counter()
        try:
            result = query(self.park, **params)
        except Exception as exc:
            self._hooks.error(name, seq=seq, params=params, exc=exc)
            raise
        ms = (time.perf_counter() - t0) * 1000
        self._hooks.query_end(name, seq=seq, params=params, result=result, ms=ms)
        return result

    def report(self, queries: QueryModel | None = None) -> ParkReport:
        q = queries or QueryModel()
        if q.frequent_driver is None:
            drivers = sorted(self.park.all_drivers, key=lambda d: d.id)
        else:
            drivers = [Driver(q.frequent_driver)]
        frequent = {
            d: frozenset(self.run("frequent_passengers", driver=d)) for d in drivers
        }
        return ParkReport(
            fake_drivers=frozenset(self.run("fake_drivers")),
            faithful_passengers=frozenset(self.run("faithful_passengers", min_trips=q.min_trips)),
            frequent_passengers=frequent,
            smart_passengers=frozenset(self.run("smart_passengers")),
            duration_period=self.run("duration_period", width=q.bucket_minutes),
            pareto_principle=self.run(
                "pareto_principle", driver_share=q.driver_share, income_share=q.income_share
            ),
        )
