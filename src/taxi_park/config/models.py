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


# ----------------- PARK ---------------------


class TripModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    driver: int
    passengers: list[int] = Field(default_factory=list)
    duration: int = Field(ge=0)  # minutes
    cost: float = Field(ge=0.0)
    discount: float | None = Field(default=None, ge=0.0)

    def to_trip(self) -> Trip:
        return Trip(
            driver=Driver(self.driver),
            passengers=frozenset(Passenger(p) for p in self.passengers),
            duration=self.duration,
            cost=self.cost,
            discount=self.discount,
        )


class ParkModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    drivers: list[int] = Field(default_factory=list)
    passengers: list[int] = Field(default_factory=list)
    trips: list[TripModel] = Field(default_factory=list)

    @field_validator("drivers", "passengers")
    @classmethod
    def _unique(cls, v: list[int], info: ValidationInfo) -> list[int]:
        if len(set(v)) != len(v):
            raise ValueError(f"{info.field_name} must not contain duplicate ids")
        return v

    @model_validator(mode="after")
    def _check_references(self):
        drivers, passengers = set(self.drivers), set(self.passengers)
        for i, trip in enumerate(self.trips):
            if trip.driver not in drivers:
                raise ValueError(f"trip {i} references unknown driver {trip.driver}")
            unknown = sorted(set(trip.passengers) - passengers)
            if unknown:
                raise ValueError(f"trip {i} references unknown passengers {unknown}")
        return self

    def to_park(self) -> TaxiPark:
        return TaxiPark(
            all_drivers=frozenset(Driver(d) for d in self.drivers),
            all_passengers=frozenset(Passenger(p) for p in self.passengers),
            trips=tuple(t.to_trip() for t in self.trips),
        )


# ----------------- SYNTHETIC PARKS ---------------------


class GeneratorModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    seed: int = 123
    drivers: int = Field(default=10, ge=0)
    passengers: int = Field(default=30, ge=0)
    trips: int = Field(default=200, ge=0)
    max_passengers_per_trip: int = Field(default=4, ge=0)
    discount_rate: float = Field(default=0.3, ge=0.0, le=1.0)
    max_discount: float = Field(default=0.4, ge=0.0, le=1.0)  # fraction of the fare
    mean_duration_min: float = Field(default=15.0, gt=0.0)
    fare_per_min: float = Field(default=1.0, ge=0.0)
    idle_driver_share: float = Field(default=0.1, ge=0.0, lt=1.0)

    @model_validator(mode="after")
    def _check_supply(self):
        if self.trips > 0 and self.drivers == 0:
            raise ValueError("cannot generate trips without drivers")
        return self


# ----------------- QUERIES ---------------------


class QueryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    min_trips: int = Field(default=2, ge=0)
    frequent_driver: int | None = None  # None -> every driver of the park
    bucket_minutes: int = Field(default=10, gt=0)
    driver_share: float = Field(default=0.2, gt=0.0, le=1.0)
    income_share: float = Field(default=0.8, gt=0.0, le=1.0)


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    log: LogModel = LogModel()
    park: ParkModel | None = None
    generator: GeneratorModel | None = None
    queries: QueryModel = Field(default_factory=QueryModel)

    @model_validator(mode="after")
    def _one_source(self):
        if (self.park is None) == (self.generator is None):
            raise ValueError("exactly one of 'park' or 'generator' must be given")
        return self
