# runtime/registries.py
from collections.abc import Callable
from typing import Any

from taxi_park.domain.park import TaxiPark

Query = Callable[..., Any]

_query_registry: dict[str, Query] = {}


def register_query(name: str):
    def deco(fn: Query):
        if name in _query_registry and _query_registry[name] is not fn:
            raise ValueError(f"query {name!r} already registered")
        _query_registry[name] = fn
        return fn

    return deco


def get_query(name: str) -> Query:
    try:
        return _query_registry[name]
    except KeyError:
        raise KeyError(
            f"unknown query {name!r}; known: {', '.join(sorted(_query_registry))}"
        ) from None


def available_queries() -> list[str]:
    return sorted(_query_registry)


def run_query(name: str, park: TaxiPark, **params) -> Any:
    return get_query(name)(park, **params)
