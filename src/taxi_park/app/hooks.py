# app/hooks.py
from typing import Any, Protocol


class QueryHooks(Protocol):
    def query_start(self, name: str, *, seq: int, params: dict[str, Any]): ...
    def query_end(self, name: str, *, seq: int, params: dict[str, Any], result: Any, ms: float): ...
    def error(self, name: str, *, seq: int, params: dict[str, Any], exc: BaseException): ...


class NoopHooks:
    def query_start(self, *_, **__):
        pass

    def query_end(self, *_, **__):
        pass

    def error(self, *_, **__):
        pass
