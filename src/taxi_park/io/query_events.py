# taxi_park/io/query_events.py

from dataclasses import dataclass, field
from typing import Any


# Analytics record of one answered query (emitted after the fact, never fed back)
@dataclass
class QueryAnswered:
    run_id: str
    seq: int  # analyzer call sequence
    name: str  # registered query name
    params: dict[str, Any] = field(default_factory=dict)
    summary: Any = None  # output of summarize()
    ms: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "seq": self.seq,
            "query": self.name,
            "params": self.params,
            "result": self.summary,
            "ms": None if self.ms is None else round(self.ms, 3),
        }


def summarize(result: Any, limit: int = 20) -> Any:
    """
    Compact, JSON-friendly view of a query result: entity sets become
    {"count", "ids"} (first `limit` ids, sorted), a duration period becomes
    its inclusive [first, last] minutes, anything else passes through.
    """
    if isinstance(result, (set, frozenset)):
        ids = sorted(getattr(x, "id", x) for x in result)
        return {"count": len(ids), "ids": ids[:limit]}
    if isinstance(result, range):
        return [result.start, result.stop - 1]
    return result


def jsonable(value: Any) -> Any:
    """Params as they should appear in a log line (entities collapse to their id)."""
    if isinstance(value, dict):
        return {k: jsonable(v) for k, v in value.items()}
    if hasattr(value, "id"):
        return value.id
    return value
