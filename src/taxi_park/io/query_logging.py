# io/query_logging.py
import json
import logging
import sys
from typing import Any, TextIO

from taxi_park.app.hooks import NoopHooks
from taxi_park.io.query_events import QueryAnswered, jsonable, summarize
from taxi_park.io.recorder import Recorder


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record; structured fields travel in `record.extra`."""

    def format(self, record: logging.LogRecord) -> str:
        payload = dict(getattr(record, "extra", None) or {})
        # record fields win over same-named structured fields
        payload.update(
            ts=self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            level=record.levelname,
            logger=record.name,
            msg=record.getMessage(),
        )
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def json_logger(
    name: str = "taxi_park", level: str = "INFO", stream: TextIO | None = None
) -> logging.Logger:
    """Logger with a single JSON-lines handler (stdout unless `stream` is given)."""
    logger = logging.getLogger(name)
    if not any(isinstance(h.formatter, JsonLineFormatter) for h in logger.handlers):
        h = logging.StreamHandler(stream or sys.stdout)
        h.setFormatter(JsonLineFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class QueryLogging(NoopHooks):
    """
    Structured logs for every query the analyzer runs, plus a QueryAnswered
    record to the recorder (if any) for each successful call.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or json_logger(level=level)

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def query_start(self, name: str, *, seq: int, params: dict[str, Any]):
        if self.debug:
            self._emit("DEBUG", "query_start", query=name, seq=seq, params=jsonable(params))

    def query_end(self, name: str, *, seq: int, params: dict[str, Any], result: Any, ms: float):
        summary = summarize(result)
        self._emit(
            "INFO", name, seq=seq, params=jsonable(params), result=summary, ms=round(ms, 3)
        )
        if self.recorder:
            self.recorder.emit(
                QueryAnswered(
                    run_id=self.run_id,
                    seq=seq,
                    name=name,
                    params=jsonable(params),
                    summary=summary,
                    ms=ms,
                )
            )

    def error(self, name: str, *, seq: int, params: dict[str, Any], exc: BaseException):
        self._emit(
            "ERROR", "query_error", query=name, seq=seq, params=jsonable(params), error=str(exc)
        )
