# io/recorder.py
import json
from typing import Protocol, TextIO

from taxi_park.io.query_events import QueryAnswered


class AnswerSink(Protocol):
    def write(self, ev: QueryAnswered) -> None: ...


class JsonlSink:
    """One JSON object per answered query, keys sorted so two runs diff line by line."""

    def __init__(self, fp: TextIO):
        self.fp = fp

    def write(self, ev: QueryAnswered) -> None:
        self.fp.write(json.dumps(ev.to_dict(), sort_keys=True) + "\n")


class MemorySink:
    def __init__(self):
        self.events: list[QueryAnswered] = []

    def write(self, ev: QueryAnswered) -> None:
        self.events.append(ev)


class Recorder:
    """Fans every QueryAnswered out to its sinks, in order."""

    def __init__(self, *sinks: AnswerSink):
        if not sinks:
            raise ValueError("Recorder needs at least one sink")
        self.sinks = sinks

    def emit(self, ev: QueryAnswered) -> None:
        for s in self.sinks:
            s.write(ev)
