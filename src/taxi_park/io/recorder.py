# io/recorder.py
import json
import logging
import sys
from dataclasses import asdict, dataclass
from typing import Any, Protocol

log = logging.getLogger("taxi_park.recorder")


@dataclass
class QueryRecord:
    run_id: str
    seq: int  # evaluation order within the run
    name: str  # query name
    params: dict[str, Any]
    result: Any
    ms: float


def to_jsonable(v):
    if isinstance(v, range):
        return [v.start, v.stop - 1]
    if isinstance(v, (set, frozenset)):
        return sorted(to_jsonable(x) for x in v)
    if hasattr(v, "name"):
        return v.name
    return v


class Sink(Protocol):
    def write(self, rec: QueryRecord) -> None: ...


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, rec: QueryRecord) -> None:
        payload = asdict(rec)
        payload["params"] = {k: to_jsonable(v) for k, v in rec.params.items()}
        payload["result"] = to_jsonable(rec.result)
        self.fp.write(json.dumps(payload) + "\n")


class MemorySink:
    def __init__(self):
        self.records: list[QueryRecord] = []

    def write(self, rec: QueryRecord) -> None:
        self.records.append(rec)


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, rec: QueryRecord) -> None:
        for s in self.sinks:
            try:
                s.write(rec)
            except Exception:
                # a broken sink must not fail the query
                log.warning("sink %s failed on %s", type(s).__name__, rec.name, exc_info=True)
