# tests/io/test_query_logging.py
import io
import json
import logging

from taxi_park.domain.entities.driver import Driver
from taxi_park.domain.entities.passenger import Passenger
from taxi_park.io.query_logging import QueryLogging, _default_json_logger
from taxi_park.io.recorder import JsonlSink, MemorySink, QueryRecord, Recorder


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


def _logger(name):
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    h = _ListHandler()
    logger.addHandler(h)
    return logger, h


def test_query_end_is_logged_and_recorded():
    logger, h = _logger("taxi_park.test.end")
    sink = MemorySink()
    hooks = QueryLogging(run_id="r-1", logger=logger, recorder=Recorder(sink))

    hooks.query_start("faithful_passengers", min_trips=2)
    hooks.query_end("faithful_passengers", result={Passenger("P-0")}, ms=1.5)
    hooks.query_start("most_frequent_period", width=10)
    hooks.query_end("most_frequent_period", result=range(10, 20), ms=0.5)

    # query_start is DEBUG-only
    assert [r.getMessage() for r in h.records] == ["query_end", "query_end"]
    first = h.records[0].extra
    assert first["run_id"] == "r-1"
    assert first["query"] == "faithful_passengers"
    assert first["size"] == 1 and first["seq"] == 1
    assert h.records[1].extra["value"] == [10, 19]

    assert [r.name for r in sink.records] == ["faithful_passengers", "most_frequent_period"]
    assert sink.records[0].params == {"min_trips": 2}
    assert sink.records[1].seq == 2


def test_debug_logs_query_start():
    logger, h = _logger("taxi_park.test.debug")
    hooks = QueryLogging(logger=logger, debug=True)
    hooks.query_start("frequent_passengers", driver=Driver("D-3"))
    assert h.records[0].levelno == logging.DEBUG
    assert h.records[0].extra["driver"] == "D-3"


def test_error_is_logged():
    logger, h = _logger("taxi_park.test.error")
    hooks = QueryLogging(logger=logger)
    hooks.query_start("pareto")
    hooks.error("pareto", exc=ValueError("boom"))
    rec = h.records[-1]
    assert rec.levelno == logging.ERROR
    assert rec.extra["error"] == "boom"


def test_jsonl_sink_writes_plain_json():
    fp = io.StringIO()
    sink = JsonlSink(fp)
    sink.write(
        QueryRecord(
            run_id="r",
            seq=1,
            name="fake_drivers",
            params={},
            result={Driver("B"), Driver("A")},
            ms=0.1,
        )
    )
    payload = json.loads(fp.getvalue())
    assert payload["result"] == ["A", "B"]
    assert payload["name"] == "fake_drivers"


def test_broken_sink_does_not_stop_others():
    class Broken:
        def write(self, rec):
            raise OSError("disk full")

    good = MemorySink()
    rec = QueryRecord(run_id="r", seq=1, name="pareto", params={}, result=True, ms=0.0)
    Recorder(Broken(), good).emit(rec)
    assert good.records == [rec]


def test_default_logger_emits_json(capsys):
    logger = _default_json_logger(name="taxi_park.test.json", level="INFO")
    logger.info("hello", extra={"extra": {"run_id": "x"}})
    line = capsys.readouterr().out.strip().splitlines()[-1]
    assert json.loads(line) == {
        "level": "INFO",
        "msg": "hello",
        "logger": "taxi_park.test.json",
        "run_id": "x",
    }
