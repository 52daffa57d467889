# tests/app/test_build_and_run.py
import json

from taxi_park.analytics.hooks import NoopHooks
from taxi_park.app.build import build
from taxi_park.config.models import AppModel
from taxi_park.domain.entities.driver import Driver
from taxi_park.domain.entities.passenger import Passenger
from taxi_park.io.query_logging import QueryLogging
from taxi_park.io.recorder import MemorySink, Recorder

DATASET = {
    "drivers": ["D-0", "D-1", "D-2", "D-3", "D-4"],
    "passengers": ["P-0", "P-1", "P-2"],
    "trips": [
        {"driver": "D-0", "passengers": ["P-0"], "duration": 5, "cost": 900.0, "discount": 0.2},
        {"driver": "D-0", "passengers": ["P-0", "P-1"], "duration": 12, "cost": 40.0},
        {"driver": "D-1", "passengers": ["P-1"], "duration": 15, "cost": 30.0, "discount": 0.1},
        {"driver": "D-2", "passengers": ["P-0"], "duration": 27, "cost": 30.0, "discount": 0.3},
    ],
}


def test_build_from_dataset():
    app = build({"run_id": "t-1", "park": DATASET}, use_logging=False)
    assert isinstance(app.settings, AppModel)
    assert type(app.analytics._hooks) is NoopHooks

    report = app.analytics.report()
    assert report.fake_drivers == {Driver("D-3"), Driver("D-4")}
    assert report.faithful_passengers == {Passenger("P-0"), Passenger("P-1")}
    assert report.frequent_passengers[Driver("D-0")] == {Passenger("P-0")}
    assert report.smart_passengers == {Passenger("P-0")}
    assert report.most_frequent_period == range(10, 20)
    assert report.pareto is True


def test_build_from_generator_is_reproducible():
    cfg = {"run_id": "gen", "generator": {"seed": 9, "drivers": 6, "trips": 80}}
    a = build(cfg, use_logging=False)
    b = build(cfg, use_logging=False)
    assert a.park == b.park
    assert len(a.park.trips) == 80


def test_build_with_logging_records_every_query():
    sink = MemorySink()
    cfg = {"run_id": "t-2", "log": {"level": "WARNING"}, "park": DATASET}
    app = build(cfg, recorder=Recorder(sink))
    assert isinstance(app.analytics._hooks, QueryLogging)

    app.analytics.report()
    names = [r.name for r in sink.records]
    assert names.count("frequent_passengers") == 5
    assert names[-1] == "pareto" and sink.records[-1].result is True
    assert all(r.run_id == "t-2" for r in sink.records)


def test_main_runs_dataset_file(tmp_path):
    from main import run

    path = tmp_path / "park.json"
    path.write_text(json.dumps(DATASET))
    out = run(str(path))
    assert out["fake_drivers"] == ["D-3", "D-4"]
    assert out["frequent_passengers"] == {"D-0": ["P-0"]}
    assert out["most_frequent_period"] == [10, 19]
    assert out["pareto"] is True
