# main.py
import json
import sys

from taxi_park.app.build import build
from taxi_park.io.recorder import to_jsonable

DEFAULT_CFG = {
    "run_id": "demo",
    "generator": {"seed": 7, "drivers": 10, "passengers": 30, "trips": 200},
}


def run(path: str | None = None) -> dict:
    if path is None:
        cfg = DEFAULT_CFG
    else:
        with open(path) as fp:
            data = json.load(fp)
        # accept either a full app config or a bare dataset
        cfg = data if ("park" in data or "generator" in data) else {"park": data}

    app = build(cfg, use_logging=False)
    report = app.analytics.report()
    return {
        "fake_drivers": to_jsonable(report.fake_drivers),
        "faithful_passengers": to_jsonable(report.faithful_passengers),
        "frequent_passengers": {
            d.name: to_jsonable(ps) for d, ps in report.frequent_passengers.items() if ps
        },
        "smart_passengers": to_jsonable(report.smart_passengers),
        "most_frequent_period": to_jsonable(report.most_frequent_period),
        "pareto": report.pareto,
    }


if __name__ == "__main__":
    print(json.dumps(run(sys.argv[1] if len(sys.argv) > 1 else None), indent=2))
