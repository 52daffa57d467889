# taxi_park/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from taxi_park.analytics.hooks import NoopHooks
from taxi_park.analytics.service import TaxiParkAnalytics
from taxi_park.config.models import AppModel
from taxi_park.domain.park import TaxiPark
from taxi_park.io.query_logging import QueryLogging  # JSON logs
from taxi_park.io.recorder import JsonlSink, Recorder
from taxi_park.sim.generator import ParkGenerator
from taxi_park.sim.rng import RNGRegistry


@dataclass
class App:
    park: TaxiPark
    analytics: TaxiParkAnalytics
    settings: AppModel


def build(
    cfg: AppModel | Mapping, *, use_logging: bool = True, recorder: Recorder | None = None
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, AppModel) else AppModel.model_validate(cfg)

    # 1) Park: inline dataset or synthetic
    if model.park is not None:
        park = model.park.to_park()
    else:
        rng_registry = RNGRegistry(model.generator.seed, dataset=model.run_id)
        park = ParkGenerator(model.generator, rng_registry=rng_registry).generate()

    # 2) Hooks
    hooks = (
        QueryLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            recorder=recorder or Recorder(JsonlSink()),
        )
        if use_logging
        else NoopHooks()
    )

    # 3) Analytics
    analytics = TaxiParkAnalytics(park, settings=model.analytics, hooks=hooks)
    return App(park, analytics, model)
