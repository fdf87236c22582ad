# taxi_park/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from taxi_park.app.analyzer import ParkAnalyzer, ParkReport
from taxi_park.app.hooks import NoopHooks
from taxi_park.config.models import GeneratorModel, ParkModel, QueryModel, ScenarioModel
from taxi_park.domain.park import TaxiPark
from taxi_park.io.query_logging import QueryLogging  # JSON logs
from taxi_park.io.recorder import Recorder
from taxi_park.sim.generator import generate_park
from taxi_park.sim.rng import RNGRegistry


@dataclass
class App:
    park: TaxiPark
    analyzer: ParkAnalyzer
    queries: QueryModel
    rng: RNGRegistry | None = None

    def report(self) -> ParkReport:
        return self.analyzer.report(self.queries)


def make_park(model: ScenarioModel, rng: RNGRegistry | None) -> TaxiPark:
    if isinstance(model.park, ParkModel):
        return model.park.to_park()
    if isinstance(model.generator, GeneratorModel):
        return generate_park(model.generator, rng)
    raise TypeError(model)


def build(
    cfg: ScenarioModel | Mapping,
    *,
    use_logging: bool = True,
    recorder: Recorder | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) RNG, only needed for synthetic parks
    rng = (
        RNGRegistry(model.generator.seed, scenario=model.name)
        if model.generator is not None
        else None
    )

    # 2) Park
    park = make_park(model, rng)

    # 3) Analyzer (with hooks)
    hooks = (
        QueryLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            recorder=recorder,
        )
        if use_logging
        else NoopHooks()
    )
    analyzer = ParkAnalyzer(park, hooks=hooks)

    return App(park=park, analyzer=analyzer, queries=model.queries, rng=rng)
