# dispatch_planner/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from dispatch_planner.app.controllers.overview import TripOverview
from dispatch_planner.app.controllers.planning import PlanningHandler
from dispatch_planner.app.controllers.settings import SettingsHandler
from dispatch_planner.app.controllers.trips import TripHandler
from dispatch_planner.app.hooks import DispatchHooks, NoopHooks
from dispatch_planner.app.protocols import CandidateSource, Clock, TripStore
from dispatch_planner.config.models import AppModel
from dispatch_planner.io.dispatch_logging import DispatchLogging  # JSON logs
from dispatch_planner.io.recorder import JsonlSink, Recorder
from dispatch_planner.runtime.clock import SystemClock
from dispatch_planner.runtime.policy_factory import (
    make_driver_scorer,
    make_outcomes,
    make_vehicle_scorer,
)
from dispatch_planner.runtime.registries import make_store
from dispatch_planner.services.candidates import MockCandidateSource


@dataclass
class App:
    model: AppModel
    clock: Clock
    hooks: DispatchHooks
    store: TripStore
    planning: PlanningHandler
    trips: TripHandler
    overview: TripOverview
    settings: SettingsHandler


def build(
    cfg: AppModel | Mapping,
    *,
    use_logging: bool = True,
    clock: Clock | None = None,
    candidates: CandidateSource | None = None,
    recorder: Recorder | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, AppModel) else AppModel.model_validate(cfg)

    # 1) Clock & hooks
    clock = clock or SystemClock()
    hooks = (
        DispatchLogging(
            run_id=model.run_id,
            account=model.account,
            clock=clock,
            level=model.log.level,
            debug=model.log.debug,
            recorder=recorder or Recorder(JsonlSink()),
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Store & policies
    store = make_store(model.store, clock=clock)
    driver_scorer = make_driver_scorer(model)
    vehicle_scorer = make_vehicle_scorer(model)
    outcomes = make_outcomes(model, clock=clock)

    # 3) Handlers (inject deps explicitly)
    settings = SettingsHandler(model.permissions, model.settings, hooks=hooks)
    planning = PlanningHandler(
        candidates=candidates or MockCandidateSource(),
        driver_scorer=driver_scorer,
        vehicle_scorer=vehicle_scorer,
        outcomes=outcomes,
        settings=settings,
        permissions=model.permissions,
        fuel=model.fuel,
        hooks=hooks,
    )
    trips = TripHandler(store, model.account, model.permissions, hooks=hooks)

    # 4) Wiring: the overview follows the account's trip list
    overview = TripOverview(model.permissions)
    overview.attach(store, model.account)

    return App(model, clock, hooks, store, planning, trips, overview, settings)
