from dispatch_planner.config.models import AppModel
from dispatch_planner.policy.driver_scoring import DriverScorer
from dispatch_planner.policy.outcomes import SimulatedDeliveryOutcome
from dispatch_planner.policy.vehicle_scoring import VehicleScorer
from dispatch_planner.runtime.rng import RNGRegistry


def make_driver_scorer(model: AppModel) -> DriverScorer:
    return DriverScorer(model.driver_scoring, model.ranking)


def make_vehicle_scorer(model: AppModel) -> VehicleScorer:
    return VehicleScorer(model.vehicle_scoring, model.ranking)


def make_outcomes(model: AppModel, *, clock) -> SimulatedDeliveryOutcome:
    rng = RNGRegistry(model.outcomes.seed, account=model.account)
    return SimulatedDeliveryOutcome(model.outcomes, rng, clock)
