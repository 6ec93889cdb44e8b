# dispatch_planner/app/controllers/planning.py
from collections.abc import Mapping
from dataclasses import dataclass, replace

from dispatch_planner.app.hooks import DispatchHooks, NoopHooks
from dispatch_planner.app.protocols import CandidateSource, SettingsSource
from dispatch_planner.config.models import FuelCostModel, PermissionsModel, TripRequestModel
from dispatch_planner.domain.entities.driver import DriverCandidate
from dispatch_planner.domain.entities.route import Route
from dispatch_planner.domain.entities.vehicle import VehicleCandidate
from dispatch_planner.domain.errors import DispatchError, PermissionDeniedError, UnknownCandidateError
from dispatch_planner.domain.trip import AssignedDriver, AssignedVehicle, Trip
from dispatch_planner.policy.driver_scoring import DriverScorer
from dispatch_planner.policy.fuel_cost import estimate_fuel_cost
from dispatch_planner.policy.lifecycle import INITIAL_STATUS
from dispatch_planner.policy.outcomes import SimulatedDeliveryOutcome
from dispatch_planner.policy.permissions import can_modify
from dispatch_planner.policy.ranking import Ranked, recommended, select
from dispatch_planner.policy.vehicle_scoring import VehicleScorer, match_description


@dataclass(frozen=True)
class Suggestions:
    request: TripRequestModel
    routes: list[Route]  # optimal first
    drivers: list[Ranked[DriverCandidate]]
    vehicles: list[Ranked[VehicleCandidate]]
    fuel_costs: dict[str, str]  # vehicle id -> display cost on the optimal route
    matches: dict[str, str]  # vehicle id -> "Excellent Match" .. "Poor Match"

    @property
    def optimal_route(self) -> Route:
        return self.routes[0]

    @property
    def alternate_routes(self) -> list[Route]:
        return self.routes[1:]

    @property
    def recommended_driver(self) -> Ranked[DriverCandidate] | None:
        return recommended(self.drivers)

    @property
    def recommended_vehicle(self) -> Ranked[VehicleCandidate] | None:
        return recommended(self.vehicles)


class PlanningHandler:
    def __init__(
        self,
        candidates: CandidateSource,
        driver_scorer: DriverScorer,
        vehicle_scorer: VehicleScorer,
        outcomes: SimulatedDeliveryOutcome,
        settings: SettingsSource,
        permissions: PermissionsModel,
        fuel: FuelCostModel | None = None,
        hooks: DispatchHooks | None = None,
    ):
        self.candidates = candidates
        self.driver_scorer = driver_scorer
        self.vehicle_scorer = vehicle_scorer
        self.outcomes = outcomes
        self.settings = settings
        self.permissions = permissions
        self.fuel = fuel or FuelCostModel()
        self.hooks = hooks or NoopHooks()
        self._confirmations = 0

    def fuel_cost_for(self, vehicle: VehicleCandidate, route: Route) -> str:
        return str(estimate_fuel_cost(vehicle.fuel_efficiency, route.distance, self.fuel))

    def plan(self, request: TripRequestModel | Mapping, role) -> Suggestions:
        """
        Rank the current fleet for a request. Raises PermissionDeniedError for
        read-only roles and pydantic.ValidationError for a malformed request.
        """
        if not can_modify(role, self.permissions):
            err = PermissionDeniedError(role, "plan trips")
            self.hooks.action_rejected("plan", kind=err.kind, reason=str(err), role=role)
            raise err

        req = (
            request
            if isinstance(request, TripRequestModel)
            else TripRequestModel.model_validate(request)
        )
        if req.route_preference is None:
            req = req.model_copy(
                update={"route_preference": self.settings.current.default_route_preference}
            )

        routes = self.candidates.routes(req)
        if not routes:
            raise DispatchError(f"no route options from {req.origin} to {req.destination}")

        drivers = self.driver_scorer.rank(self.candidates.drivers())
        vehicles = self.vehicle_scorer.rank(self.candidates.vehicles())
        suggestions = Suggestions(
            request=req,
            routes=list(routes),
            drivers=drivers,
            vehicles=vehicles,
            fuel_costs={v.id: self.fuel_cost_for(v.candidate, routes[0]) for v in vehicles},
            matches={v.id: match_description(v.score) for v in vehicles},
        )
        self.hooks.trip_planned(suggestions, role=role)
        return suggestions

    def confirm(
        self,
        suggestions: Suggestions,
        *,
        driver_id: str | None = None,
        vehicle_id: str | None = None,
        route_index: int = 0,
    ) -> Trip:
        """Assemble an unsaved Trip; ids default to the recommendations."""
        driver = select(suggestions.drivers, driver_id)
        vehicle = select(suggestions.vehicles, vehicle_id)
        if not 0 <= route_index < len(suggestions.routes):
            raise UnknownCandidateError(f"route #{route_index}")

        req = suggestions.request
        route = replace(
            suggestions.routes[route_index],
            delivery_time_slot=req.delivery_time_slot,
            route_preference=req.route_preference,
        )

        self._confirmations += 1
        delivered_at, delivery_status = self.outcomes.draw(
            driver.id, vehicle.id, route.origin, route.destination, self._confirmations
        )
        trip = Trip(
            route=route,
            driver=AssignedDriver.capture(driver.candidate, driver.score),
            vehicle=AssignedVehicle.capture(vehicle.candidate, vehicle.score),
            status=INITIAL_STATUS,
            load_weight=req.load_weight,
            load_volume=req.load_volume,
            actual_delivery_time=delivered_at,
            delivery_status=delivery_status,
        )
        self.hooks.trip_confirmed(trip)
        return trip
