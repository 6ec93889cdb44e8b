# tests/app/test_planning.py
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from dispatch_planner.app.build import build
from dispatch_planner.app.hooks import NoopHooks
from dispatch_planner.domain.errors import PermissionDeniedError, UnknownCandidateError
from dispatch_planner.domain.trip import DeliveryStatus, TripStatus
from dispatch_planner.policy.permissions import Role
from dispatch_planner.runtime.clock import FixedClock
from dispatch_planner.services.candidates import MockCandidateSource

REQUEST = {
    "origin": "Delhi",
    "destination": "Jaipur",
    "load_weight": 800,
    "load_volume": 6,
    "delivery_time_slot": "09:00-12:00",
}


class TraceHooks(NoopHooks):
    def __init__(self):
        self.trace = []

    def trip_planned(self, suggestions, *, role):
        self.trace.append(("planned", suggestions.recommended_driver.id))

    def trip_confirmed(self, trip):
        self.trace.append(("confirmed", trip.driver.id, trip.vehicle.id))

    def action_rejected(self, action, *, kind, reason, role, trip_id=None):
        self.trace.append(("rejected", action, kind))


def _app(**kw):
    return build({"account": "acme", **kw}, use_logging=False, clock=FixedClock.utc(2025, 1, 1, 9))


def test_plan_ranks_and_recommends():
    s = _app().planning.plan(REQUEST, Role.DISPATCHER)
    assert s.recommended_driver.id == "driver1"
    assert s.recommended_vehicle.id == "vehicle1"
    assert [r.id for r in s.vehicles] == ["vehicle1", "vehicle3", "vehicle2"]
    assert s.optimal_route.distance == "350 km"
    assert [r.name for r in s.alternate_routes] == ["Scenic Route", "Highway Bypass"]
    assert set(s.fuel_costs) == {"vehicle1", "vehicle2", "vehicle3"}
    assert s.fuel_costs["vehicle1"] == "₹1217.71"
    assert s.fuel_costs["vehicle3"] == "₹2922.50"


def test_plan_fills_route_preference_from_settings():
    app = _app(settings={"default_route_preference": "cheapest"})
    assert app.planning.plan(REQUEST, "admin").request.route_preference == "cheapest"
    explicit = app.planning.plan({**REQUEST, "route_preference": "avoid-tolls"}, "admin")
    assert explicit.request.route_preference == "avoid-tolls"


def test_plan_rejects_viewer():
    app = _app()
    hooks = TraceHooks()
    app.planning.hooks = hooks
    with pytest.raises(PermissionDeniedError):
        app.planning.plan(REQUEST, Role.VIEWER)
    assert hooks.trace == [("rejected", "plan", "permission_denied")]


@pytest.mark.parametrize(
    "bad", [{"origin": " "}, {"load_weight": -1}, {"route_preference": "scenic"}, {"extra": 1}]
)
def test_plan_validates_request(bad):
    with pytest.raises(ValidationError):
        _app().planning.plan({**REQUEST, **bad}, Role.DISPATCHER)


def test_confirm_defaults_to_recommendations():
    app = _app()
    hooks = TraceHooks()
    app.planning.hooks = hooks
    trip = app.planning.confirm(app.planning.plan(REQUEST, Role.DISPATCHER))
    assert trip.status is TripStatus.SCHEDULED and trip.id is None
    assert trip.driver.id == "driver1" and trip.driver.driver_score == 74.0
    assert trip.vehicle.id == "vehicle1" and trip.vehicle.vehicle_score == 100.0
    assert trip.route.delivery_time_slot == "09:00-12:00"
    assert trip.route.route_preference == "fastest"
    assert trip.load_weight == 800 and trip.load_volume == 6
    assert trip.delivery_status in (DeliveryStatus.ON_TIME, DeliveryStatus.DELAYED)
    assert trip.actual_delivery_time >= app.clock.now()
    assert hooks.trace == [("planned", "driver1"), ("confirmed", "driver1", "vehicle1")]


def test_confirm_with_overrides_and_alternate_route():
    app = _app()
    s = app.planning.plan(REQUEST, Role.DISPATCHER)
    trip = app.planning.confirm(s, driver_id="driver2", vehicle_id="vehicle3", route_index=2)
    assert trip.driver.name == "Bob Johnson" and trip.driver.driver_score == 47.0
    assert trip.vehicle.maintenance_status == "Poor"
    assert trip.route.name == "Highway Bypass"


def test_confirm_rejects_unknown_choices():
    app = _app()
    s = app.planning.plan(REQUEST, Role.DISPATCHER)
    with pytest.raises(UnknownCandidateError):
        app.planning.confirm(s, driver_id="driver9")
    with pytest.raises(UnknownCandidateError):
        app.planning.confirm(s, route_index=3)


def test_confirmed_snapshot_ignores_later_pool_changes():
    source = MockCandidateSource()
    app = build({"account": "acme"}, use_logging=False, candidates=source)
    trip = app.planning.confirm(app.planning.plan(REQUEST, Role.DISPATCHER))
    source._drivers.clear()
    assert trip.driver.name == "Alice Smith"
    assert app.planning.plan(REQUEST, Role.DISPATCHER).recommended_driver is None


def test_outcomes_are_reproducible_per_seed():
    a = _app(outcomes={"seed": 42})
    b = _app(outcomes={"seed": 42})
    ta = a.planning.confirm(a.planning.plan(REQUEST, "admin"))
    tb = b.planning.confirm(b.planning.plan(REQUEST, "admin"))
    assert (ta.actual_delivery_time, ta.delivery_status) == (tb.actual_delivery_time, tb.delivery_status)


def test_plan_describes_each_vehicle_match():
    s = _app().planning.plan(REQUEST, Role.DISPATCHER)
    assert s.matches == {
        "vehicle1": "Excellent Match",
        "vehicle3": "Good Match",
        "vehicle2": "Good Match",
    }


class _MutablePool:
    """Candidate source whose candidates can be edited in place after planning."""

    def __init__(self):
        self.driver = SimpleNamespace(
            id="d1", name="Dana", location="Depot", performance_rating=4, hours_worked=2, proximity_score=60
        )
        self.vehicle = SimpleNamespace(
            id="v1",
            type="Van",
            capacity="1000 kg / 8 m³",
            fuel_efficiency=10,
            utilization_score=40,
            maintenance_status="Good",
        )

    def drivers(self):
        return [self.driver]

    def vehicles(self):
        return [self.vehicle]

    def routes(self, request):
        return MockCandidateSource().routes(request)


def test_confirmed_trip_is_a_copy_of_mutable_candidates():
    pool = _MutablePool()
    app = build({"account": "acme"}, use_logging=False, candidates=pool)
    trip = app.planning.confirm(app.planning.plan(REQUEST, Role.DISPATCHER))
    stored = app.trips.dispatch(trip, Role.DISPATCHER).trip

    pool.driver.name = "Someone Else"
    pool.driver.hours_worked = 12
    pool.vehicle.maintenance_status = "Poor"
    pool.vehicle.fuel_efficiency = 1

    for t in (trip, app.store.get_trip("acme", stored.id)):
        assert t.driver.name == "Dana" and t.driver.hours_worked == 2.0
        assert t.vehicle.maintenance_status == "Good" and t.vehicle.fuel_efficiency == 10.0
