# tests/app/test_trip_actions.py
from dataclasses import replace

from dispatch_planner.app.build import build
from dispatch_planner.app.hooks import NoopHooks
from dispatch_planner.domain.errors import TripStoreError
from dispatch_planner.domain.trip import TripStatus
from dispatch_planner.policy.permissions import Role
from dispatch_planner.runtime.clock import FixedClock
from dispatch_planner.services.trip_store import InMemoryTripStore

REQUEST = {"origin": "Pune", "destination": "Mumbai", "load_weight": 100, "load_volume": 1}


class TraceHooks(NoopHooks):
    def __init__(self):
        self.trace = []

    def trip_dispatched(self, trip, *, role):
        self.trace.append(("dispatched", trip.status.value))

    def status_changed(self, trip, *, previous, role):
        self.trace.append(("status", previous.value, trip.status.value))

    def action_rejected(self, action, *, kind, reason, role, trip_id=None):
        self.trace.append(("rejected", action, kind))

    def reminder_sent(self, trip, *, role):
        self.trace.append(("reminder", trip.id))


def _dispatched(role=Role.DISPATCHER):
    app = build({"account": "acme"}, use_logging=False, clock=FixedClock.utc(2025, 1, 1))
    hooks = TraceHooks()
    app.trips.hooks = hooks
    trip = app.planning.confirm(app.planning.plan(REQUEST, Role.DISPATCHER))
    res = app.trips.dispatch(trip, role)
    return app, hooks, res


def test_dispatch_persists_as_scheduled():
    app, hooks, res = _dispatched()
    assert res.ok and res.message == "Trip dispatched"
    stored = app.store.get_trip("acme", res.trip.id)
    assert stored.status is TripStatus.SCHEDULED and stored.version == 1
    assert hooks.trace == [("dispatched", "Scheduled")]


def test_dispatch_forces_initial_status():
    app, _, res = _dispatched()
    again = app.trips.dispatch(replace(res.trip, id=None, status=TripStatus.COMPLETED), Role.ADMIN)
    assert again.trip.status is TripStatus.SCHEDULED
    assert again.trip.id != res.trip.id


def test_viewer_cannot_dispatch():
    app, hooks, res = _dispatched(Role.VIEWER)
    assert not res.ok and res.kind == "permission_denied"
    assert app.store.list_trips("acme") == []
    assert hooks.trace == [("rejected", "dispatch", "permission_denied")]


def test_full_lifecycle():
    app, hooks, res = _dispatched()
    tid = res.trip.id
    r1 = app.trips.mark_in_progress(tid, Role.DISPATCHER)
    r2 = app.trips.mark_completed(tid, "admin")
    assert r1.ok and r1.message == "Trip status updated to 'In Progress'"
    assert r2.ok and r2.trip.status is TripStatus.COMPLETED and r2.trip.version == 3
    r3 = app.trips.mark_completed(tid, "admin")
    assert not r3.ok and r3.kind == "illegal_transition"
    assert hooks.trace[1:] == [
        ("status", "Scheduled", "In Progress"),
        ("status", "In Progress", "Completed"),
        ("rejected", "mark_completed", "illegal_transition"),
    ]


def test_viewer_transition_leaves_trip_unchanged():
    app, _, res = _dispatched()
    out = app.trips.mark_in_progress(res.trip.id, Role.VIEWER)
    assert not out.ok and out.kind == "permission_denied"
    stored = app.store.get_trip("acme", res.trip.id)
    assert stored.status is TripStatus.SCHEDULED and stored.version == 1


def test_cancel_from_in_progress():
    app, _, res = _dispatched()
    app.trips.mark_in_progress(res.trip.id, Role.DISPATCHER)
    out = app.trips.cancel(res.trip.id, Role.DISPATCHER)
    assert out.ok and out.trip.status is TripStatus.CANCELLED


def test_stale_version_is_a_conflict():
    app, _, res = _dispatched()
    app.trips.mark_in_progress(res.trip.id, Role.DISPATCHER, expected_version=1)
    out = app.trips.cancel(res.trip.id, Role.DISPATCHER, expected_version=1)
    assert not out.ok and out.kind == "conflict"
    assert app.store.get_trip("acme", res.trip.id).status is TripStatus.IN_PROGRESS


def test_unknown_trip_is_not_found():
    app, _, _ = _dispatched()
    out = app.trips.cancel("missing", Role.ADMIN)
    assert not out.ok and out.kind == "not_found" and out.trip is None


def test_reminders():
    app, hooks, res = _dispatched()
    tid = res.trip.id
    ok = app.trips.send_reminder(tid, Role.DISPATCHER)
    assert ok.ok and ok.message == f"Reminder sent to Alice Smith for trip {tid[:6]}!"
    assert ("reminder", tid) in hooks.trace

    assert app.trips.send_reminder(tid, Role.VIEWER).kind == "permission_denied"

    app.trips.cancel(tid, Role.DISPATCHER)
    assert app.trips.send_reminder(tid, Role.DISPATCHER).kind == "invalid"


def test_dispatching_a_stored_trip_edits_it_in_place():
    app, hooks, res = _dispatched()
    app.trips.mark_in_progress(res.trip.id, Role.DISPATCHER)
    stored = app.store.get_trip("acme", res.trip.id)

    s = app.planning.plan(REQUEST, Role.DISPATCHER)
    other = app.planning.confirm(s, driver_id="driver3", vehicle_id="vehicle2", route_index=1)
    edited = replace(other, id=stored.id, version=stored.version, status=TripStatus.CANCELLED)
    out = app.trips.dispatch(edited, Role.DISPATCHER)

    assert out.ok and out.message == "Trip updated"
    assert len(app.store.list_trips("acme")) == 1
    t = app.store.get_trip("acme", stored.id)
    assert t.driver.id == "driver3" and t.vehicle.id == "vehicle2"
    assert t.route.name == "Scenic Route"
    assert t.status is TripStatus.IN_PROGRESS  # only transitions move status
    assert t.created_at == stored.created_at and t.version == stored.version + 1


def test_editing_from_a_stale_copy_is_a_conflict():
    app, _, res = _dispatched()
    app.trips.mark_in_progress(res.trip.id, Role.DISPATCHER)
    out = app.trips.dispatch(res.trip, Role.DISPATCHER)  # still version 1
    assert not out.ok and out.kind == "conflict"


def test_editing_a_missing_trip_is_not_found():
    app, _, res = _dispatched()
    out = app.trips.dispatch(replace(res.trip, id="gone"), Role.DISPATCHER)
    assert not out.ok and out.kind == "not_found"


class _BrokenDiskStore(InMemoryTripStore):
    def __init__(self):
        super().__init__()
        self.broken = False

    def _commit(self, account, coll):
        if self.broken:
            raise TripStoreError("cannot write trips: disk full")
        super()._commit(account, coll)


def test_store_failures_become_results():
    app, hooks, res = _dispatched()
    store = _BrokenDiskStore()
    app.trips.store = store
    tid = app.trips.dispatch(replace(res.trip, id=None), Role.DISPATCHER).trip.id
    store.broken = True

    out = app.trips.mark_in_progress(tid, Role.DISPATCHER)
    assert not out.ok and out.kind == "store"
    assert store.get_trip("acme", tid).status is TripStatus.SCHEDULED
    assert hooks.trace[-1] == ("rejected", "mark_in_progress", "store")

    created = app.trips.dispatch(replace(res.trip, id=None), Role.DISPATCHER)
    assert not created.ok and created.kind == "store"
    assert len(store.list_trips("acme")) == 1
