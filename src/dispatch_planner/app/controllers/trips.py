# dispatch_planner/app/controllers/trips.py
from dataclasses import replace

from dispatch_planner.app.hooks import DispatchHooks, NoopHooks
from dispatch_planner.app.protocols import TripStore
from dispatch_planner.app.results import ActionResult
from dispatch_planner.config.models import PermissionsModel
from dispatch_planner.domain.errors import DispatchError, PermissionDeniedError, TripNotFoundError
from dispatch_planner.domain.trip import EDITABLE_FIELDS, Trip, TripEvent
from dispatch_planner.policy.lifecycle import INITIAL_STATUS, apply_transition
from dispatch_planner.policy.permissions import can_modify


class TripHandler:
    def __init__(
        self,
        store: TripStore,
        account: str,
        permissions: PermissionsModel,
        hooks: DispatchHooks | None = None,
    ):
        self.store = store
        self.account = account
        self.permissions = permissions
        self.hooks = hooks or NoopHooks()

    def _reject(self, action: str, err: DispatchError, role, trip_id=None, trip=None):
        self.hooks.action_rejected(action, kind=err.kind, reason=str(err), role=role, trip_id=trip_id)
        return ActionResult.from_error(err, trip)

    # ------------ persistence entry point --------------

    def dispatch(self, trip: Trip, role) -> ActionResult:
        """
        Save a confirmed trip. A trip without an id is created as Scheduled; a
        trip that already has one is an edit, which replaces its route, driver,
        vehicle and load but keeps the stored status.
        """
        if not can_modify(role, self.permissions):
            return self._reject(
                "dispatch", PermissionDeniedError(role, "dispatch trips"), role, trip.id
            )
        try:
            if trip.id is None:
                trip_id = self.store.create_trip(
                    self.account, replace(trip, status=INITIAL_STATUS)
                )
                stored = self.store.get_trip(self.account, trip_id)
                message = "Trip dispatched"
            else:
                stored = self.store.update_trip(
                    self.account,
                    trip.id,
                    {name: getattr(trip, name) for name in EDITABLE_FIELDS},
                    expected_version=trip.version or None,
                )
                message = "Trip updated"
        except DispatchError as err:
            return self._reject("dispatch", err, role, trip_id=trip.id, trip=trip)

        self.hooks.trip_dispatched(stored, role=role)
        return ActionResult.success(message, stored)

    # ------------ lifecycle actions --------------

    def mark_in_progress(self, trip_id: str, role, *, expected_version: int | None = None):
        return self._transition(trip_id, TripEvent.MARK_IN_PROGRESS, role, expected_version)

    def mark_completed(self, trip_id: str, role, *, expected_version: int | None = None):
        return self._transition(trip_id, TripEvent.MARK_COMPLETED, role, expected_version)

    def cancel(self, trip_id: str, role, *, expected_version: int | None = None):
        return self._transition(trip_id, TripEvent.CANCEL, role, expected_version)

    def _transition(
        self, trip_id: str, event: TripEvent, role, expected_version: int | None
    ) -> ActionResult:
        current = None
        try:
            current = self.store.get_trip(self.account, trip_id)
            if current is None:
                raise TripNotFoundError(trip_id)
            proposed = apply_transition(current, event, role, permissions=self.permissions)
            # read-modify-write: default to the version we just read
            version = current.version if expected_version is None else expected_version
            updated = self.store.update_trip(
                self.account, trip_id, {"status": proposed.status}, expected_version=version
            )
        except DispatchError as err:
            return self._reject(event.value, err, role, trip_id=trip_id, trip=current)

        self.hooks.status_changed(updated, previous=current.status, role=role)
        return ActionResult.success(f"Trip status updated to '{updated.status.value}'", updated)

    # ------------ notifications --------------

    def send_reminder(self, trip_id: str, role) -> ActionResult:
        if not can_modify(role, self.permissions):
            return self._reject(
                "reminder", PermissionDeniedError(role, "send reminders"), role, trip_id
            )
        try:
            trip = self.store.get_trip(self.account, trip_id)
            if trip is None:
                raise TripNotFoundError(trip_id)
        except DispatchError as err:
            return self._reject("reminder", err, role, trip_id)
        if trip.is_terminal:
            self.hooks.action_rejected(
                "reminder",
                kind="invalid",
                reason=f"trip is {trip.status.value}",
                role=role,
                trip_id=trip_id,
            )
            return ActionResult.failure(
                "invalid", f"No reminder for a trip that is {trip.status.value}", trip
            )
        self.hooks.reminder_sent(trip, role=role)
        return ActionResult.success(
            f"Reminder sent to {trip.driver.name or 'driver'} for trip {trip_id[:6]}!", trip
        )
