# dispatch_planner/policy/lifecycle.py
"""
Trip status state machine.

    Scheduled --mark_in_progress--> In Progress --mark_completed--> Completed
        |                               |
        +------------cancel-------------+--------> Cancelled

Completed and Cancelled are terminal. Every edge requires the modify capability;
the permission check runs before the edge lookup so a read-only caller learns
nothing about the trip's state.
"""

from dataclasses import replace

from dispatch_planner.config.models import PermissionsModel
from dispatch_planner.domain.errors import IllegalTransitionError, PermissionDeniedError
from dispatch_planner.domain.trip import TERMINAL_STATUSES, Trip, TripEvent, TripStatus
from dispatch_planner.policy.permissions import can_modify

INITIAL_STATUS = TripStatus.SCHEDULED

TRANSITIONS: dict[tuple[TripStatus, TripEvent], TripStatus] = {
    (TripStatus.SCHEDULED, TripEvent.MARK_IN_PROGRESS): TripStatus.IN_PROGRESS,
    (TripStatus.SCHEDULED, TripEvent.CANCEL): TripStatus.CANCELLED,
    (TripStatus.IN_PROGRESS, TripEvent.MARK_COMPLETED): TripStatus.COMPLETED,
    (TripStatus.IN_PROGRESS, TripEvent.CANCEL): TripStatus.CANCELLED,
}


def next_status(status: TripStatus, event: TripEvent) -> TripStatus:
    try:
        return TRANSITIONS[(TripStatus(status), TripEvent(event))]
    except (KeyError, ValueError):
        raise IllegalTransitionError(status, event) from None


def allowed_events(status: TripStatus) -> list[TripEvent]:
    if status in TERMINAL_STATUSES:
        return []
    return [ev for (src, ev) in TRANSITIONS if src == status]


def apply_transition(trip: Trip, event: TripEvent, role, *, permissions: PermissionsModel) -> Trip:
    """Return a copy of `trip` with only its status advanced. Raises on a rejected request."""
    if not can_modify(role, permissions):
        raise PermissionDeniedError(role, f"{getattr(event, 'value', event)} trips")
    return replace(trip, status=next_status(trip.status, event))
