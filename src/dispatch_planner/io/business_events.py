# dispatch_planner/io/business_events.py

from dataclasses import dataclass
from typing import Literal


# Base type for analytics events
@dataclass
class BizEvent:
    run_id: str
    account: str
    at: str  # ISO-8601 wall time
    seq: int  # emission order within the run
    name: str  # stable event name


@dataclass
class TripPlannedBiz(BizEvent):
    origin: str
    destination: str
    role: str
    recommended_driver_id: str | None = None
    recommended_vehicle_id: str | None = None
    driver_score: float | None = None
    vehicle_score: float | None = None


@dataclass
class TripConfirmedBiz(BizEvent):
    driver_id: str
    vehicle_id: str
    driver_score: float
    vehicle_score: float
    delivery_status: str | None = None


@dataclass
class TripDispatchedBiz(BizEvent):
    trip_id: str
    role: str


@dataclass
class TripStatusChangedBiz(BizEvent):
    trip_id: str
    from_status: str
    to_status: str
    role: str
    version: int


@dataclass
class ActionRejectedBiz(BizEvent):
    action: str
    kind: Literal[
        "illegal_transition",
        "permission_denied",
        "not_found",
        "conflict",
        "invalid",
        "unknown_candidate",
        "store",
        "error",
    ]
    reason: str
    role: str
    trip_id: str | None = None


@dataclass
class ReminderSentBiz(BizEvent):
    trip_id: str
    driver_name: str
    role: str


@dataclass
class SettingsSavedBiz(BizEvent):
    role: str
    max_driving_hours: float
    default_route_preference: str
