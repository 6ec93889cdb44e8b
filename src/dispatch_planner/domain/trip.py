# dispatch_planner/domain/trip.py
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any

from dispatch_planner.domain.entities.route import Route


class TripStatus(str, Enum):
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


TERMINAL_STATUSES = frozenset({TripStatus.COMPLETED, TripStatus.CANCELLED})


class TripEvent(str, Enum):
    MARK_IN_PROGRESS = "mark_in_progress"
    MARK_COMPLETED = "mark_completed"
    CANCEL = "cancel"


class DeliveryStatus(str, Enum):
    ON_TIME = "on-time"
    DELAYED = "delayed"


@dataclass(frozen=True)
class AssignedDriver:
    """Value copy of a driver candidate taken at confirmation time."""

    id: str
    name: str
    location: str
    performance_rating: float
    hours_worked: float
    proximity_score: float
    driver_score: float

    @classmethod
    def capture(cls, candidate, score: float) -> AssignedDriver:
        return cls(
            id=str(candidate.id),
            name=str(candidate.name),
            location=str(candidate.location),
            performance_rating=float(candidate.performance_rating),
            hours_worked=float(candidate.hours_worked),
            proximity_score=float(candidate.proximity_score),
            driver_score=float(score),
        )


@dataclass(frozen=True)
class AssignedVehicle:
    """Value copy of a vehicle candidate taken at confirmation time."""

    id: str
    type: str
    capacity: str
    fuel_efficiency: float
    utilization_score: float
    maintenance_status: str
    vehicle_score: float

    @classmethod
    def capture(cls, candidate, score: float) -> AssignedVehicle:
        status = candidate.maintenance_status
        return cls(
            id=str(candidate.id),
            type=str(candidate.type),
            capacity=str(candidate.capacity),
            fuel_efficiency=float(candidate.fuel_efficiency),
            utilization_score=float(candidate.utilization_score),
            maintenance_status=str(getattr(status, "value", status)),
            vehicle_score=float(score),
        )


@dataclass(frozen=True)
class Trip:
    route: Route
    driver: AssignedDriver
    vehicle: AssignedVehicle
    status: TripStatus = TripStatus.SCHEDULED
    id: str | None = None  # assigned by the store on first write
    load_weight: float | None = None
    load_volume: float | None = None
    actual_delivery_time: datetime | None = None
    delivery_status: DeliveryStatus | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    version: int = 0  # bumped by the store on every write

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


# field names a store update may touch
MUTABLE_FIELDS = frozenset(
    f.name for f in fields(Trip) if f.name not in {"id", "created_at", "updated_at", "version"}
)

# what an edit of an already dispatched trip may replace; status moves only by transition
EDITABLE_FIELDS = MUTABLE_FIELDS - {"status"}


# ------------- document (de)serialization ------------------


def trip_to_dict(trip: Trip) -> dict[str, Any]:
    doc = asdict(trip)
    doc["status"] = trip.status.value
    doc["delivery_status"] = trip.delivery_status.value if trip.delivery_status else None
    for key in ("actual_delivery_time", "created_at", "updated_at"):
        value = getattr(trip, key)
        doc[key] = value.isoformat() if value else None
    return doc


def trip_from_dict(doc: dict[str, Any]) -> Trip:
    def _dt(value):
        return datetime.fromisoformat(value) if value else None

    return Trip(
        id=doc.get("id"),
        route=Route(**doc["route"]),
        driver=AssignedDriver(**doc["driver"]),
        vehicle=AssignedVehicle(**doc["vehicle"]),
        status=TripStatus(doc["status"]),
        load_weight=doc.get("load_weight"),
        load_volume=doc.get("load_volume"),
        actual_delivery_time=_dt(doc.get("actual_delivery_time")),
        delivery_status=DeliveryStatus(doc["delivery_status"])
        if doc.get("delivery_status")
        else None,
        created_at=_dt(doc.get("created_at")),
        updated_at=_dt(doc.get("updated_at")),
        version=int(doc.get("version", 0)),
    )
