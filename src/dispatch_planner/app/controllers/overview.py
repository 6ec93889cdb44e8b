# dispatch_planner/app/controllers/overview.py
from dataclasses import dataclass
from datetime import UTC, datetime

from dispatch_planner.app.protocols import TripStore, Unsubscribe
from dispatch_planner.app.results import ActionResult
from dispatch_planner.config.models import PermissionsModel
from dispatch_planner.domain.errors import PermissionDeniedError
from dispatch_planner.domain.trip import DeliveryStatus, Trip, TripStatus
from dispatch_planner.policy.permissions import can_view_analytics

STATUS_FILTERS = ("all",) + tuple(s.value.lower() for s in TripStatus)

_EPOCH = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True)
class DeliveryMetrics:
    completed: int
    on_time: int
    delayed: int


class TripOverview:
    """Read model over the trips the store last pushed."""

    def __init__(self, permissions: PermissionsModel):
        self.permissions = permissions
        self.trips: list[Trip] = []
        self.loaded = False
        self._unsubscribe: Unsubscribe | None = None

    def attach(self, store: TripStore, account: str) -> Unsubscribe:
        self.detach()
        self._unsubscribe = store.subscribe_trips(account, self.update)
        return self.detach

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def update(self, trips: list[Trip]) -> None:
        self.trips = list(trips)
        self.loaded = True

    def filter(self, status: str = "all") -> list[Trip]:
        wanted = status.strip().lower()
        if wanted not in STATUS_FILTERS:
            raise ValueError(f"unknown status filter {status!r}; expected one of {STATUS_FILTERS}")
        picked = [t for t in self.trips if wanted == "all" or t.status.value.lower() == wanted]
        return sorted(picked, key=lambda t: t.created_at or _EPOCH, reverse=True)

    def scheduled_count(self) -> int:
        return sum(1 for t in self.trips if t.status is TripStatus.SCHEDULED)

    def delivery_metrics(self) -> DeliveryMetrics:
        done = [t for t in self.trips if t.status is TripStatus.COMPLETED]
        on_time = sum(1 for t in done if t.delivery_status is DeliveryStatus.ON_TIME)
        delayed = sum(1 for t in done if t.delivery_status is DeliveryStatus.DELAYED)
        return DeliveryMetrics(completed=len(done), on_time=on_time, delayed=delayed)

    def analytics(self, role) -> ActionResult:
        if not can_view_analytics(role, self.permissions):
            return ActionResult.from_error(PermissionDeniedError(role, "view analytics"))
        return ActionResult.success("Analytics loaded", self.delivery_metrics())
