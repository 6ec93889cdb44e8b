from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from dispatch_planner.config.models import SettingsModel, TripRequestModel
from dispatch_planner.domain.entities.driver import DriverCandidate
from dispatch_planner.domain.entities.route import Route
from dispatch_planner.domain.entities.vehicle import VehicleCandidate
from dispatch_planner.domain.trip import Trip

TripsCallback = Callable[[list[Trip]], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class Clock(Protocol):
    def now(self) -> datetime: ...


# ------------- Collaborators --------------------


@runtime_checkable
class CandidateSource(Protocol):
    """
    Supplies the fleet for a planning request. The core never fetches candidates itself.
    """

    def drivers(self) -> list[DriverCandidate]: ...
    def vehicles(self) -> list[VehicleCandidate]: ...
    def routes(self, request: TripRequestModel) -> list[Route]:
        """Optimal route first, then alternates."""


@runtime_checkable
class TripStore(Protocol):
    """
    Per-account trip collection.
    Responsibilities:
      • Assign ids and timestamps, bump `version` on every write.
      • Push the full current list to subscribers on subscribe and after every change.
    """

    def create_trip(self, account: str, trip: Trip) -> str: ...
    def update_trip(
        self,
        account: str,
        trip_id: str,
        fields: Mapping[str, Any],
        *,
        expected_version: int | None = None,
    ) -> Trip: ...
    def get_trip(self, account: str, trip_id: str) -> Trip | None: ...
    def list_trips(self, account: str) -> list[Trip]: ...
    def subscribe_trips(self, account: str, callback: TripsCallback) -> Unsubscribe: ...


@runtime_checkable
class SettingsSource(Protocol):
    @property
    def current(self) -> SettingsModel: ...
