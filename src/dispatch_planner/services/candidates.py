# dispatch_planner/services/candidates.py
from dispatch_planner.app.protocols import CandidateSource
from dispatch_planner.config.models import TripRequestModel
from dispatch_planner.domain.entities.driver import DriverCandidate
from dispatch_planner.domain.entities.route import Route
from dispatch_planner.domain.entities.vehicle import MaintenanceStatus, VehicleCandidate

MOCK_DRIVERS = (
    DriverCandidate("driver1", "Alice Smith", "Downtown", 5, 6, 80),
    DriverCandidate("driver2", "Bob Johnson", "Northside", 4, 9, 50),
    DriverCandidate("driver3", "Charlie Brown", "Southside", 3, 4, 90),
)

MOCK_VEHICLES = (
    VehicleCandidate("vehicle1", "Van", "1000 kg / 8 m³", 12, 75, MaintenanceStatus.GOOD),
    VehicleCandidate("vehicle2", "Truck (Small)", "3000 kg / 20 m³", 8, 50, MaintenanceStatus.NEEDS_CHECK),
    VehicleCandidate("vehicle3", "Truck (Large)", "10000 kg / 60 m³", 5, 90, MaintenanceStatus.POOR),
)


class MockCandidateSource(CandidateSource):
    """Fixed fleet and fixed routes; no routing is computed."""

    def __init__(self, drivers=MOCK_DRIVERS, vehicles=MOCK_VEHICLES):
        self._drivers = list(drivers)
        self._vehicles = list(vehicles)

    def drivers(self) -> list[DriverCandidate]:
        return list(self._drivers)

    def vehicles(self) -> list[VehicleCandidate]:
        return list(self._vehicles)

    def routes(self, request: TripRequestModel) -> list[Route]:
        o, d = request.origin, request.destination
        return [
            Route(o, d, distance="350 km", eta="4h 30m", cost="$120.00", risk_rating="Low"),
            Route(o, d, distance="380 km", eta="5h 15m", cost="$110.00", name="Scenic Route"),
            Route(o, d, distance="360 km", eta="4h 45m", cost="$135.00", name="Highway Bypass"),
        ]
