# domain/entities/vehicle.py
from dataclasses import dataclass
from enum import Enum


class MaintenanceStatus(str, Enum):
    GOOD = "Good"
    NEEDS_CHECK = "Needs Check"
    POOR = "Poor"


@dataclass(frozen=True)
class VehicleCandidate:
    id: str
    type: str
    capacity: str  # display only, e.g. "1000 kg / 8 m³"
    fuel_efficiency: float  # km per unit fuel
    utilization_score: float  # 0..100
    maintenance_status: MaintenanceStatus | str = MaintenanceStatus.GOOD
