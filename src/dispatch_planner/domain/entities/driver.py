# domain/entities/driver.py
from dataclasses import dataclass


@dataclass(frozen=True)
class DriverCandidate:
    id: str
    name: str
    location: str  # free-text label, e.g. "Downtown"
    performance_rating: float  # 1..5
    hours_worked: float  # >= 0
    proximity_score: float  # 0..100, higher = closer
