# domain/entities/route.py
from dataclasses import dataclass


@dataclass(frozen=True)
class Route:
    """A fixed route option. Distances/ETAs are display strings, e.g. "350 km", "4h 30m"."""

    origin: str
    destination: str
    distance: str
    eta: str
    cost: str
    risk_rating: str | None = None
    name: str = "Optimal Route"
    # filled in when the route is chosen for a trip
    delivery_time_slot: str | None = None
    route_preference: str | None = None
