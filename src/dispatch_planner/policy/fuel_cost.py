# dispatch_planner/policy/fuel_cost.py
import math
import re
from dataclasses import dataclass

from dispatch_planner.config.models import FuelCostModel
from dispatch_planner.policy.bounds import as_number

NOT_AVAILABLE = "N/A"

# "350 km", "1,200 km", "12.5 kms"; commas must group thousands
_DISTANCE_RE = re.compile(
    r"^\s*(\d{1,3}(?:,\d{3})+|\d+)(\.\d+)?\s*(?:kms?)?\s*$", re.IGNORECASE
)


@dataclass(frozen=True)
class FuelCostEstimate:
    amount: float  # display currency, 2dp
    currency_symbol: str

    def __str__(self) -> str:
        return f"{self.currency_symbol}{self.amount:.2f}"


def parse_distance_km(distance) -> float | None:
    """ "350 km" -> 350.0. Bare numbers are taken as km. None when unparseable."""
    if distance is None or isinstance(distance, bool):
        return None
    if isinstance(distance, (int, float)):
        value = float(distance)
        return value if math.isfinite(value) and value >= 0 else None
    m = _DISTANCE_RE.match(str(distance))
    if not m:
        return None
    return float(m.group(1).replace(",", "") + (m.group(2) or ""))


def estimate_fuel_cost(
    fuel_efficiency, distance, cfg: FuelCostModel | None = None
) -> FuelCostEstimate | str:
    """
    (distance / fuel_efficiency) * price_per_unit * exchange_rate, rounded to 2dp.

    Display-only; never part of a ranking score. Returns NOT_AVAILABLE instead of
    raising when the distance or efficiency is missing or unusable.
    """
    cfg = cfg or FuelCostModel()
    km = parse_distance_km(distance)
    efficiency = as_number(fuel_efficiency)
    if km is None or not math.isfinite(efficiency) or efficiency <= 0:
        return NOT_AVAILABLE
    base_cost = (km / efficiency) * cfg.price_per_unit
    return FuelCostEstimate(
        amount=round(base_cost * cfg.exchange_rate, 2), currency_symbol=cfg.currency_symbol
    )
