# dispatch_planner/policy/bounds.py
import math

SCORE_MIN = 0.0
SCORE_MAX = 100.0


def as_number(x) -> float:
    """float(x), or NaN when x is not numeric. Scorers stay total on bad input."""
    try:
        return float(x)
    except (TypeError, ValueError):
        return math.nan


def clamp_score(value: float, lo: float = SCORE_MIN, hi: float = SCORE_MAX) -> float:
    # NaN passes through; max/min would silently turn it into a bound
    if math.isnan(value):
        return value
    return round(max(lo, min(hi, value)), 2)
