# dispatch_planner/policy/vehicle_scoring.py
from collections.abc import Iterable

from dispatch_planner.config.models import RankingModel, VehicleScoringModel
from dispatch_planner.domain.entities.vehicle import MaintenanceStatus, VehicleCandidate
from dispatch_planner.policy.bounds import as_number, clamp_score
from dispatch_planner.policy.ranking import Ranked, rank_candidates

_DEFAULT = VehicleScoringModel()


def _status_key(status) -> str:
    # "Needs Check", "NeedsCheck" and "needs check" are the same status
    return "".join(str(getattr(status, "value", status)).split()).casefold()


def maintenance_penalty(status, cfg: VehicleScoringModel | None = None) -> float:
    cfg = cfg or _DEFAULT
    key = _status_key(status)
    if key == _status_key(MaintenanceStatus.POOR):
        return cfg.poor_penalty
    if key == _status_key(MaintenanceStatus.NEEDS_CHECK):
        return cfg.needs_check_penalty
    # "Good" and anything unrecognised carry no penalty
    return cfg.good_penalty


def score_vehicle(
    fuel_efficiency, utilization_score, maintenance_status, cfg: VehicleScoringModel | None = None
) -> float:
    """fuel_efficiency * 5 + utilization - maintenance penalty, clamped to [0, 100], 2dp."""
    cfg = cfg or _DEFAULT
    raw = (
        as_number(fuel_efficiency) * cfg.efficiency_multiplier
        + as_number(utilization_score)
        - maintenance_penalty(maintenance_status, cfg)
    )
    return clamp_score(raw)


def match_description(score: float) -> str:
    if score >= 90:
        return "Excellent Match"
    if score >= 70:
        return "Good Match"
    if score >= 50:
        return "Fair Match"
    return "Poor Match"


class VehicleScorer:
    def __init__(
        self, cfg: VehicleScoringModel | None = None, ranking: RankingModel | None = None
    ):
        self.cfg = cfg or VehicleScoringModel()
        self.ranking = ranking or RankingModel()

    def score(self, vehicle: VehicleCandidate) -> float:
        return score_vehicle(
            vehicle.fuel_efficiency, vehicle.utilization_score, vehicle.maintenance_status, self.cfg
        )

    def rank(self, vehicles: Iterable[VehicleCandidate]) -> list[Ranked[VehicleCandidate]]:
        return rank_candidates(vehicles, self.score, tie_break=self.ranking.tie_break)
