# dispatch_planner/policy/driver_scoring.py
from collections.abc import Iterable

from dispatch_planner.config.models import DriverScoringModel, RankingModel
from dispatch_planner.domain.entities.driver import DriverCandidate
from dispatch_planner.policy.bounds import as_number, clamp_score
from dispatch_planner.policy.ranking import Ranked, rank_candidates

_DEFAULT = DriverScoringModel()


def score_driver(
    performance_rating, hours_worked, proximity_score, cfg: DriverScoringModel | None = None
) -> float:
    """
    Weighted sum of three components, clamped to [0, 100] and rounded to 2dp:

      performance  (rating / 5) * 40          higher rating is better
      fatigue      (1 - min(hours, 9) / 9) * 30  fewer hours worked is better
      proximity    (proximity / 100) * 30     closer is better

    Never raises. NaN or non-numeric inputs yield NaN; out-of-range values are clamped.
    """
    cfg = cfg or _DEFAULT
    rating = as_number(performance_rating)
    hours = as_number(hours_worked)
    proximity = as_number(proximity_score)

    performance = (rating / cfg.max_rating) * cfg.performance_weight
    # min(nan, cap) keeps nan because the comparison is false
    fatigue = (1 - min(hours, cfg.fatigue_cap_hours) / cfg.fatigue_cap_hours) * cfg.fatigue_weight
    closeness = (proximity / cfg.max_proximity) * cfg.proximity_weight

    return clamp_score(performance + fatigue + closeness)


class DriverScorer:
    def __init__(self, cfg: DriverScoringModel | None = None, ranking: RankingModel | None = None):
        self.cfg = cfg or DriverScoringModel()
        self.ranking = ranking or RankingModel()

    def score(self, driver: DriverCandidate) -> float:
        return score_driver(
            driver.performance_rating, driver.hours_worked, driver.proximity_score, self.cfg
        )

    def rank(self, drivers: Iterable[DriverCandidate]) -> list[Ranked[DriverCandidate]]:
        return rank_candidates(drivers, self.score, tie_break=self.ranking.tie_break)
