# tests/policy/test_driver_scoring.py
import math

import numpy as np
import pytest

from dispatch_planner.config.models import DriverScoringModel
from dispatch_planner.domain.entities.driver import DriverCandidate
from dispatch_planner.policy.driver_scoring import DriverScorer, score_driver
from dispatch_planner.services.candidates import MOCK_DRIVERS


def test_reference_scores():
    assert score_driver(5, 0, 100) == 100.00
    assert score_driver(1, 9, 0) == 8.00
    assert score_driver(3, 9, 50) == 39.00


def test_fatigue_is_capped_at_nine_hours():
    assert score_driver(3, 9, 50) == score_driver(3, 15, 50)
    assert score_driver(3, 9, 50) == score_driver(3, 1e6, 50)


def test_scores_stay_in_bounds_for_random_inputs():
    rng = np.random.default_rng(7)
    for _ in range(500):
        s = score_driver(rng.uniform(-10, 20), rng.uniform(-50, 50), rng.uniform(-500, 500))
        assert 0.0 <= s <= 100.0
        assert s == round(s, 2)


def test_out_of_range_inputs_are_clamped_not_rejected():
    assert score_driver(-5, -10, 500) == 100.0
    assert score_driver(0.1, 1000, -1000) == 0.0


@pytest.mark.parametrize("bad", [float("nan"), None, "abc"])
def test_nan_or_non_numeric_propagates_as_nan(bad):
    assert math.isnan(score_driver(bad, 4, 50))
    assert math.isnan(score_driver(4, bad, 50))
    assert math.isnan(score_driver(4, 4, bad))


def test_numeric_strings_are_accepted():
    assert score_driver("5", "0", "100") == 100.0


def test_determinism():
    a = [DriverScorer().score(d) for d in MOCK_DRIVERS]
    b = [DriverScorer().score(d) for d in MOCK_DRIVERS]
    assert a == b


def test_mock_pool_ranking():
    ranked = DriverScorer().rank(MOCK_DRIVERS)
    assert [r.id for r in ranked] == ["driver1", "driver3", "driver2"]
    assert [r.score for r in ranked] == [74.0, 67.67, 47.0]
    assert ranked[0].recommended and not any(r.recommended for r in ranked[1:])


def test_weights_come_from_config():
    cfg = DriverScoringModel(performance_weight=100, fatigue_weight=0, proximity_weight=0)
    d = DriverCandidate("x", "X", "Here", 2.5, 3, 10)
    assert DriverScorer(cfg).score(d) == 50.0


def test_config_rejects_zero_fatigue_cap():
    with pytest.raises(ValueError):
        DriverScoringModel(fatigue_cap_hours=0)


def test_booleans_are_numbers_like_any_other():
    assert score_driver(True, False, True) == score_driver(1, 0, 1)
