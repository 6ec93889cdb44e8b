# dispatch_planner/policy/outcomes.py
from datetime import timedelta

from dispatch_planner.app.protocols import Clock
from dispatch_planner.config.models import OutcomeModel
from dispatch_planner.domain.trip import DeliveryStatus
from dispatch_planner.runtime.rng import RNGRegistry


class SimulatedDeliveryOutcome:
    """
    Stand-in for real tracking: a delivery time within the next `max_delivery_hours`
    and a delayed flag with probability `delayed_probability`, drawn per confirmation key.
    """

    def __init__(self, cfg: OutcomeModel, rng_registry: RNGRegistry, clock: Clock):
        self.cfg = cfg
        self.rng_registry = rng_registry
        self.clock = clock

    def draw(self, *key: object):
        g = self.rng_registry.substream("delivery_outcome", *key)
        offset_h = float(g.uniform(0.0, self.cfg.max_delivery_hours))
        delayed = bool(g.random() < self.cfg.delayed_probability)
        at = self.clock.now() + timedelta(hours=offset_h)
        return at, DeliveryStatus.DELAYED if delayed else DeliveryStatus.ON_TIME
