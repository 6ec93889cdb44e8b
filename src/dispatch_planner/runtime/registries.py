# runtime/registries.py
from collections.abc import Callable
from typing import Any

from dispatch_planner.app.protocols import TripStore
from dispatch_planner.config.models import StoreJsonFileModel, StoreMemoryModel, StoreUnion
from dispatch_planner.services.trip_store import InMemoryTripStore, JsonFileTripStore

StoreFactory = Callable[[StoreUnion, dict[str, Any]], TripStore]

_store_registry: dict[str, StoreFactory] = {}


def register_store(kind: str):
    def deco(fn: StoreFactory):
        _store_registry[kind] = fn
        return fn

    return deco


def make_store(cfg: StoreUnion, *, clock=None) -> TripStore:
    try:
        factory = _store_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown store kind {cfg.kind!r}") from None
    return factory(cfg, {"clock": clock})


@register_store("memory")
def _make_memory(cfg: StoreMemoryModel, deps):
    return InMemoryTripStore(clock=deps["clock"])


@register_store("json_file")
def _make_json_file(cfg: StoreJsonFileModel, deps):
    return JsonFileTripStore(cfg.directory, clock=deps["clock"])
