# dispatch_planner/services/trip_store.py
import json
import logging
import os
import uuid
from collections.abc import Callable, Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any
from urllib.parse import quote

from dispatch_planner.app.protocols import Clock, TripsCallback, TripStore, Unsubscribe
from dispatch_planner.domain.errors import StaleTripError, TripNotFoundError, TripStoreError
from dispatch_planner.domain.trip import MUTABLE_FIELDS, Trip, trip_from_dict, trip_to_dict
from dispatch_planner.runtime.clock import SystemClock

log = logging.getLogger("dispatch_planner.store")


def _new_id() -> str:
    return uuid.uuid4().hex


class InMemoryTripStore(TripStore):
    """
    One collection per account. Trips are frozen, so handing them out never
    exposes store state; lists are always fresh copies.

    Writes build a new collection and commit it in one step, so a failed
    commit leaves the previous collection in place.
    """

    def __init__(self, clock: Clock | None = None, id_factory: Callable[[], str] = _new_id):
        self.clock = clock or SystemClock()
        self.id_factory = id_factory
        self._collections: dict[str, dict[str, Trip]] = {}
        self._subs: dict[str, list[TripsCallback]] = {}

    # ---- storage hooks (overridden by persistent stores) ----

    def _load(self, account: str) -> Mapping[str, Trip]:
        return self._collections.get(account, {})

    def _commit(self, account: str, coll: dict[str, Trip]) -> None:
        self._collections[account] = coll

    # ---- TripStore ----

    def create_trip(self, account: str, trip: Trip) -> str:
        coll = dict(self._load(account))
        trip_id = self.id_factory()
        while trip_id in coll:
            trip_id = self.id_factory()
        now = self.clock.now()
        coll[trip_id] = replace(trip, id=trip_id, created_at=now, updated_at=now, version=1)
        self._commit(account, coll)
        self._publish(account)
        return trip_id

    def update_trip(
        self,
        account: str,
        trip_id: str,
        fields: Mapping[str, Any],
        *,
        expected_version: int | None = None,
    ) -> Trip:
        coll = dict(self._load(account))
        current = coll.get(trip_id)
        if current is None:
            raise TripNotFoundError(trip_id)
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"cannot update trip fields {sorted(unknown)}")
        if expected_version is not None and expected_version != current.version:
            raise StaleTripError(trip_id, expected_version, current.version)

        updated = replace(
            current, **fields, updated_at=self.clock.now(), version=current.version + 1
        )
        coll[trip_id] = updated
        self._commit(account, coll)
        self._publish(account)
        return updated

    def get_trip(self, account: str, trip_id: str) -> Trip | None:
        return self._load(account).get(trip_id)

    def list_trips(self, account: str) -> list[Trip]:
        return list(self._load(account).values())

    def subscribe_trips(self, account: str, callback: TripsCallback) -> Unsubscribe:
        subs = self._subs.setdefault(account, [])
        subs.append(callback)
        callback(self.list_trips(account))

        def unsubscribe() -> None:
            if callback in subs:
                subs.remove(callback)

        return unsubscribe

    def _publish(self, account: str) -> None:
        snapshot = self.list_trips(account)
        for cb in list(self._subs.get(account, ())):
            try:
                cb(list(snapshot))
            except Exception:
                # the write already happened; one bad listener must not hide it from the rest
                log.exception("trip subscriber failed for account %s", account)


class JsonFileTripStore(InMemoryTripStore):
    """
    Same contract, with each account's collection kept in one JSON document
    under `directory`. Nothing is cached: every call reads the file, so
    several stores sharing a directory see each other's trips and versions.
    """

    def __init__(self, directory: str | Path, clock: Clock | None = None, id_factory=_new_id):
        super().__init__(clock=clock, id_factory=id_factory)
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, account: str) -> Path:
        # percent-encoding is reversible, so distinct accounts never share a file
        return self.directory / f"{quote(account, safe='')}.json"

    def _load(self, account: str) -> dict[str, Trip]:
        path = self.path_for(account)
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                doc = json.load(f)
            owner = doc["account"]
            trips = [trip_from_dict(d) for d in doc["trips"]]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise TripStoreError(f"cannot read trips from {path}: {e}") from e
        if owner != account:
            raise TripStoreError(f"{path} holds trips of account {owner!r}, not {account!r}")
        return {t.id: t for t in trips}

    def _commit(self, account: str, coll: dict[str, Trip]) -> None:
        path = self.path_for(account)
        tmp = path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")
        doc = {"account": account, "trips": [trip_to_dict(t) for t in coll.values()]}
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(doc, f, ensure_ascii=False, indent=2)
            os.replace(tmp, path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise TripStoreError(f"cannot write trips to {path}: {e}") from e
