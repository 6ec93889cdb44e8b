# io/dispatch_logging.py
import json
import logging
import sys

from dispatch_planner.app.hooks import NoopHooks
from dispatch_planner.io.business_events import (
    ActionRejectedBiz,
    ReminderSentBiz,
    SettingsSavedBiz,
    TripConfirmedBiz,
    TripDispatchedBiz,
    TripPlannedBiz,
    TripStatusChangedBiz,
)
from dispatch_planner.io.recorder import Recorder
from dispatch_planner.policy.permissions import role_name
from dispatch_planner.runtime.clock import SystemClock


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str, ensure_ascii=False)


def default_json_logger(name="dispatch_planner", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


def _value(x):
    return getattr(x, "value", x)


class DispatchLogging(NoopHooks):
    """
    One place to shape structured logs and business events for operator actions.
    """

    def __init__(
        self,
        run_id: str = "local",
        account: str = "",
        clock=None,
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.account, self.debug = run_id, account, debug
        self.clock = clock or SystemClock()
        self.recorder = recorder
        self.log = logger or default_json_logger(level=level)
        self._seq = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, "account": self.account}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def _biz(self, cls, name: str, **fields):
        if not self.recorder:
            return
        self._seq += 1
        self.recorder.emit(
            cls(
                run_id=self.run_id,
                account=self.account,
                at=self.clock.now().isoformat(),
                seq=self._seq,
                name=name,
                **fields,
            )
        )

    # --------------- Planning ----------------------------

    def trip_planned(self, suggestions, *, role):
        driver = suggestions.recommended_driver
        vehicle = suggestions.recommended_vehicle
        fields = dict(
            origin=suggestions.request.origin,
            destination=suggestions.request.destination,
            role=role_name(role),
            recommended_driver_id=driver.id if driver else None,
            recommended_vehicle_id=vehicle.id if vehicle else None,
            driver_score=driver.score if driver else None,
            vehicle_score=vehicle.score if vehicle else None,
        )
        self._emit("INFO", "trip_planned", **fields)
        if self.debug:
            self._emit(
                "DEBUG",
                "ranking",
                drivers=[(r.id, r.score) for r in suggestions.drivers],
                vehicles=[(r.id, r.score) for r in suggestions.vehicles],
            )
        self._biz(TripPlannedBiz, "TripPlanned", **fields)

    def trip_confirmed(self, trip):
        fields = dict(
            driver_id=trip.driver.id,
            vehicle_id=trip.vehicle.id,
            driver_score=trip.driver.driver_score,
            vehicle_score=trip.vehicle.vehicle_score,
            delivery_status=_value(trip.delivery_status),
        )
        self._emit("INFO", "trip_confirmed", **fields)
        self._biz(TripConfirmedBiz, "TripConfirmed", **fields)

    # --------------- Trip actions ------------------------

    def trip_dispatched(self, trip, *, role):
        self._emit("INFO", "trip_dispatched", trip_id=trip.id, role=role_name(role))
        self._biz(TripDispatchedBiz, "TripDispatched", trip_id=trip.id, role=role_name(role))

    def status_changed(self, trip, *, previous, role):
        fields = dict(
            trip_id=trip.id,
            from_status=_value(previous),
            to_status=_value(trip.status),
            role=role_name(role),
            version=trip.version,
        )
        self._emit("INFO", "trip_status_changed", **fields)
        self._biz(TripStatusChangedBiz, "TripStatusChanged", **fields)

    def action_rejected(self, action: str, *, kind: str, reason: str, role, trip_id=None):
        fields = dict(action=action, kind=kind, reason=reason, role=role_name(role), trip_id=trip_id)
        self._emit("WARNING", "action_rejected", **fields)
        self._biz(ActionRejectedBiz, "ActionRejected", **fields)

    def reminder_sent(self, trip, *, role):
        self._emit("INFO", "reminder_sent", trip_id=trip.id, driver=trip.driver.name)
        self._biz(
            ReminderSentBiz,
            "ReminderSent",
            trip_id=trip.id,
            driver_name=trip.driver.name,
            role=role_name(role),
        )

    def settings_saved(self, settings, *, role):
        self._emit("INFO", "settings_saved", role=role_name(role))
        self._biz(
            SettingsSavedBiz,
            "SettingsSaved",
            role=role_name(role),
            max_driving_hours=settings.max_driving_hours,
            default_route_preference=settings.default_route_preference,
        )
