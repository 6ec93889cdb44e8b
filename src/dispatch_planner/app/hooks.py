# app/hooks.py
from typing import Protocol


class DispatchHooks(Protocol):
    def trip_planned(self, suggestions, *, role): ...
    def trip_confirmed(self, trip): ...
    def trip_dispatched(self, trip, *, role): ...
    def status_changed(self, trip, *, previous, role): ...
    def action_rejected(self, action: str, *, kind: str, reason: str, role, trip_id=None): ...
    def reminder_sent(self, trip, *, role): ...
    def settings_saved(self, settings, *, role): ...


class NoopHooks:
    def trip_planned(self, *_, **__):
        pass

    def trip_confirmed(self, *_, **__):
        pass

    def trip_dispatched(self, *_, **__):
        pass

    def status_changed(self, *_, **__):
        pass

    def action_rejected(self, *_, **__):
        pass

    def reminder_sent(self, *_, **__):
        pass

    def settings_saved(self, *_, **__):
        pass
