# app/results.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dispatch_planner.domain.errors import DispatchError


@dataclass(frozen=True)
class ActionResult:
    """What an operator action reports back; the caller turns it into a notification."""

    ok: bool
    message: str
    kind: str = "success"
    value: Any = None

    @classmethod
    def success(cls, message: str, value: Any = None) -> ActionResult:
        return cls(ok=True, message=message, value=value)

    @classmethod
    def failure(cls, kind: str, message: str, value: Any = None) -> ActionResult:
        return cls(ok=False, message=message, kind=kind, value=value)

    @classmethod
    def from_error(cls, err: DispatchError, value: Any = None) -> ActionResult:
        return cls.failure(err.kind, str(err), value)

    @property
    def trip(self):
        return self.value
