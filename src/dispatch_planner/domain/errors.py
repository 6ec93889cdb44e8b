# domain/errors.py


class DispatchError(Exception):
    """Base for recoverable dispatch failures; `kind` is what callers render on."""

    kind = "error"


class LifecycleError(DispatchError):
    kind = "lifecycle"


class IllegalTransitionError(LifecycleError):
    kind = "illegal_transition"

    def __init__(self, status, event):
        self.status = status
        self.event = event
        super().__init__(f"cannot {_label(event)} a trip that is {_label(status)}")


class PermissionDeniedError(LifecycleError):
    kind = "permission_denied"

    def __init__(self, role, action: str):
        self.role = role
        self.action = action
        super().__init__(f"role {_label(role)!r} is not allowed to {action}")


class TripNotFoundError(DispatchError):
    kind = "not_found"

    def __init__(self, trip_id: str):
        self.trip_id = trip_id
        super().__init__(f"trip {trip_id!r} not found")


class StaleTripError(DispatchError):
    kind = "conflict"

    def __init__(self, trip_id: str, expected: int, actual: int):
        self.trip_id = trip_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"trip {trip_id!r} changed since it was read (version {actual}, expected {expected})"
        )


class TripStoreError(DispatchError):
    """The trip store could not read or write its backing storage."""

    kind = "store"


class UnknownCandidateError(DispatchError):
    kind = "unknown_candidate"

    def __init__(self, candidate_id: str):
        self.candidate_id = candidate_id
        super().__init__(f"candidate {candidate_id!r} is not in the suggestion list")


def _label(x) -> str:
    return str(getattr(x, "value", x))
