# main.py
import sys

from dispatch_planner.app.build import build
from dispatch_planner.io.config import load_config
from dispatch_planner.policy.permissions import Role


def run(cfg) -> None:
    app = build(cfg)

    suggestions = app.planning.plan(
        {"origin": "Delhi", "destination": "Jaipur", "load_weight": 500, "load_volume": 4},
        Role.DISPATCHER,
    )
    trip = app.planning.confirm(suggestions)
    created = app.trips.dispatch(trip, Role.DISPATCHER)

    trip_id = created.trip.id
    app.trips.send_reminder(trip_id, Role.DISPATCHER)
    app.trips.mark_in_progress(trip_id, Role.VIEWER)  # rejected: read-only
    app.trips.mark_in_progress(trip_id, Role.DISPATCHER)
    app.trips.mark_completed(trip_id, Role.DISPATCHER)

    print(app.overview.analytics(Role.ADMIN).value)


if __name__ == "__main__":
    run(load_config(sys.argv[1]) if len(sys.argv) > 1 else {"account": "demo"})
