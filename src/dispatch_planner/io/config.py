# dispatch_planner/io/config.py
import json
from collections.abc import Mapping
from pathlib import Path

from dispatch_planner.config.models import AppModel


def load_config(source: str | Path | Mapping) -> AppModel:
    """Validate an app config from a mapping or a JSON file path."""
    if isinstance(source, Mapping):
        return AppModel.model_validate(source)
    with open(Path(source).expanduser(), encoding="utf-8") as f:
        return AppModel.model_validate(json.load(f))
