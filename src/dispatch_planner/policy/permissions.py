# dispatch_planner/policy/permissions.py
from enum import Enum

from dispatch_planner.config.models import PermissionsModel


class Role(str, Enum):
    DISPATCHER = "dispatcher"
    ADMIN = "admin"
    VIEWER = "viewer"


def role_name(role) -> str:
    # str-Enums hash by member name, so compare on the plain value
    return str(getattr(role, "value", role)).strip().lower()


def can_modify(role, cfg: PermissionsModel) -> bool:
    return role_name(role) in cfg.modify_roles


def can_view_analytics(role, cfg: PermissionsModel) -> bool:
    return role_name(role) in cfg.analytics_roles


def can_edit_settings(role, cfg: PermissionsModel) -> bool:
    return role_name(role) in cfg.settings_roles
