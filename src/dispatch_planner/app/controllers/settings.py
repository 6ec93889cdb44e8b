# dispatch_planner/app/controllers/settings.py
from collections.abc import Mapping

from pydantic import ValidationError

from dispatch_planner.app.hooks import DispatchHooks, NoopHooks
from dispatch_planner.app.results import ActionResult
from dispatch_planner.config.models import PermissionsModel, SettingsModel
from dispatch_planner.domain.errors import PermissionDeniedError
from dispatch_planner.policy.permissions import can_edit_settings


class SettingsHandler:
    def __init__(
        self,
        permissions: PermissionsModel,
        initial: SettingsModel | None = None,
        hooks: DispatchHooks | None = None,
    ):
        self.permissions = permissions
        self.hooks = hooks or NoopHooks()
        self._current = initial or SettingsModel()

    @property
    def current(self) -> SettingsModel:
        return self._current

    def save(self, data: SettingsModel | Mapping, role) -> ActionResult:
        if not can_edit_settings(role, self.permissions):
            err = PermissionDeniedError(role, "edit settings")
            self.hooks.action_rejected("save_settings", kind=err.kind, reason=str(err), role=role)
            return ActionResult.from_error(err)
        try:
            settings = (
                data if isinstance(data, SettingsModel) else SettingsModel.model_validate(data)
            )
        except ValidationError as e:
            reason = e.errors()[0]["msg"]
            self.hooks.action_rejected("save_settings", kind="invalid", reason=reason, role=role)
            return ActionResult.failure("invalid", reason)

        self._current = settings
        self.hooks.settings_saved(settings, role=role)
        return ActionResult.success("Settings saved successfully!", settings)
