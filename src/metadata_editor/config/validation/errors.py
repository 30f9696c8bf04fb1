"""Config validation errors raised while building :class:`AppSettings`."""
from __future__ import annotations

from metadata_editor.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """The service cannot start with the given configuration."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has no default and was not provided",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting was provided but cannot be used (bad type, out of range).

    ``value`` is echoed in the message, so never route secrets through a
    setting that is validated here.
    """

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
