from __future__ import annotations
from collections.abc import Mapping
from typing import TypeAlias

BasicType: TypeAlias = str | int | float | bool | list[str] | None
SettingType: TypeAlias = BasicType | dict[str, 'SettingType'] | dict[str, 'SettingsType']

class SettingsType(dict[str, SettingType]):
    """
    A dictionary of settings with typed getters.

    Nested dictionaries (e.g. the settings for each provider) are converted to
    SettingsType when they are first read with get_dict.
    """
    def __init__(self, settings : Mapping[str,SettingType]|None = None):
        if not isinstance(settings, SettingsType):
            settings = dict(settings or {})
        super().__init__(settings)

    def get_bool(self, key: str, default: bool|None = False) -> bool:
        from .Helpers.Settings import GetBoolSetting
        return GetBoolSetting(self, key, default)

    def get_str(self, key: str, default: str|None = None) -> str|None:
        from .Helpers.Settings import GetStrSetting
        return GetStrSetting(self, key, default)

    def get_dict(self, key: str, default: dict[str, SettingType]|None = None) -> dict[str, SettingType]:
        """
        Get a nested settings dictionary. The stored value is returned, so changes to it are kept.
        """
        value = self.get(key, default)
        if value is None:
            return default if default is not None else {}

        if isinstance(value, SettingsType):
            return value

        if isinstance(value, dict):
            nested = SettingsType(value)
            self[key] = nested
            return nested

        raise TypeError(f"Expected dict for key '{key}', got {type(value).__name__}")

    def update(self, other=(), /, **kwds) -> None:
        """
        Update settings, ignoring None values so that unset options do not replace defaults
        """
        if hasattr(other, 'items'):
            other = { k: v for k, v in dict(other).items() if v is not None }
        kwds = { k: v for k, v in kwds.items() if v is not None }
        super().update(other, **kwds)
