"""
Typed access to settings read from the environment, the command line or an instruction file.
Values arrive as strings as often as not, so each getter coerces to its type or raises SettingsError.
"""
from typing import Mapping

from PyStrings.SettingsType import SettingType, SettingsType

SettingsSource = SettingsType|Mapping[str, SettingType]

class SettingsError(Exception):
    """Raised when a setting cannot be coerced to the expected type."""
    pass

def GetBoolSetting(settings: SettingsSource, key: str, default: bool|None = False) -> bool:
    """
    Read a flag. Accepts booleans and the strings true/yes/1 and false/no/0 (any case), a missing value is false.
    """
    value = settings.get(key, default)
    if value is None:
        return False

    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        lower_value = value.strip().lower()
        if lower_value in ('true', 'yes', '1'):
            return True
        if lower_value in ('false', 'no', '0', ''):
            return False

    raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to bool")

def GetIntSetting(settings: SettingsSource, key: str, default: int|None = None) -> int|None:
    """
    Read a whole number, e.g. a retry count
    """
    value = settings.get(key, default)
    if value is None:
        return None

    # bool is a subclass of int
    if isinstance(value, bool):
        raise SettingsError(f"Cannot convert setting '{key}' of type bool to int")

    if isinstance(value, (int, float)):
        return int(value)

    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass

    raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to int")

def GetFloatSetting(settings: SettingsSource, key: str, default: float|None = None) -> float|None:
    """
    Read a number such as a timeout, rate limit or temperature
    """
    value = settings.get(key, default)
    if value is None:
        return None

    if isinstance(value, bool):
        raise SettingsError(f"Cannot convert setting '{key}' of type bool to float")

    if isinstance(value, (int, float)):
        return float(value)

    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            pass

    raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to float")

def GetStrSetting(settings: SettingsSource, key: str, default: str|None = None) -> str|None:
    """
    Read a setting as text. Lists are joined with commas.
    """
    value = settings.get(key, default)
    if value is None:
        return None

    if isinstance(value, str):
        return value

    if isinstance(value, list):
        return ', '.join(str(item) for item in value)

    return str(value)
