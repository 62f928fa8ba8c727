from __future__ import annotations
from collections.abc import Mapping
from copy import deepcopy
import logging
import os
import dotenv

from PyStrings.Helpers.Localization import _
from PyStrings.Instructions import Instructions
from PyStrings.SettingsType import SettingType, SettingsType
from PyStrings.version import __version__

# Load environment variables from .env file
dotenv.load_dotenv()

def env_bool(key : str, default : bool = False) -> bool:
    var = os.getenv(key, default)
    return True if var and str(var).lower() in ('true', 'yes', '1') else False

def env_int(key : str, default : int|None = None) -> int|None:
    value = os.getenv(key, default)
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return int(value)

def env_float(key : str, default : float|None = None) -> float|None:
    value = os.getenv(key, default)
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return float(value)

def env_str(key : str, default : str|None = None) -> str|None:
    value = os.getenv(key, default)
    return str(value) if value is not None else None

default_settings = {
    'version': __version__,
    'provider': env_str('PROVIDER', "OpenAI"),
    'ui_language': env_str('UI_LANGUAGE', "en"),
    'provider_settings': SettingsType({}),
    'prompt': env_str('PROMPT', None),
    'instructions': None,
    'instruction_file': env_str('INSTRUCTION_FILE', None),
    'source_language': env_str('SOURCE_LANGUAGE', ""),
    'target_languages': env_str('TARGET_LANGUAGES', None),
    'base_dir': env_str('BASE_DIR', None),
    'resource_dir_prefix': env_str('RESOURCE_DIR_PREFIX', "values"),
    'resource_filename': env_str('RESOURCE_FILENAME', "strings.xml"),
    'root_tag': env_str('ROOT_TAG', "resources"),
    'entry_tag': env_str('ENTRY_TAG', "entry"),
    'indent': env_str('INDENT', "    "),
    'timeout': env_float('TIMEOUT', 3.0),
    'max_retries': env_int('MAX_RETRIES', 2),
    'backoff_time': env_float('BACKOFF_TIME', 5.0),
    'rate_limit': env_float('RATE_LIMIT', None),
    'overwrite_on_error': env_bool('OVERWRITE_ON_ERROR', False),
    'stop_on_error': env_bool('STOP_ON_ERROR', False),
}

class Options(SettingsType):
    def __init__(self, settings : SettingsType|Mapping[str, SettingType]|None = None, **kwargs : SettingType):
        """ Initialise the Options object with default options and any provided options. """
        super().__init__()

        self.update(deepcopy(default_settings))

        settings = SettingsType(settings)

        if settings:
            # Remove None values from options and merge with defaults
            filtered_settings = {k: deepcopy(v) for k, v in settings.items() if v is not None}
            self.update(filtered_settings)

        # Apply any explicit parameters
        self.update(kwargs)

    @property
    def provider(self) -> str:
        """ the name of the translation provider """
        return self.get_str('provider') or ''

    @provider.setter
    def provider(self, value: str):
        self['provider'] = value

    @property
    def provider_settings(self) -> dict[str, SettingType]:
        """ Mutable mapping of provider name to provider settings """
        return self.get_dict('provider_settings')

    @property
    def current_provider_settings(self) -> SettingsType|None:
        if not self.provider or self.provider not in self.provider_settings:
            return None

        settings = self.provider_settings.get(self.provider)
        return SettingsType(settings) if isinstance(settings, dict) else None

        return current_provider_settings.get_str('model')

    @property
    def source_language(self) -> str:
        return self.get_str('source_language') or ""

    @property
    def target_languages(self) -> list[str]:
        from PyStrings.Helpers.Parse import ParseLanguages
        return ParseLanguages(self.get('target_languages'))

    def GetProviderSettings(self, provider : str) -> SettingsType:
        """ Get the settings for a specific provider """
        if not provider:
            return SettingsType()

        settings = self.provider_settings.get(provider)
        return SettingsType(deepcopy(settings)) if isinstance(settings, dict) else SettingsType()

    def InitialiseProviderSettings(self, provider : str, settings : SettingsType|dict) -> None:
        """
        Create or update the settings for a provider, moving any matching top-level settings into the provider settings
        """
        provider_settings = self.GetProviderSettings(provider)
        provider_settings.update({ key: value for key, value in settings.items() if key not in provider_settings })

        for key in list(settings.keys()):
            if key in self and key not in default_settings:
                provider_settings[key] = self.pop(key)

        self.provider_settings[provider] = provider_settings

    def InitialiseInstructions(self) -> None:
        """
        Load the instructions from the instruction file, if one is specified
        """
        instruction_file = self.get_str('instruction_file')
        if not instruction_file:
            return

        try:
            instructions = Instructions({})
            instructions.LoadInstructionsFile(instruction_file)
            self.update(instructions.GetSettings())

        except Exception as e:
            logging.error(_("Unable to load instructions from {}: {}").format(instruction_file, e))
            raise

    def GetInstructions(self) -> Instructions:
        """ Construct an Instructions object from the settings """
        return Instructions(dict(self))

    def GetSettings(self) -> SettingsType:
        """
        Get a copy of the settings dictionary with only the default keys included
        """
        return SettingsType({ key: deepcopy(self.get(key)) for key in self.keys() & default_settings.keys() })
