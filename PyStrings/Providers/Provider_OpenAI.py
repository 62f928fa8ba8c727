import os

from PyStrings.Helpers.Localization import _
from PyStrings.Helpers.Settings import GetStrSetting, GetFloatSetting, GetBoolSetting
from PyStrings.Options import env_float
from PyStrings.Providers.OpenAI.ChatGPTClient import ChatGPTClient
from PyStrings.ResourceError import ProviderConfigurationError
from PyStrings.SettingsType import SettingsType
from PyStrings.TranslationClient import TranslationClient
from PyStrings.TranslationProvider import TranslationProvider

class OpenAiProvider(TranslationProvider):
    name = "OpenAI"

    def __init__(self, settings : SettingsType|dict):
        super().__init__(self.name, {
            "api_key": GetStrSetting(settings, 'api_key', os.getenv('OPENAI_API_KEY')),
            "api_base": GetStrSetting(settings, 'api_base', os.getenv('OPENAI_API_BASE')),
            "model": GetStrSetting(settings, 'model', os.getenv('OPENAI_MODEL', "o3-mini")),
            'temperature': GetFloatSetting(settings, 'temperature', env_float('OPENAI_TEMPERATURE')),
            'rate_limit': GetFloatSetting(settings, 'rate_limit', env_float('OPENAI_RATE_LIMIT')),
            'use_httpx': GetBoolSetting(settings, 'use_httpx', os.getenv('OPENAI_USE_HTTPX', "False") == "True"),
            'proxy': GetStrSetting(settings, 'proxy', os.getenv('OPENAI_PROXY')),
        })

    @property
    def api_key(self) -> str|None:
        return GetStrSetting(self.settings, 'api_key')

    @property
    def api_base(self) -> str|None:
        return GetStrSetting(self.settings, 'api_base')

    @property
    def is_instruct_model(self) -> bool:
        return self.selected_model is not None and self.selected_model.find("instruct") >= 0

    def GetTranslationClient(self, settings : SettingsType|dict) -> TranslationClient:
        client_settings = SettingsType(self.settings.copy())
        client_settings.update(settings)
        if self.is_instruct_model:
            raise ProviderConfigurationError(_("Instruct models do not support structured results"), self)

        return ChatGPTClient(client_settings)

    def ValidateSettings(self) -> bool:
        """
        Validate the settings for the provider
        """
        if not self.api_key:
            self.validation_message = _("API Key is required")
            return False

        return True
