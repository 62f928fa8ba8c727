import logging
import time

from PyStrings.Helpers.Localization import _
from PyStrings.Helpers.Settings import GetBoolSetting, GetFloatSetting, GetIntSetting, GetStrSetting
from PyStrings.Options import Options
from PyStrings.ResourceError import TranslationError
from PyStrings.ResourceItem import StringEntry
from PyStrings.SettingsType import SettingsType
from PyStrings.Translation import Translation
from PyStrings.TranslationParser import TranslationParser
from PyStrings.TranslationPrompt import TranslationPrompt

class TranslationClient:
    """
    Handles communication with the translation provider
    """
    def __init__(self, settings : SettingsType|dict):
        if isinstance(settings, Options):
            settings = settings.GetSettings()

        self.settings: SettingsType = SettingsType(settings)
        self.instructions: str|None = GetStrSetting(settings, 'instructions')
        self.aborted: bool = False

        if not self.instructions:
            raise TranslationError(_("No instructions provided for the translator"))

    @property
    def supports_conversation(self) -> bool:
        return GetBoolSetting(self.settings, 'supports_conversation', False)

    @property
    def supports_system_prompt(self) -> bool:
        return GetBoolSetting(self.settings, 'supports_system_prompt', False)

    @property
    def supports_system_messages(self) -> bool:
        return GetBoolSetting(self.settings, 'supports_system_messages', False)

    @property
    def system_role(self) -> str:
        return GetStrSetting(self.settings, 'system_role') or "system"

    @property
    def rate_limit(self) -> float|None:
        return GetFloatSetting(self.settings, 'rate_limit')

    @property
    def temperature(self) -> float|None:
        return GetFloatSetting(self.settings, 'temperature')

    @property
    def timeout(self) -> float:
        """ Request timeout in seconds (the setting is in minutes) """
        minutes = GetFloatSetting(self.settings, 'timeout') or 3.0
        return minutes * 60.0

    @property
    def max_retries(self) -> int:
        max_retries = GetIntSetting(self.settings, 'max_retries')
        return max_retries if max_retries is not None else 2

    @property
    def backoff_time(self) -> float:
        return GetFloatSetting(self.settings, 'backoff_time') or 5.0

    def BuildTranslationPrompt(self, user_prompt : str, instructions : str, target_language : str, source : list[StringEntry], existing : list[StringEntry]) -> TranslationPrompt:
        """
        Generate a translation prompt for the entries
        """
        prompt = TranslationPrompt(user_prompt, self.supports_conversation)
        prompt.supports_system_prompt = self.supports_system_prompt
        prompt.supports_system_messages = self.supports_conversation and self.supports_system_messages
        prompt.system_role = self.system_role
        prompt.GenerateMessages(instructions, target_language, source, existing)
        return prompt

    def RequestTranslation(self, prompt : TranslationPrompt, temperature : float|None = None) -> Translation|None:
        """
        Send the prompt to the provider and return the response
        """
        start_time = time.monotonic()

        translation = self._request_translation(prompt, temperature)

        if self.aborted or translation is None:
            return None

        if translation.has_candidates or translation.text:
            logging.debug(f"Response:\n{translation.FormatResponse()}")

        # If a rate limit is specified ensure a minimum duration for each request
        rate_limit = self.rate_limit
        if rate_limit and rate_limit > 0.0:
            minimum_duration = 60.0 / rate_limit

            elapsed_time = time.monotonic() - start_time
            if elapsed_time < minimum_duration:
                sleep_time = minimum_duration - elapsed_time
                logging.debug(f"Sleeping for {sleep_time:.2f} seconds to respect rate limit")
                time.sleep(sleep_time)

        return translation

    def GetParser(self) -> TranslationParser:
        """
        Return a parser that can process the provider's response
        """
        return TranslationParser(self.settings)

    def AbortTranslation(self) -> None:
        self.aborted = True
        self._abort()

    def _request_translation(self, prompt : TranslationPrompt, temperature : float|None = None) -> Translation|None:
        """
        Make a request to the API to provide a translation
        """
        raise NotImplementedError

    def _abort(self) -> None:
        # Try to terminate ongoing requests
        pass
