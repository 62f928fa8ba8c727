import json
import logging
from typing import Any

import regex

from PyStrings.Helpers.Localization import _
from PyStrings.ResourceError import TranslationDecodeError
from PyStrings.ResourceItem import StringEntry
from PyStrings.SettingsType import SettingsType
from PyStrings.Translation import Translation

# Some models wrap JSON in a markdown code block even when asked not to
code_fence_pattern = regex.compile(r"^\s*```[\w-]*\s*\n(?P<body>[\s\S]*?)\n?\s*```\s*$")

class TranslationParser:
    """
    Extract translated entries from the provider's response
    """
    def __init__(self, settings : SettingsType|dict|None = None):
        self.settings : SettingsType = SettingsType(settings)
        self.text : str|None = None
        self.translations : dict[str, StringEntry] = {}
        self.translated : list[StringEntry] = []
        self.unknown_keys : list[str] = []
        self.duplicate_keys : list[str] = []
        self.missing_keys : list[str] = []

    def ProcessTranslation(self, translation : Translation) -> list[StringEntry]:
        """
        Decode the first candidate result set into a list of entries, in the order returned.

        Raises TranslationDecodeError if there is no candidate or it cannot be decoded.
        """
        candidates = translation.candidates if isinstance(translation, Translation) else []
        if not candidates and isinstance(translation, Translation) and translation.text:
            # Provider replied in the message body rather than with the result structure
            candidates = [ translation.text ]

        if not candidates:
            raise TranslationDecodeError(_("No result returned by the provider"), response=translation)

        self.text = candidates[0]

        try:
            data = json.loads(self._strip_code_fence(self.text))

        except json.JSONDecodeError as e:
            raise TranslationDecodeError(_("Unable to decode the translation result: {error}").format(error=str(e)), response=translation, error=e)

        results = self._get_results(data)
        if results is None:
            raise TranslationDecodeError(_("Translation result does not contain a list of results"), response=translation)

        try:
            self.translated = [ StringEntry.FromJson(item) for item in results ]

        except ValueError as e:
            raise TranslationDecodeError(_("Invalid item in translation result: {error}").format(error=str(e)), response=translation, error=e)

        self.translations = {}
        self.duplicate_keys = []
        for entry in self.translated:
            if entry.key in self.translations:
                self.duplicate_keys.append(entry.key)
            else:
                self.translations[entry.key] = entry

        logging.debug(f"Decoded {len(self.translated)} results")
        return self.translated

    def MatchTranslations(self, source : list[StringEntry]) -> list[StringEntry]:
        """
        Match the decoded translations to the source entries by key.

        The result follows the source order and only contains keys that are in the source.
        The translatable flag comes from the source entry, whatever the provider returned.
        """
        source_keys = { entry.key for entry in source }

        self.unknown_keys = [ key for key in self.translations.keys() if key not in source_keys ]
        self.missing_keys = []

        matched : list[StringEntry] = []
        seen : set[str] = set()
        for item in source:
            if item.key in seen:
                continue
            seen.add(item.key)

            translation = self.translations.get(item.key)
            if translation is None:
                self.missing_keys.append(item.key)
                continue

            matched.append(StringEntry(key=item.key, value=translation.value, translatable=item.translatable))

        if self.unknown_keys:
            logging.warning(_("Ignoring {count} unknown keys in translation: {keys}").format(count=len(self.unknown_keys), keys=", ".join(self.unknown_keys)))

        if self.duplicate_keys:
            logging.warning(_("Translation contains duplicate keys, using the first: {keys}").format(keys=", ".join(self.duplicate_keys)))

        if self.missing_keys:
            logging.warning(_("No translation found for {count} entries").format(count=len(self.missing_keys)))
            logging.debug(f"Missing keys: {', '.join(self.missing_keys)}")

        return matched

    def _strip_code_fence(self, text : str) -> str:
        match = code_fence_pattern.match(text)
        return match.group('body') if match else text

    def _get_results(self, data : Any) -> list|None:
        """
        The result set is an object with a results array, though a bare array is accepted too
        """
        if isinstance(data, dict):
            results = data.get('results')
            return results if isinstance(results, list) else None

        if isinstance(data, list):
            return data

        return None
