"""
Localization utilities using Python's gettext.

Messages shown to the user are wrapped in _() so that a catalogue can be
installed for the console output. Without a catalogue the text is returned as is.
"""
from __future__ import annotations

import gettext
from typing import Optional

from PyStrings.Helpers.Resources import GetResourcePath

_translator: Optional[gettext.NullTranslations] = None
_domain = 'llm-stringtrans'


def _get_locale_dir() -> str:
    return GetResourcePath('locales')


def initialize_localization(language_code: Optional[str] = None) -> None:
    """
    Initialize the gettext translation system.

    Falls back to NullTranslations when no catalogue exists for the language.
    """
    global _translator

    if language_code is None:
        language_code = 'en'

    try:
        _translator = gettext.translation(_domain, localedir=_get_locale_dir(), languages=[language_code])
    except OSError:
        _translator = gettext.NullTranslations()


def _(text: str) -> str:
    """Return translated string for the active language."""
    if _translator:
        return _translator.gettext(text)
    return text
