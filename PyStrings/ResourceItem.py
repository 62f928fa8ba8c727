from __future__ import annotations
from dataclasses import dataclass
from typing import Any, TypeAlias

@dataclass(frozen=True)
class StringEntry:
    """
    A named string resource.

    The value is a raw markup fragment: nested elements, CDATA sections and
    entity references are kept exactly as they should be written back to the file.
    """
    key : str
    value : str
    translatable : bool = True

    def ToJson(self) -> dict[str, Any]:
        """
        The representation exchanged with a translation provider
        """
        return { 'name': self.key, 'value': self.value, 'isTranslatable': self.translatable }

    @classmethod
    def FromJson(cls, data : Any) -> StringEntry:
        """
        Construct an entry from a {name, value, isTranslatable} object
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")

        name = data.get('name')
        value = data.get('value')
        if not isinstance(name, str):
            raise ValueError(f"Missing or invalid name in {data}")

        if not isinstance(value, str):
            raise ValueError(f"Missing or invalid value for {name}")

        translatable = data.get('isTranslatable', True)
        if not isinstance(translatable, bool):
            raise ValueError(f"Invalid isTranslatable flag for {name}: {translatable!r}")

        return cls(key=name, value=value, translatable=translatable)

    def __str__(self) -> str:
        flag = "" if self.translatable else " (not translatable)"
        return f"{self.key}{flag}: {self.value}"

@dataclass(frozen=True)
class Comment:
    text : str

    def __str__(self) -> str:
        return f"<!--{self.text}-->"

@dataclass(frozen=True)
class BlankLine:
    """ Marks a blank line separating groups of items """
    def __str__(self) -> str:
        return ""

ResourceItem : TypeAlias = StringEntry | Comment | BlankLine

def IsTranslatable(item : ResourceItem) -> bool:
    return isinstance(item, StringEntry) and item.translatable
