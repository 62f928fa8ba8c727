from __future__ import annotations
from collections.abc import Iterable, Iterator

from PyStrings.ResourceItem import BlankLine, Comment, ResourceItem, StringEntry

class ResourceDocument:
    """
    The ordered content of one string-resource file.

    Item order is significant and is preserved when the document is written back.
    The root element's attributes (e.g. namespace declarations) are kept alongside the items.
    """
    def __init__(self, items : Iterable[ResourceItem]|None = None, root_attributes : dict[str,str]|None = None):
        self.items : list[ResourceItem] = []
        self.root_attributes : dict[str,str] = dict(root_attributes or {})

        for item in items or []:
            self.AddItem(item)

    @property
    def entries(self) -> list[StringEntry]:
        return [ item for item in self.items if isinstance(item, StringEntry) ]

    @property
    def translatable_entries(self) -> list[StringEntry]:
        return [ entry for entry in self.entries if entry.translatable ]

    @property
    def comments(self) -> list[Comment]:
        return [ item for item in self.items if isinstance(item, Comment) ]

    @property
    def blank_line_count(self) -> int:
        return sum(1 for item in self.items if isinstance(item, BlankLine))

    @property
    def keys(self) -> list[str]:
        return [ entry.key for entry in self.entries ]

    @property
    def entrycount(self) -> int:
        return len(self.entries)

    @property
    def itemcount(self) -> int:
        return len(self.items)

    def GetEntry(self, key : str) -> StringEntry|None:
        """
        Find the first entry with the given key
        """
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None

    def AddItem(self, item : ResourceItem) -> None:
        if not isinstance(item, (StringEntry, Comment, BlankLine)):
            raise TypeError(f"Not a resource item: {type(item).__name__}")

        self.items.append(item)

    def __iter__(self) -> Iterator[ResourceItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __eq__(self, other : object) -> bool:
        if not isinstance(other, ResourceDocument):
            return NotImplemented
        return self.items == other.items and self.root_attributes == other.root_attributes

    def __repr__(self) -> str:
        return f"ResourceDocument({self.entrycount} entries, {len(self.items)} items)"
