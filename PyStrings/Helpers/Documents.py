from PyStrings.ResourceDocument import ResourceDocument
from PyStrings.ResourceItem import BlankLine, Comment, ResourceItem, StringEntry

def FilterTranslatable(items : list[ResourceItem]|list[StringEntry]) -> list[StringEntry]:
    """
    Select the entries that should be sent for translation
    """
    return [ item for item in items if isinstance(item, StringEntry) and item.translatable ]

def MergeTranslations(document : ResourceDocument, translated : list[StringEntry]) -> ResourceDocument:
    """
    Apply a set of translated entries to an existing target document.

    Comments, blank lines and non-translatable entries stay where they are. Translatable
    entries take the translated value, or are removed if there is no translation for them.
    Translations for keys that are not in the document yet are appended in the order given.
    """
    translations : dict[str, StringEntry] = {}
    for entry in translated:
        translations.setdefault(entry.key, entry)

    merged = ResourceDocument(root_attributes=document.root_attributes)
    applied : set[str] = set()

    for item in document.items:
        if isinstance(item, StringEntry):
            if item.key in applied:
                continue

            if item.key in translations:
                merged.AddItem(translations[item.key])
                applied.add(item.key)

            elif not item.translatable:
                merged.AddItem(item)

        elif isinstance(item, BlankLine):
            # Dropping a stale entry can leave two blank lines together
            if not merged.items or not isinstance(merged.items[-1], BlankLine):
                merged.AddItem(item)

        elif isinstance(item, Comment):
            merged.AddItem(item)

        else:
            raise TypeError(f"Unknown resource item type: {type(item).__name__}")

    for entry in translations.values():
        if entry.key not in applied:
            merged.AddItem(entry)
            applied.add(entry.key)

    return merged
