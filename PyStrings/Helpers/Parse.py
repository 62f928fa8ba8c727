from typing import Any
import logging
import regex

def ParseLanguages(languages : str|list|None|Any) -> list[str]:
    """
    Parse a list of language tags from a comma separated string or a list of strings,
    dropping empty tags and duplicates while preserving order
    """
    if languages is None:
        return []

    if isinstance(languages, str):
        languages = [ languages ]

    if not isinstance(languages, list):
        return []

    tags = [ tag.strip() for item in languages for tag in regex.split(r"[\n,;]", str(item)) if tag.strip() ]
    return list(dict.fromkeys(tags))

def ParseDelayFromHeader(value : str) -> float:
    """
    Try to figure out how long a suggested retry-after is
    """
    if not isinstance(value, str):
        return 12.3

    match = regex.match(r"([0-9\.]+)(\w+)?", value)
    if not match:
        return 32.1

    try:
        delay, unit = match.groups()
        delay = float(delay)
        unit = unit.lower() if unit else 's'
        if unit == 's':
            pass
        elif unit == 'm':
            delay *= 60
        elif unit == 'ms':
            delay /= 1000
        else:
            logging.error(f"Unexpected time unit '{unit}'")
            return 6.66

        return max(1, delay)  # ensure at least 1 second

    except ValueError as e:
        logging.error(f"Unexpected time value '{value}' ({e})")
        return 6.66
