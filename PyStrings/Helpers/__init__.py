import os
from typing import Any

def GetResourceFilePath(base_dir : str, language : str|None, filename : str = "strings.xml", prefix : str = "values") -> str:
    """
    Get the path of the resource file for a language, e.g. base/values-fr/strings.xml.
    The untagged (base) language lives in the unsuffixed directory.
    """
    language = (language or "").strip()
    directory = f"{prefix}-{language}" if language else prefix
    return os.path.normpath(os.path.join(base_dir, directory, filename))

def FormatMessages(messages : list[dict[str,Any]]) -> str:
    lines : list[str] = []
    for index, message in enumerate(messages, start=1):
        lines.append(f"Message {index}")
        if 'role' in message:
            lines.append(f"Role: {message['role']}")
        if 'content' in message:
            if isinstance(message['content'], str):
                content = message['content'].replace('\\n', '\n')
                lines.extend(["--------------------", content])
            elif isinstance(message['content'], dict):
                for key, value in message['content'].items():
                    text = f"{key}: {value}".replace('\\n', '\n')
                    lines.append(text)
        lines.append("")

    return '\n'.join(lines)

def FormatErrorMessages(errors : list[Exception|str]) -> str:
    """
    Extract error messages from a list of errors
    """
    return ", ".join([ getattr(error, 'message', None) or str(error) for error in errors ])
