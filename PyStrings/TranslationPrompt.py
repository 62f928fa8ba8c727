import json
from typing import Any

from PyStrings.Helpers.Localization import _
from PyStrings.Instructions import ReplaceTags
from PyStrings.ResourceError import TranslationError
from PyStrings.ResourceItem import StringEntry

translation_function_name : str = "translatedResult"
translation_function_description : str = "The value is translated and returned with the same type structure as the source JSON."

translation_result_schema : dict[str, Any] = {
    "type": "object",
    "properties": {
        "results": {
            "type": "array",
            "description": "A list of results.",
            "items": {
                "type": "object",
                "properties": {
                    "name": {
                        "type": "string",
                        "description": "The name of the result."
                    },
                    "value": {
                        "type": "string",
                        "description": "The value associated with the result."
                    },
                    "isTranslatable": {
                        "type": "boolean",
                        "description": "Indicates if the result is translatable."
                    }
                },
                "required": ["name", "value", "isTranslatable"],
                "additionalProperties": False
            }
        }
    },
    "required": ["results"],
    "additionalProperties": False
}

def EncodeEntries(entries : list[StringEntry]) -> str:
    """
    Encode a list of entries as a JSON array of {name, value, isTranslatable}
    """
    return json.dumps([ entry.ToJson() for entry in entries ], ensure_ascii=False, indent=2)

class TranslationPrompt:
    """
    Formats the request to translate a set of string resources into a target language
    """
    def __init__(self, user_prompt: str, conversation: bool = True):
        # Template for the user message, with [source_json] and [existing_json] markers
        self.user_prompt: str = user_prompt

        # Flag controlling whether the prompt content is formatted as a list of messages for a conversational model
        self.conversation: bool = conversation

        # Flag controlling whether the instructions are passed separately as a system prompt
        self.supports_system_prompt: bool = False

        # Flag controlling whether to include messages in the "system" role
        self.supports_system_messages: bool = False

        # Name of the privileged role to use when supports_system_messages is True
        self.system_role: str = "system"

        self.target_language: str|None = None
        self.source: list[StringEntry] = []
        self.existing: list[StringEntry] = []

        self.schema: dict[str, Any] = translation_result_schema
        self.function_name: str = translation_function_name
        self.function_description: str = translation_function_description

        self.system_prompt: str|None = None
        self.request_prompt: str|None = None
        self.content: str|list[dict[str, str]]|None = None
        self.messages: list[dict[str, str]] = []

    def GenerateMessages(self, instructions: str, target_language: str, source: list[StringEntry], existing: list[StringEntry]) -> None:
        """
        Generate the messages to request translation of the source entries

        :param instructions: system instruction, [target_language] is replaced with the language tag
        :param target_language: the language to translate into
        :param source: the entries to translate (authoritative content, keys and order)
        :param existing: previous translations, provided for reference only
        """
        if not target_language:
            raise TranslationError(_("No target language provided"))

        self.messages.clear()
        self.target_language = target_language
        self.source = list(source)
        self.existing = list(existing)

        user_role = "user"
        system_role = self.system_role if self.supports_system_messages else user_role

        instructions = ReplaceTags(instructions, { 'target_language': target_language })
        self.request_prompt = self.GenerateRequestPrompt(source, existing)

        if not instructions:
            self.messages.append({'role': user_role, 'content': self.request_prompt})
        elif self.supports_system_prompt:
            self.system_prompt = instructions
            self.messages.append({'role': user_role, 'content': self.request_prompt})
        elif self.supports_system_messages:
            self.messages.append({'role': system_role, 'content': instructions})
            self.messages.append({'role': user_role, 'content': self.request_prompt})
        else:
            user_instructions = self._wrap_system_message(instructions)
            self.messages.append({'role': user_role, 'content': f"{user_instructions}\n{self.request_prompt}"})

        self._generate_content()

    def GenerateRequestPrompt(self, source: list[StringEntry], existing: list[StringEntry]) -> str:
        """
        Create the user prompt embedding the source and existing entries as JSON
        """
        if not source:
            raise TranslationError(_("No source entries provided"))

        tags = {
            'source_json': EncodeEntries(source),
            'existing_json': EncodeEntries(existing),
            'target_language': self.target_language or ""
        }

        return ReplaceTags(self.user_prompt, tags).strip()

    def _wrap_system_message(self, message : str) -> str:
        separator = "--------"
        return '\n'.join( [ separator, "SYSTEM", separator, message.strip(), separator])

    def _generate_content(self) -> None:
        self.content = self.messages if self.conversation else self._generate_completion()

    def _generate_completion(self) -> str:
        """ Convert a series of messages to a script for the AI to complete """
        if self.supports_system_messages:
            return "\n\n".join([ f"#{m.get('role')} ###\n{m.get('content')}" for m in self.messages ])
        else:
            return "\n\n".join([ str(m.get('content')) for m in self.messages ])
