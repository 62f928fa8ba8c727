from typing import Any
from openai.types.chat import ChatCompletion

from PyStrings.Helpers.Localization import _
from PyStrings.Providers.OpenAI.OpenAIClient import OpenAIClient
from PyStrings.ResourceError import TranslationError, TranslationResponseError
from PyStrings.SettingsType import SettingsType
from PyStrings.TranslationPrompt import TranslationPrompt

class ChatGPTClient(OpenAIClient):
    """
    Handles chat communication with OpenAI to request translations.

    The result is requested as a call to a function whose parameters follow the
    translation result schema, so the arguments of the call are the result set.
    """
    def __init__(self, settings : SettingsType|dict):
        settings = SettingsType(settings)
        settings.update({
            'supports_conversation': True,
            'supports_system_messages': True
        })
        super().__init__(settings)

    def _send_messages(self, prompt : TranslationPrompt, temperature : float|None) -> dict[str, Any]|None:
        """
        Make a request to an OpenAI-compatible API to provide a translation
        """
        response = {}

        if not self.client:
            raise TranslationError(_("Client is not initialized"))

        if not self.model:
            raise TranslationError(_("No model specified"))

        if not prompt.content or not isinstance(prompt.content, list):
            raise TranslationError(_("No content provided for translation"))

        messages: list[dict] = prompt.content # type: ignore[arg-type]

        tool = {
            'type': 'function',
            'function': {
                'name': prompt.function_name,
                'description': prompt.function_description,
                'parameters': prompt.schema,
                'strict': True
            }
        }

        # Reasoning models reject a temperature setting
        options : dict[str, Any] = {}
        if temperature is not None:
            options['temperature'] = temperature

        result : ChatCompletion = self.client.chat.completions.create(
            model=self.model,
            messages=messages,      # type: ignore[arg-type]
            tools=[tool],           # type: ignore[list-item]
            tool_choice={ 'type': 'function', 'function': { 'name': prompt.function_name } },
            **options
        )

        if self.aborted:
            return None

        if not isinstance(result, ChatCompletion):
            raise TranslationResponseError(_("Unexpected response type: {response_type}").format(
                response_type=type(result).__name__
            ), response=result)

        if not getattr(result, 'choices'):
            raise TranslationResponseError(_("No choices returned in the response"), response=result)

        if result.usage:
            response['prompt_tokens'] = getattr(result.usage, 'prompt_tokens')
            response['output_tokens'] = getattr(result.usage, 'completion_tokens')
            response['total_tokens'] = getattr(result.usage, 'total_tokens')

        candidates : list[str] = []
        for choice in result.choices:
            for tool_call in getattr(choice.message, 'tool_calls', None) or []:
                function = getattr(tool_call, 'function', None)
                if function and function.name == prompt.function_name and function.arguments:
                    candidates.append(function.arguments)

        choice = result.choices[0]
        response['finish_reason'] = getattr(choice, 'finish_reason', None)
        response['candidates'] = candidates
        response['text'] = getattr(choice.message, 'content', None)

        return response
