import json
import unittest
from unittest.mock import MagicMock

import httpx
import openai
from openai.types.chat import ChatCompletion

from PyStrings.Helpers.Tests import BuildResultJson, log_input_expected_error, log_input_expected_result, log_test_name
from PyStrings.Instructions import default_instructions, default_prompt
from PyStrings.Providers.OpenAI.ChatGPTClient import ChatGPTClient
from PyStrings.Providers.Provider_OpenAI import OpenAiProvider
from PyStrings.ResourceError import ProviderConfigurationError, TranslationError, TranslationImpossibleError
from PyStrings.ResourceItem import StringEntry
from PyStrings.TranslationPrompt import translation_function_name

from PyStrings.UnitTests.TestData.resources import french_results

def CreateCompletion(arguments : str|None = None, content : str|None = None, finish_reason : str = "tool_calls") -> ChatCompletion:
    tool_calls = []
    if arguments is not None:
        tool_calls.append({
            'id': "call_1",
            'type': "function",
            'function': { 'name': translation_function_name, 'arguments': arguments }
        })

    message : dict = { 'role': "assistant", 'content': content }
    if tool_calls:
        message['tool_calls'] = tool_calls

    return ChatCompletion.model_validate({
        'id': "chatcmpl-test",
        'object': "chat.completion",
        'created': 1700000000,
        'model': "gpt-test",
        'choices': [ { 'index': 0, 'finish_reason': finish_reason, 'message': message } ],
        'usage': { 'prompt_tokens': 120, 'completion_tokens': 80, 'total_tokens': 200 }
    })

class TestChatGPTClient(unittest.TestCase):
    settings = {
        'instructions': default_instructions,
        'api_key': "sk-test",
        'model': "gpt-test",
        'max_retries': 0,
        'backoff_time': 0.0,
    }

    source = [ StringEntry("greeting", "Hello"), StringEntry("welcome", "Welcome, %1$s!") ]

    def _create_client(self, completion) -> ChatGPTClient:
        client = ChatGPTClient(self.settings)
        client.client = MagicMock()
        if isinstance(completion, Exception):
            client.client.chat.completions.create.side_effect = completion
        else:
            client.client.chat.completions.create.return_value = completion
        return client

    def _create_prompt(self, client : ChatGPTClient):
        return client.BuildTranslationPrompt(default_prompt, default_instructions, "fr", self.source, [])

    def test_ToolCallResponse(self):
        log_test_name("Translation returned as a function call")

        arguments = BuildResultJson(french_results)
        client = self._create_client(CreateCompletion(arguments=arguments))
        prompt = self._create_prompt(client)

        translation = client.RequestTranslation(prompt)

        log_input_expected_result("Candidates", [ arguments ], translation.candidates)
        self.assertEqual(translation.candidates, [ arguments ])
        self.assertEqual(translation.prompt_tokens, 120)
        self.assertEqual(translation.output_tokens, 80)

        kwargs = client.client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs['model'], "gpt-test")
        self.assertEqual(kwargs['tool_choice'], { 'type': 'function', 'function': { 'name': translation_function_name } })
        self.assertEqual(kwargs['tools'][0]['function']['name'], translation_function_name)
        self.assertTrue(kwargs['tools'][0]['function']['strict'])
        self.assertNotIn('temperature', kwargs)

        roles = [ message['role'] for message in kwargs['messages'] ]
        self.assertEqual(roles, [ "system", "user" ])

        parser = client.GetParser()
        entries = parser.ProcessTranslation(translation)
        self.assertEqual(len(entries), len(french_results))

    def test_TextResponse(self):
        log_test_name("Translation returned as message text")

        text = json.dumps(french_results)
        client = self._create_client(CreateCompletion(content=text, finish_reason="stop"))
        prompt = self._create_prompt(client)

        translation = client.RequestTranslation(prompt, temperature=0.5)

        self.assertFalse(translation.has_candidates)
        self.assertEqual(translation.text, text)

        kwargs = client.client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs['temperature'], 0.5)

        matched = client.GetParser()
        matched.ProcessTranslation(translation)
        result = matched.MatchTranslations(self.source)
        log_input_expected_result("Keys", [ "greeting", "welcome" ], [ entry.key for entry in result ])
        self.assertEqual([ entry.key for entry in result ], [ "greeting", "welcome" ])

    def test_TokenLimit(self):
        log_test_name("Token limit reached")

        client = self._create_client(CreateCompletion(content="[", finish_reason="length"))
        prompt = self._create_prompt(client)

        with self.assertRaises(TranslationError) as context:
            client.RequestTranslation(prompt)

        log_input_expected_error("length", TranslationError, context.exception)

    def test_ConnectionError(self):
        log_test_name("Connection failure")

        error = openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
        client = self._create_client(error)
        prompt = self._create_prompt(client)

        with self.assertRaises(TranslationImpossibleError) as context:
            client.RequestTranslation(prompt)

        log_input_expected_error(error, TranslationImpossibleError, context.exception)
        self.assertIs(context.exception.error, error)

    def test_Settings(self):
        log_test_name("Client settings")

        client = ChatGPTClient(self.settings)
        log_input_expected_result("Timeout", 180.0, client.timeout)
        self.assertEqual(client.timeout, 180.0)
        self.assertTrue(client.supports_conversation)
        self.assertTrue(client.supports_system_messages)
        self.assertIsNone(client.temperature)

        with self.assertRaises(TranslationImpossibleError):
            ChatGPTClient({ 'instructions': default_instructions, 'model': "gpt-test" })

        with self.assertRaises(TranslationError):
            ChatGPTClient({ 'api_key': "sk-test", 'model': "gpt-test" })

    def test_ProviderClient(self):
        log_test_name("OpenAI provider clients")

        provider = OpenAiProvider({ 'api_key': "sk-test", 'model': "gpt-test" })
        client = provider.GetTranslationClient({ 'instructions': default_instructions })
        self.assertIsInstance(client, ChatGPTClient)
        self.assertEqual(client.model, "gpt-test")

        provider = OpenAiProvider({ 'api_key': "sk-test", 'model': "gpt-3.5-turbo-instruct" })

        with self.assertRaises(ProviderConfigurationError) as context:
            provider.GetTranslationClient({ 'instructions': default_instructions })

        log_input_expected_error(provider.selected_model, ProviderConfigurationError, context.exception)
        self.assertIs(context.exception.provider, provider)

if __name__ == '__main__':
    unittest.main()
