import os
import tempfile
import unittest

from PyStrings.Helpers.Settings import (
    GetBoolSetting, GetIntSetting, GetFloatSetting, GetStrSetting, SettingsError
)
from PyStrings.Helpers.Tests import log_input_expected_result, log_test_name
from PyStrings.Instructions import Instructions, default_instructions, default_prompt
from PyStrings.Options import Options
from PyStrings.SettingsType import SettingsType

class TestOptions(unittest.TestCase):
    """Unit tests for the Options class"""

    def setUp(self):
        self.test_options = {
            'provider': 'Test Provider',
            'target_languages': 'fr, de',
            'base_dir': 'res',
            'timeout': 5,
            'custom_setting': 'test_value'
        }

    def test_default_initialization(self):
        """Test that Options initializes with default values"""
        options = Options()

        self.assertEqual(options.get('root_tag'), 'resources')
        self.assertEqual(options.get('resource_filename'), 'strings.xml')
        self.assertEqual(options.get('resource_dir_prefix'), 'values')
        self.assertEqual(options.get('provider_settings'), {})
        self.assertFalse(options.get('overwrite_on_error'))

    def test_initialization_with_dict(self):
        """Test Options initialization with a dictionary"""
        options = Options(self.test_options)

        self.assertEqual(options.provider, 'Test Provider')
        self.assertEqual(options.target_languages, ['fr', 'de'])
        self.assertEqual(options.get('timeout'), 5.0)
        self.assertEqual(options.get('custom_setting'), 'test_value')
        self.assertEqual(options.get('resource_filename'), 'strings.xml')

    def test_initialization_dict_and_kwargs(self):
        """Test that keyword arguments override the dictionary"""
        options = Options(self.test_options, provider='Kwargs Provider', resource_filename='labels.xml')

        self.assertEqual(options.provider, 'Kwargs Provider')
        self.assertEqual(options.target_languages, ['fr', 'de'])
        self.assertEqual(options.get('resource_filename'), 'labels.xml')

    def test_none_values_filtered(self):
        """Test that None values in input options are filtered out"""
        options = Options({ 'resource_filename': None, 'custom_setting': None })

        self.assertEqual(options.get('resource_filename'), 'strings.xml')
        self.assertNotIn('custom_setting', options)

    def test_copy_is_independent(self):
        """Test that copying options does not share state"""
        original = Options(self.test_options)
        copy_options = Options(original)

        copy_options.provider = 'Different Provider'
        self.assertEqual(original.provider, 'Test Provider')
        self.assertEqual(copy_options.provider, 'Different Provider')

    def test_GetSettings(self):
        """Test that GetSettings only includes known settings"""
        options = Options(self.test_options)
        settings = options.GetSettings()

        self.assertIsInstance(settings, SettingsType)
        self.assertEqual(settings.get('provider'), 'Test Provider')
        self.assertNotIn('custom_setting', settings)

    def test_provider_settings(self):
        """Test that provider specific settings are moved into the provider settings"""
        log_test_name("Provider settings")

        options = Options({ 'provider': 'Test Provider', 'api_key': 'secret', 'model': 'test-model' })

        options.InitialiseProviderSettings('Test Provider', { 'api_key': None, 'model': 'default-model', 'temperature': 0.0 })

        provider_settings = options.GetProviderSettings('Test Provider')
        log_input_expected_result("Provider settings", { 'api_key': 'secret', 'model': 'test-model', 'temperature': 0.0 }, provider_settings)

        self.assertEqual(provider_settings.get('api_key'), 'secret')
        self.assertEqual(provider_settings.get('model'), 'test-model')
        self.assertEqual(provider_settings.get('temperature'), 0.0)
        self.assertNotIn('api_key', options)
        self.assertEqual(options.current_provider_settings, provider_settings)

        self.assertEqual(options.GetProviderSettings('Unknown'), {})

    def test_instruction_file(self):
        """Test loading instructions from a file"""
        log_test_name("Instruction file")

        with tempfile.TemporaryDirectory() as temp_dir:
            sectioned = os.path.join(temp_dir, "sectioned.txt")
            with open(sectioned, "w", encoding="utf-8") as f:
                f.write("### prompt\nTranslate this:\n[source_json]\n\n### instructions\nYou translate apps into [target_language].\n")

            options = Options({ 'instruction_file': sectioned })
            options.InitialiseInstructions()

            instructions = options.GetInstructions()
            log_input_expected_result("Instructions", "You translate apps into [target_language].", instructions.instructions)
            self.assertEqual(instructions.instructions, "You translate apps into [target_language].")
            self.assertEqual(instructions.prompt, "Translate this:\n[source_json]")
            self.assertEqual(instructions.instruction_file, "sectioned.txt")

            plain = os.path.join(temp_dir, "plain.txt")
            with open(plain, "w", encoding="utf-8") as f:
                f.write("Translate everything into [target_language].\nKeep placeholders.\n")

            options = Options({ 'instruction_file': plain })
            options.InitialiseInstructions()

            instructions = options.GetInstructions()
            self.assertEqual(instructions.instructions, "Translate everything into [target_language].\nKeep placeholders.")
            self.assertEqual(instructions.prompt, default_prompt)

            options = Options({ 'instruction_file': os.path.join(temp_dir, "missing.txt") })
            with self.assertRaises(ValueError):
                options.InitialiseInstructions()

    def test_default_instructions(self):
        """Test the default instructions"""
        instructions = Options().GetInstructions()

        self.assertEqual(instructions.instructions, default_instructions)
        self.assertEqual(instructions.prompt, default_prompt)
        self.assertIn("[target_language]", instructions.instructions)
        self.assertIn("[source_json]", instructions.prompt)
        self.assertIn("[existing_json]", instructions.prompt)

        extra = Instructions({ 'instruction_args': [ "Use informal language." ] })
        self.assertTrue(extra.instructions.endswith("Use informal language."))

class TestSettingsHelpers(unittest.TestCase):
    """Unit tests for the typed settings getters"""

    def test_GetBoolSetting(self):
        log_test_name("GetBoolSetting")

        settings = { 'a': True, 'b': 'yes', 'c': 'False', 'd': '', 'e': 'maybe', 'f': 1 }

        self.assertTrue(GetBoolSetting(settings, 'a'))
        self.assertTrue(GetBoolSetting(settings, 'b'))
        self.assertFalse(GetBoolSetting(settings, 'c'))
        self.assertFalse(GetBoolSetting(settings, 'd'))
        self.assertFalse(GetBoolSetting(settings, 'missing'))
        self.assertTrue(GetBoolSetting(settings, 'missing', True))

        for key in [ 'e', 'f' ]:
            with self.assertRaises(SettingsError):
                GetBoolSetting(settings, key)

    def test_GetNumberSettings(self):
        log_test_name("GetIntSetting and GetFloatSetting")

        settings = { 'int': 3, 'str': '7', 'float': 2.5, 'bool': True, 'bad': 'three' }

        self.assertEqual(GetIntSetting(settings, 'int'), 3)
        self.assertEqual(GetIntSetting(settings, 'str'), 7)
        self.assertEqual(GetIntSetting(settings, 'float'), 2)
        self.assertEqual(GetFloatSetting(settings, 'str'), 7.0)
        self.assertEqual(GetFloatSetting(settings, 'float'), 2.5)
        self.assertIsNone(GetFloatSetting(settings, 'missing'))

        for getter in [ GetIntSetting, GetFloatSetting ]:
            with self.assertRaises(SettingsError):
                getter(settings, 'bool')
            with self.assertRaises(SettingsError):
                getter(settings, 'bad')

    def test_GetStrSetting(self):
        log_test_name("GetStrSetting")

        settings = { 'str': 'text', 'num': 5, 'list': ['a', 'b'] }

        self.assertEqual(GetStrSetting(settings, 'str'), 'text')
        self.assertEqual(GetStrSetting(settings, 'num'), '5')
        self.assertEqual(GetStrSetting(settings, 'list'), 'a, b')
        self.assertIsNone(GetStrSetting(settings, 'missing'))

if __name__ == '__main__':
    unittest.main()
