import importlib
import logging
import pkgutil
from typing import cast

from PyStrings.Helpers.Localization import _
from PyStrings.Options import Options
from PyStrings.ResourceError import NoProviderError
from PyStrings.SettingsType import SettingsType
from PyStrings.TranslationClient import TranslationClient

class TranslationProvider:
    """
    Base class for translation service providers.
    """
    name : str = ""

    # Providers in other packages (e.g. test doubles) can register themselves before the built-in ones are imported
    _providers_imported : bool = False

    def __init__(self, name : str, settings : SettingsType|dict):
        self.name : str = name
        self.settings : SettingsType = SettingsType(settings)
        self.validation_message : str|None = None

    @property
    def selected_model(self) -> str|None:
        """
        The currently selected model for the provider
        """
        name = self.settings.get_str('model')
        return name.strip() if name else None

    def GetTranslationClient(self, settings : SettingsType|dict) -> TranslationClient:
        """
        Returns a new instance of the translation client for this provider
        """
        raise NotImplementedError

    def ValidateSettings(self) -> bool:
        """
        Validate the settings for the provider
        """
        return True

    def UpdateSettings(self, settings : SettingsType|Options) -> None:
        """
        Update the settings for the provider
        """
        if isinstance(settings, Options):
            settings.InitialiseProviderSettings(self.name, self.settings)
            settings = settings.GetProviderSettings(self.name)

        for k, v in settings.items():
            if k in self.settings:
                self.settings[k] = v

    @classmethod
    def get_providers(cls) -> dict:
        """
        Return a dictionary of all available providers
        """
        if not cls._providers_imported:
            try:
                cls.import_providers(f"{__package__}.Providers")
                TranslationProvider._providers_imported = True

            except Exception as e:
                logging.error(f"Error importing providers: {str(e)}")

        providers = { cast(TranslationProvider, provider).name : provider for provider in cls.__subclasses__() }

        return providers

    @classmethod
    def get_provider(cls, options : Options) -> 'TranslationProvider':
        """
        Create a new instance of the provider selected in the options
        """
        if not isinstance(options, Options):
            raise ValueError("Options object required")

        if not options.provider:
            raise NoProviderError()

        provider_settings = options.current_provider_settings or SettingsType()

        translation_provider : TranslationProvider = cls.create_provider(options.provider, provider_settings)

        translation_provider.UpdateSettings(options)

        return translation_provider

    @classmethod
    def create_provider(cls, name : str, provider_settings : SettingsType) -> 'TranslationProvider':
        providers = cls.get_providers().items()
        for provider_name, provider in providers:
            if provider_name == name:
                return provider(provider_settings)

        raise ValueError(_("Unknown translation provider: {name}").format(name=name))

    @classmethod
    def import_providers(cls, package_name : str) -> None:
        """
        Dynamically import all modules in the providers package.
        """
        package = importlib.import_module(package_name)
        for loader, module_name, is_pkg in pkgutil.iter_modules(package.__path__, package.__name__ + '.'): # type: ignore[ignore-unused]
            logging.debug(f"Importing provider: {module_name}")
            importlib.import_module(module_name)
