from typing import Any

from PyStrings.Helpers.Localization import _

class ResourceError(Exception):
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.error = error
        self.message = message

    def __str__(self) -> str:
        if self.message:
            return self.message
        elif self.error:
            return str(self.error)
        return super().__str__()

class ResourceParseError(ResourceError):
    """Error raised when a resource file is not well-formed."""
    def __init__(self, message : str, error : Exception|None = None, path : str|None = None):
        super().__init__(message, error)
        self.path = path

class ConfigurationError(ResourceError):
    pass

class MissingSourceFileError(ConfigurationError):
    """ The source language resource file does not exist """
    def __init__(self, path : str):
        super().__init__(_("Source resource file not found: {path}").format(path=path))
        self.path = path

class NoProviderError(ResourceError):
    def __init__(self):
        super().__init__(_("Provider not specified in options"))

class ProviderError(ResourceError):
    def __init__(self, message : str|None = None, provider : Any = None):
        super().__init__(message)
        self.provider = provider

class ProviderConfigurationError(ProviderError):
    def __init__(self, message : str, provider : Any, error : Exception|None = None):
        super().__init__(message, provider)
        self.error = error

class TranslationError(ResourceError):
    def __init__(self, message : str, translation : Any = None, error : Exception|None = None):
        super().__init__(message, error)
        self.translation = translation

class TranslationAbortedError(TranslationError):
    def __init__(self):
        super().__init__(_("Translation aborted"))

class TranslationImpossibleError(TranslationError):
    """ No chance of retry succeeding """
    def __init__(self, message : str, error : Exception|None = None):
        super().__init__(message, error=error)

class TranslationResponseError(TranslationError):
    def __init__(self, message : str, response : Any = None):
        super().__init__(message)
        self.response = response

class TranslationDecodeError(TranslationResponseError):
    """ The provider replied, but the reply did not contain a usable result set """
    def __init__(self, message : str, response : Any = None, error : Exception|None = None):
        super().__init__(message, response)
        self.error = error
