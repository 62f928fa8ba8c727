import logging

from PyStrings.Helpers.Documents import FilterTranslatable, MergeTranslations
from PyStrings.Helpers.Localization import _
from PyStrings.Instructions import Instructions
from PyStrings.Options import Options
from PyStrings.ResourceDocument import ResourceDocument
from PyStrings.ResourceError import NoProviderError, ProviderError, TranslationAbortedError, TranslationDecodeError, TranslationImpossibleError
from PyStrings.ResourceItem import StringEntry
from PyStrings.Translation import Translation
from PyStrings.TranslationClient import TranslationClient
from PyStrings.TranslationEvents import TranslationEvents
from PyStrings.TranslationParser import TranslationParser
from PyStrings.TranslationPrompt import TranslationPrompt
from PyStrings.TranslationProvider import TranslationProvider

class ResourceTranslator:
    """
    Reconciles the source entries with the existing translations for a target language
    by asking the translation provider for a fresh set of translations.
    """
    def __init__(self, options : Options, translation_provider : TranslationProvider):
        """
        Initialise a ResourceTranslator with translation options
        """
        self.events = TranslationEvents()
        self.aborted = False

        self.instructions : Instructions = options.GetInstructions()
        self.user_prompt : str = self.instructions.prompt

        self.settings = options.GetSettings()
        self.settings['instructions'] = self.instructions.instructions

        logging.debug(f"Translation prompt: {self.user_prompt}")

        self.translation_provider : TranslationProvider = translation_provider

        if not self.translation_provider:
            raise NoProviderError()

        try:
            self.client : TranslationClient = self.translation_provider.GetTranslationClient(self.settings)

        except ProviderError:
            raise

        except Exception as e:
            raise ProviderError(_("Unable to create provider client: {error}").format(error=str(e)), translation_provider)

        if not self.client:
            raise ProviderError(_("Unable to create translation client"), translation_provider)

        self.last_prompt : TranslationPrompt|None = None
        self.last_translation : Translation|None = None

    def StopTranslating(self) -> None:
        self.aborted = True
        self.client.AbortTranslation()

    def ReconcileTranslations(self, source : list[StringEntry], existing : list[StringEntry], target_language : str) -> list[StringEntry]:
        """
        Request translations of the translatable source entries, with the existing translations as a reference.

        Returns the translated entries in source order. Entries the provider did not return are omitted.

        Raises TranslationDecodeError if the response cannot be decoded, other TranslationErrors
        if the provider could not be reached.
        """
        if self.aborted:
            raise TranslationAbortedError()

        source = FilterTranslatable(source)
        existing = FilterTranslatable(existing)

        if not source:
            logging.info(_("No translatable entries for {language}").format(language=target_language))
            return []

        instructions = self.instructions.instructions
        if not instructions:
            raise TranslationImpossibleError(_("No instructions provided for translation"))

        logging.debug(f"Translating {len(source)} entries to {target_language} with {len(existing)} existing translations")

        prompt = self.client.BuildTranslationPrompt(self.user_prompt, instructions, target_language, source, existing)
        self.last_prompt = prompt

        translation : Translation|None = self.client.RequestTranslation(prompt)

        if self.aborted:
            raise TranslationAbortedError()

        if not translation:
            raise TranslationDecodeError(_("No response received for {language}").format(language=target_language))

        self.last_translation = translation

        parser : TranslationParser = self.client.GetParser()
        parser.ProcessTranslation(translation)

        translated = parser.MatchTranslations(source)

        logging.info(_("Translated {count} of {total} entries to {language}").format(count=len(translated), total=len(source), language=target_language))

        return translated

    def TranslateDocument(self, source : ResourceDocument, target : ResourceDocument, target_language : str) -> ResourceDocument:
        """
        Reconcile the target document with the source and return the updated document
        """
        translated = self.ReconcileTranslations(source.entries, target.entries, target_language)

        document = MergeTranslations(target, translated)

        self.events.language_translated(target_language, document)

        return document
