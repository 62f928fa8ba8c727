import logging

from PyStrings.Formats.XmlResourceHandler import XmlResourceHandler
from PyStrings.Helpers import FormatErrorMessages, GetResourceFilePath
from PyStrings.Helpers.Documents import MergeTranslations
from PyStrings.Helpers.Localization import _
from PyStrings.Options import Options
from PyStrings.ResourceDocument import ResourceDocument
from PyStrings.ResourceError import ConfigurationError, ResourceError, TranslationAbortedError, TranslationError
from PyStrings.ResourceFile import ResourceFile
from PyStrings.ResourceFileHandler import ResourceFileHandler
from PyStrings.ResourceTranslator import ResourceTranslator
from PyStrings.TranslationEvents import TranslationEvents

class TranslationRunResult:
    """
    Outcome of translating the resources into a set of languages
    """
    def __init__(self):
        self.translated : list[str] = []
        self.failed : dict[str, ResourceError] = {}
        self.aborted : bool = False

    @property
    def succeeded(self) -> bool:
        return not self.failed and not self.aborted

    def __str__(self) -> str:
        lines = [ _("Translated: {languages}").format(languages=", ".join(self.translated) or "-") ]
        if self.failed:
            lines.append(_("Failed: {languages}").format(languages=", ".join(self.failed.keys())))
            lines.append(_("Errors: {errors}").format(errors=FormatErrorMessages(list(self.failed.values()))))
        if self.aborted:
            lines.append(_("Aborted"))
        return "\n".join(lines)

class ResourceProject:
    """
    A directory of string resources with one subdirectory per language, e.g.

        base_dir/values/strings.xml
        base_dir/values-fr/strings.xml
    """
    def __init__(self, options : Options, handler : ResourceFileHandler|None = None):
        self.options : Options = options
        self.events = TranslationEvents()

        base_dir = options.get_str('base_dir')
        if not base_dir:
            raise ConfigurationError(_("No base directory specified"))

        self.base_dir : str = base_dir
        self.source_language : str = options.source_language
        self.filename : str = options.get_str('resource_filename') or "strings.xml"
        self.dir_prefix : str = options.get_str('resource_dir_prefix') or "values"
        self.overwrite_on_error : bool = options.get_bool('overwrite_on_error', False)
        self.stop_on_error : bool = options.get_bool('stop_on_error', False)

        self.handler : ResourceFileHandler = handler or XmlResourceHandler(
            root_tag=options.get_str('root_tag') or "resources",
            entry_tag=options.get_str('entry_tag') or "entry",
            indent=options.get_str('indent') or "    "
            )

        self.source : ResourceFile|None = None

    def GetResourceFile(self, language : str|None) -> ResourceFile:
        """
        Get the resource file for a language (not loaded)
        """
        path = GetResourceFilePath(self.base_dir, language, filename=self.filename, prefix=self.dir_prefix)
        return ResourceFile(path, language, self.handler)

    def LoadSource(self) -> ResourceDocument:
        """
        Load the source language resources.

        Raises MissingSourceFileError if the file does not exist, ResourceParseError if it is malformed.
        """
        self.source = self.GetResourceFile(self.source_language)
        document = self.source.LoadSource()

        logging.info(_("Source resources loaded from {path}: {count} entries, {translatable} translatable").format(
            path=self.source.path, count=document.entrycount, translatable=len(document.translatable_entries)
            ))

        return document

    def TranslateResources(self, translator : ResourceTranslator, target_languages : list[str]|None = None) -> TranslationRunResult:
        """
        Translate the source resources into each target language in turn.

        A failure for one language is recorded and the run moves on to the next language.
        The previous file for a failed language is left as it was, unless overwrite_on_error is set.

        A resource file that cannot be parsed, source or target, raises ResourceParseError and ends the run.
        """
        target_languages = target_languages if target_languages is not None else self.options.target_languages
        if not target_languages:
            raise ConfigurationError(_("No target languages specified"))

        source_document = self.source.document if self.source else self.LoadSource()

        result = TranslationRunResult()

        self.events.preprocessed(source_document, target_languages)

        translator.events.language_translated += self._on_language_translated # type: ignore
        try:
            for language in target_languages:
                if translator.aborted:
                    result.aborted = True
                    break

                logging.info(_("Translating to \"{language}\"...").format(language=language))

                try:
                    self.TranslateLanguage(translator, source_document, language)
                    result.translated.append(language)

                except TranslationAbortedError:
                    logging.info(_("Translation aborted"))
                    result.aborted = True
                    break

                except TranslationError as e:
                    logging.error(_("Failed to translate {language}: {error}").format(language=language, error=str(e)))
                    result.failed[language] = e
                    self.events.language_failed(language, e)

                    if self.stop_on_error:
                        break

        finally:
            translator.events.language_translated -= self._on_language_translated # type: ignore

        if result.translated:
            logging.info(_("Translated {count} languages: {languages}").format(count=len(result.translated), languages=", ".join(result.translated)))

        return result

    def TranslateLanguage(self, translator : ResourceTranslator, source_document : ResourceDocument, language : str) -> ResourceDocument:
        """
        Reconcile the resource file for one language with the source and save it
        """
        target_file = self.GetResourceFile(language)
        target_document = target_file.LoadOrCreate()

        try:
            document = translator.TranslateDocument(source_document, target_document, language)

        except TranslationAbortedError:
            raise

        except TranslationError:
            if self.overwrite_on_error:
                logging.warning(_("Writing {path} without translations").format(path=target_file.path))
                target_file.Save(MergeTranslations(target_document, []))
            else:
                logging.warning(_("{path} was not modified").format(path=target_file.path))
            raise

        target_file.Save(document)
        return document

    def _on_language_translated(self, language : str, document : ResourceDocument) -> None:
        logging.debug(f"Language {language} translated")
        self.events.language_translated(language, document)
