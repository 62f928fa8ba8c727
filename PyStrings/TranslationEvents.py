from events import Events

class TranslationEvents(Events):
    """
    Progress notifications raised while translating resources.

    preprocessed(source_document, target_languages)
    language_translated(language, document)
    language_failed(language, error)
    """
    __events__ = ( 'preprocessed', 'language_translated', 'language_failed' )
