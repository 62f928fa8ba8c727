import logging
import os

from PyStrings.Helpers.Localization import _
from PyStrings.ResourceDocument import ResourceDocument
from PyStrings.ResourceError import MissingSourceFileError, ResourceParseError
from PyStrings.ResourceFileHandler import ResourceFileHandler

default_encoding = os.getenv('DEFAULT_ENCODING', 'utf-8')

class ResourceFile:
    """
    The string resources for one language, and where they live on disk
    """
    def __init__(self, path : str, language : str|None, handler : ResourceFileHandler):
        self.path : str = os.path.normpath(path)
        self.language : str = language or ""
        self.handler : ResourceFileHandler = handler
        self.document : ResourceDocument = ResourceDocument()

    @property
    def exists(self) -> bool:
        return os.path.exists(self.path)

    @property
    def entrycount(self) -> int:
        return self.document.entrycount

    def Load(self) -> ResourceDocument:
        """
        Parse the file. Raises ResourceParseError if the content is not well-formed.
        """
        try:
            with open(self.path, 'rb') as f:
                self.document = self.handler.parse_file(f)

        except ResourceParseError as e:
            e.path = self.path
            logging.error(_("Failed to parse {path}: {error}").format(path=self.path, error=str(e)))
            raise

        logging.debug(f"Loaded {self.document.entrycount} entries from {self.path}")
        return self.document

    def LoadSource(self) -> ResourceDocument:
        """
        Parse the file, which must exist
        """
        if not self.exists:
            raise MissingSourceFileError(self.path)

        return self.Load()

    def LoadOrCreate(self) -> ResourceDocument:
        """
        Parse the file, creating an empty file first if it does not exist
        """
        if not self.exists:
            logging.info(_("Creating {path}").format(path=self.path))
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(self.path, 'wb'):
                pass

        return self.Load()

    def Save(self, document : ResourceDocument|None = None) -> None:
        """
        Write the document to the file
        """
        if document is not None:
            self.document = document

        content = self.handler.compose_document(self.document)

        logging.info(_("Saving {count} entries to {path}").format(count=self.document.entrycount, path=self.path))

        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, 'w', encoding=default_encoding, newline='\n') as f:
            f.write(content)

    def __repr__(self) -> str:
        return f"ResourceFile({self.language or 'default'}: {self.path})"
