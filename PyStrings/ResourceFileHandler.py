from abc import ABC, abstractmethod
from typing import BinaryIO

from PyStrings.ResourceDocument import ResourceDocument

class ResourceFileHandler(ABC):
    """
    Abstract interface for reading and writing string-resource files.
    Implementations handle format-specific operations while the translation
    logic remains format-agnostic.
    """

    @abstractmethod
    def parse_file(self, file_obj: BinaryIO) -> ResourceDocument:
        """
        Parse the content of a resource file.

        Args:
            file_obj: Open binary file object to read from

        Returns:
            ResourceDocument: the items of the file, in order

        Raises:
            ResourceParseError: If the file is not well-formed
        """
        pass

    @abstractmethod
    def parse_string(self, content: str) -> ResourceDocument:
        """
        Parse resource file content from a string.

        Raises:
            ResourceParseError: If the content is not well-formed
        """
        pass

    @abstractmethod
    def compose_document(self, document: ResourceDocument) -> str:
        """
        Compose a document into the file format.

        Args:
            document: the document to serialize

        Returns:
            str: Formatted file content
        """
        pass

    @abstractmethod
    def get_file_extensions(self) -> list[str]:
        """
        Get file extensions supported by this handler.
        """
        pass
