import logging
from collections.abc import Iterator
from typing import Any, BinaryIO
from io import BytesIO
from xml.parsers import expat
from xml.sax.saxutils import escape

from PyStrings.Helpers.Localization import _
from PyStrings.ResourceDocument import ResourceDocument
from PyStrings.ResourceError import ResourceParseError
from PyStrings.ResourceFileHandler import ResourceFileHandler
from PyStrings.ResourceItem import BlankLine, Comment, StringEntry

START_TAG = 'start'
END_TAG = 'end'
TEXT = 'text'
COMMENT = 'comment'
CDATA_START = 'cdata_start'
CDATA_END = 'cdata_end'
PROCESSING_INSTRUCTION = 'pi'

Token = tuple[str, str|None, Any]

xml_declaration = '<?xml version="1.0" encoding="utf-8"?>'

# Line breaks and tabs in attribute values would be normalised to spaces when read back
attribute_entities = { '"': "&quot;", "\n": "&#10;", "\r": "&#13;", "\t": "&#9;" }

def ParseBoolAttribute(value : str|None, default : bool = True) -> bool:
    """
    Interpret an attribute as true/false (case-insensitive), anything else gives the default
    """
    if value is not None:
        lower_value = value.strip().lower()
        if lower_value == 'true':
            return True
        if lower_value == 'false':
            return False
    return default

def FormatAttributes(attributes : list[tuple[str,str]]|dict[str,str]) -> str:
    """
    Format attributes as they appear in a start tag, with a leading space for each
    """
    pairs = attributes.items() if isinstance(attributes, dict) else attributes
    return ''.join(f' {name}="{escape(value, attribute_entities)}"' for name, value in pairs)

def IsBlankLineRun(text : str) -> bool:
    """
    A whitespace run separates groups of items when it spans at least one empty line
    """
    return not text.strip() and text.count('\n') >= 2

class XmlTokenizer:
    """
    Feeds a byte stream to expat and yields tokens in document order.

    Namespace processing is disabled so that qualified names such as xliff:g are
    reported exactly as written, and attributes are reported in document order.
    """
    def __init__(self, chunk_size : int = 64 * 1024):
        self.chunk_size = chunk_size

    def Tokens(self, file_obj : BinaryIO) -> Iterator[Token]:
        """
        Generate tokens from the file. Raises expat.ExpatError if the markup is malformed.
        """
        pending : list[Token] = []

        parser = expat.ParserCreate()
        parser.ordered_attributes = True
        parser.buffer_text = True

        def start_element(name : str, attributes : list[str]):
            pending.append((START_TAG, name, list(zip(attributes[::2], attributes[1::2]))))

        def end_element(name : str):
            pending.append((END_TAG, name, None))

        def character_data(data : str):
            if pending and pending[-1][0] == TEXT:
                pending[-1] = (TEXT, None, pending[-1][2] + data)
            else:
                pending.append((TEXT, None, data))

        parser.StartElementHandler = start_element
        parser.EndElementHandler = end_element
        parser.CharacterDataHandler = character_data
        parser.CommentHandler = lambda data: pending.append((COMMENT, None, data))
        parser.StartCdataSectionHandler = lambda: pending.append((CDATA_START, None, None))
        parser.EndCdataSectionHandler = lambda: pending.append((CDATA_END, None, None))
        parser.ProcessingInstructionHandler = lambda target, data: pending.append((PROCESSING_INSTRUCTION, target, data))

        leading = b''
        for chunk in iter(lambda: file_obj.read(self.chunk_size), b''):
            if leading is not None:
                # Hold back leading whitespace so that an empty file can be recognised
                leading += chunk
                if not leading.lstrip(b'\xef\xbb\xbf \t\r\n'):
                    continue
                chunk, leading = leading, None

            parser.Parse(chunk, False)

            # A trailing text token may continue in the next chunk
            ready = len(pending) - 1 if pending and pending[-1][0] == TEXT else len(pending)
            yield from pending[:ready]
            del pending[:ready]

        if leading is not None:
            # Nothing but whitespace
            return

        parser.Parse(b'', True)
        yield from pending
        pending.clear()

class XmlResourceHandler(ResourceFileHandler):
    """
    Reads and writes XML string-resource files, e.g.

        <resources>
            <entry name="greeting">Hello <b>world</b></entry>
        </resources>

    Entry values are extracted as raw markup fragments so that nested elements,
    CDATA sections and entity references are written back unchanged.
    """
    def __init__(self, root_tag : str = "resources", entry_tag : str = "entry", indent : str = "    ", chunk_size : int = 64 * 1024):
        self.root_tag = root_tag
        self.entry_tag = entry_tag
        self.indent = indent
        self.tokenizer = XmlTokenizer(chunk_size)

    def parse_file(self, file_obj: BinaryIO) -> ResourceDocument:
        """
        Parse resource file content into a document.
        """
        try:
            return self._read_document(self.tokenizer.Tokens(file_obj))

        except expat.ExpatError as e:
            raise ResourceParseError(_("Failed to parse resource file: {}").format(str(e)), e)

    def parse_string(self, content: str) -> ResourceDocument:
        """
        Parse resource content from a string.
        """
        return self.parse_file(BytesIO(content.encode('utf-8')))

    def compose_document(self, document: ResourceDocument) -> str:
        """
        Compose a document into XML, one line per item.

        Values are written as they are, they are expected to be well-formed fragments.
        """
        lines = [ xml_declaration, f"<{self.root_tag}{FormatAttributes(document.root_attributes)}>" ]

        for item in document.items:
            if isinstance(item, StringEntry):
                attributes = [ ('name', item.key) ]
                if not item.translatable:
                    attributes.append(('translatable', 'false'))
                lines.append(f"{self.indent}<{self.entry_tag}{FormatAttributes(attributes)}>{item.value}</{self.entry_tag}>")

            elif isinstance(item, Comment):
                lines.append(f"{self.indent}<!--{item.text}-->")

            elif isinstance(item, BlankLine):
                lines.append("")

            else:
                raise TypeError(f"Unknown resource item type: {type(item).__name__}")

        lines.append(f"</{self.root_tag}>")

        return '\n'.join(lines) + '\n'

    def get_file_extensions(self) -> list[str]:
        return ['.xml']

    def _read_document(self, tokens : Iterator[Token]) -> ResourceDocument:
        """
        Find the root element and read its children
        """
        document = ResourceDocument()

        for kind, name, data in tokens:
            if kind == START_TAG:
                if name != self.root_tag:
                    logging.debug(f"Root element is <{name}>, expected <{self.root_tag}>")

                document.root_attributes = dict(data)
                self._read_root_children(tokens, document)
                break

        # Anything after the root element must still be well-formed
        for kind, name, data in tokens:
            if kind == START_TAG:
                logging.debug(f"Ignoring <{name}> after the root element")

        return document

    def _read_root_children(self, tokens : Iterator[Token], document : ResourceDocument) -> None:
        for kind, name, data in tokens:
            if kind == START_TAG:
                if name == self.entry_tag:
                    document.AddItem(self._read_entry(tokens, dict(data)))
                else:
                    logging.debug(f"Skipping <{name}> element")
                    self._skip_element(tokens)

            elif kind == COMMENT:
                document.AddItem(Comment(data))

            elif kind == TEXT:
                if IsBlankLineRun(data):
                    document.AddItem(BlankLine())
                elif data.strip():
                    logging.debug(f"Ignoring text outside of an entry: {data.strip()}")

            elif kind == END_TAG:
                return

    def _read_entry(self, tokens : Iterator[Token], attributes : dict[str,str]) -> StringEntry:
        key = attributes.get('name', '')
        translatable = ParseBoolAttribute(attributes.get('translatable'))

        discarded = [ name for name in attributes if name not in ('name', 'translatable') ]
        if discarded:
            logging.debug(f"Discarding attributes of {key}: {', '.join(discarded)}")

        value = self._extract_value(tokens)
        return StringEntry(key=key, value=value, translatable=translatable)

    def _extract_value(self, tokens : Iterator[Token]) -> str:
        """
        Collect the content of the current element as markup, up to its end tag.
        Nested elements are re-serialized with their attributes in document order.
        """
        parts : list[str] = []
        in_cdata = False

        for kind, name, data in tokens:
            if kind == TEXT:
                parts.append(data if in_cdata else escape(data))

            elif kind == START_TAG:
                parts.append(f"<{name}{FormatAttributes(data)}>")
                parts.append(self._extract_value(tokens))
                parts.append(f"</{name}>")

            elif kind == END_TAG:
                break

            elif kind == COMMENT:
                parts.append(f"<!--{data}-->")

            elif kind == CDATA_START:
                in_cdata = True
                parts.append("<![CDATA[")

            elif kind == CDATA_END:
                in_cdata = False
                parts.append("]]>")

            elif kind == PROCESSING_INSTRUCTION:
                logging.debug(f"Discarding processing instruction <?{name} {data}?> in a value")

        return ''.join(parts)

    def _skip_element(self, tokens : Iterator[Token]) -> None:
        depth = 1
        for kind, name, data in tokens:
            if kind == START_TAG:
                depth += 1
            elif kind == END_TAG:
                depth -= 1
                if depth == 0:
                    return
