"""
# aiml2rs: tokens.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

AIML tokenization.

An AIML document is consumed as a flat stream of tokens:
- `Text(text)` for a run of character data
- `TagOpen(name, attributes)` for an opening (or self-closing) tag
- `TagClose(name)` for a closing (or self-closing) tag

The stream is produced by the standard library SAX reader, fed incrementally,
so that tokens are available before the whole document has been read.
"""

import xml.sax
import xml.sax.handler
from typing import IO, Iterable, Iterator, NamedTuple, Optional, Union

from aiml2rs.constants import TOKENIZER_CHUNK_SIZE
from aiml2rs.exceptions import MalformedAimlException


class Text(NamedTuple):
    text: str


class TagOpen(NamedTuple):
    name: str
    attributes: tuple[tuple[str, str], ...] = ()

    def get_attribute(self, attribute_name: str) -> Optional[str]:
        """
        Get the value of an attribute, matching its name case-insensitively.
        """
        attribute_name = attribute_name.lower()
        for name, value in self.attributes:
            if name.lower() == attribute_name:
                return value

        return None


class TagClose(NamedTuple):
    name: str


Token = Union[Text, TagOpen, TagClose]


class TokenCollector(xml.sax.handler.ContentHandler):
    """
    SAX content handler that queues tokens until they are drained.

    Consecutive `characters(...)` calls are coalesced into a single `Text` token,
    since the reader is free to split a run of character data wherever it likes.
    """
    _tokens: list[Token]
    _pending_characters: list[str]

    def __init__(self):
        super().__init__()
        self._tokens = []
        self._pending_characters = []

    def startElementNS(self, name, qname, attrs):
        self._flush_characters()
        _, local_name = name
        attributes = tuple(
            (attribute_local_name, value)
            for (_, attribute_local_name), value in attrs.items()
        )
        self._tokens.append(TagOpen(local_name, attributes))

    def endElementNS(self, name, qname):
        self._flush_characters()
        _, local_name = name
        self._tokens.append(TagClose(local_name))

    def characters(self, content):
        self._pending_characters.append(content)

    def endDocument(self):
        self._flush_characters()

    def drain(self) -> list[Token]:
        tokens = self._tokens
        self._tokens = []

        return tokens

    def _flush_characters(self):
        if len(self._pending_characters) > 0:
            self._tokens.append(Text(''.join(self._pending_characters)))
            self._pending_characters = []


def read_chunks(source: Union[str, bytes, IO]) -> Iterable[Union[str, bytes]]:
    if isinstance(source, (str, bytes)):
        yield source
        return

    while True:
        chunk = source.read(TOKENIZER_CHUNK_SIZE)
        if not chunk:
            break

        yield chunk


def tokenize_aiml(source: Union[str, bytes, IO]) -> Iterator[Token]:
    """
    Tokenize an AIML document given as a string, bytes, or an opened stream.

    Binary sources honour the encoding declared in the XML declaration.
    Raises `MalformedAimlException` if the document is not well-formed.
    """
    token_collector = TokenCollector()
    parser = xml.sax.make_parser()
    parser.setFeature(xml.sax.handler.feature_namespaces, True)
    parser.setContentHandler(token_collector)

    try:
        for chunk in read_chunks(source):
            parser.feed(chunk)
            yield from token_collector.drain()

        parser.close()
    except xml.sax.SAXParseException as sax_parse_exception:
        raise MalformedAimlException(
            f'malformed AIML: {sax_parse_exception.getMessage()}',
            sax_parse_exception.getLineNumber(),
            sax_parse_exception.getColumnNumber(),
        ) from sax_parse_exception

    yield from token_collector.drain()


def build_raw_markup(token: Union[TagOpen, TagClose]) -> str:
    """
    Reproduce a tag verbatim, e.g. `<a href="x">` or `</a>`.

    Self-closing tags are reproduced as an opening tag followed by a closing tag,
    since that is how they arrive in the token stream.
    """
    if isinstance(token, TagClose):
        return f'</{token.name}>'

    attribute_sequence = ''.join(
        f' {name}="{value}"'
        for name, value in token.attributes
    )

    return f'<{token.name}{attribute_sequence}>'
