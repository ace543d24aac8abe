"""Recursive-descent markup parser.

Converts markup text into a ``Document``. The grammar is tolerant about what it
accepts as vocabulary but strict about structure: the first structural error
aborts the parse with a ``ParseError`` and no partial document.
"""

import string
import time
from enum import Enum, auto
from typing import List, Optional, Tuple

from compact_markup.shared import ParseError, ParserConfig, get_logger
from compact_markup.tree import Attribute, Comment, Document, Element, Node, Text
from compact_markup.vocabulary import ElementCategory, element_type_for

IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits + "!-")
QUOTE_CHARS = "'\""

COMMENT_OPEN = "<!--"
ENDIF_OPEN = "<![endif]"
COMMENT_CLOSE = "-->"
CONDITIONAL_CLOSE = "]>"


class ParserState(Enum):
    """Parser states, reported with errors for diagnostics."""

    SEEK_ENTITY = auto()            # Between entities, deciding what comes next
    PARSE_COMMENT = auto()          # Inside <!-- ... -->
    PARSE_ELEMENT_OPEN = auto()     # Reading identifier and attributes
    PARSE_CHILDREN = auto()         # Reading content up to the closing tag
    PARSE_TEXT_ONLY_BLOCK = auto()  # Raw body of script/style
    PARSE_TEXT_RUN = auto()         # Character data up to the next <


class MarkupParser:
    """Markup parser producing immutable document trees.

    A parser instance may be reused; each ``parse`` call starts from a clean
    state.
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "markup_parser")
        self._reset_state("")

    def _reset_state(self, text: str) -> None:
        self.text = text
        self.index = 0
        self.depth = 0
        self.state = ParserState.SEEK_ENTITY

    def parse(self, text: str) -> Document:
        """Parse ``text`` into a document.

        Raises:
            ParseError: On any structural error in the input
        """
        start_time = time.time()
        self._reset_state(text)
        self.logger.debug("Starting parse", extra={"char_count": len(text)})

        nodes: List[Node] = []
        while self.index < len(self.text):
            nodes.append(self._seek_entity())

        self.logger.debug(
            "Parse completed",
            extra={
                "root_nodes": len(nodes),
                "processing_time_ms": (time.time() - start_time) * 1000,
            },
        )
        return Document(tuple(nodes))

    # Cursor helpers

    def _error(self, message: str) -> ParseError:
        consumed = self.text[:self.index]
        line = consumed.count("\n") + 1
        column = self.index - (consumed.rfind("\n") + 1) + 1
        return ParseError(
            message,
            position=self.index,
            line=line,
            column=column,
            state=self.state.name,
        )

    def _peek(self) -> Optional[str]:
        if self.index < len(self.text):
            return self.text[self.index]
        return None

    def _startswith(self, literal: str) -> bool:
        return self.text.startswith(literal, self.index)

    def _expect(self, literal: str) -> None:
        if not self._startswith(literal):
            if self.index >= len(self.text):
                raise self._error(f"unexpected end of input, expected '{literal}'")
            found = self.text[self.index:self.index + len(literal)]
            raise self._error(f"expected '{literal}', found '{found}'")
        self.index += len(literal)

    def _skip_whitespace(self) -> None:
        while self.index < len(self.text) and self.text[self.index].isspace():
            self.index += 1

    def _read_identifier(self) -> str:
        start = self.index
        while self.index < len(self.text) and self.text[self.index] in IDENTIFIER_CHARS:
            self.index += 1
        return self.text[start:self.index]

    # Grammar

    def _seek_entity(self) -> Node:
        """Parse the next entity: a tag at ``<``, otherwise a text run.

        Whitespace is character data like any other, so runs between tags are
        kept as ``Text`` nodes and render back unchanged.
        """
        self.state = ParserState.SEEK_ENTITY
        if self._peek() == "<":
            return self._parse_tag()
        return self._parse_text_run()

    def _parse_text_run(self) -> Text:
        self.state = ParserState.PARSE_TEXT_RUN
        end = self.text.find("<", self.index)
        if end == -1:
            end = len(self.text)
        run = self.text[self.index:end]
        self.index = end
        return Text(run)

    def _parse_tag(self) -> Node:
        if self._startswith(COMMENT_OPEN) or self._startswith(ENDIF_OPEN):
            return self._parse_comment()
        return self._parse_element()

    def _parse_comment(self) -> Comment:
        """Parse a comment, retaining the terminator's leading characters.

        ``<!--x-->`` yields ``x--``; the conditional form ``<!--[if x]>`` yields
        ``[if x]``; ``<![endif]-->`` keeps its ``[endif]`` marker.
        """
        self.state = ParserState.PARSE_COMMENT
        if self._startswith(COMMENT_OPEN):
            self.index += len(COMMENT_OPEN)
            conditional = self._peek() == "["
        else:
            self.index += len("<!")
            conditional = False

        terminator, retained = (
            (CONDITIONAL_CLOSE, "]") if conditional else (COMMENT_CLOSE, "--")
        )
        end = self.text.find(terminator, self.index)
        if end == -1:
            raise self._error(f"unterminated comment, expected '{terminator}'")
        payload = self.text[self.index:end] + retained
        self.index = end + len(terminator)
        return Comment(payload)

    def _parse_attribute(self) -> Attribute:
        name = self._read_identifier()
        if not name:
            found = self._peek()
            raise self._error(f"attribute identifier expected, found '{found}'")
        if self._peek() != "=":
            return Attribute(name)

        self.index += 1
        self._skip_whitespace()
        quote = self._peek()
        if quote is None:
            raise self._error("unexpected end of input, expected quoted attribute value")
        if quote not in QUOTE_CHARS:
            raise self._error(f"expected quote to open value of '{name}', found '{quote}'")
        self.index += 1
        end = self.text.find(quote, self.index)
        if end == -1:
            raise self._error(f"unterminated quote in value of '{name}'")
        value = self.text[self.index:end]
        self.index = end + 1
        return Attribute(name, value)

    def _parse_element_open(self) -> Tuple[str, List[Attribute]]:
        self.state = ParserState.PARSE_ELEMENT_OPEN
        self._expect("<")
        identifier = self._read_identifier()
        if not identifier:
            raise self._error("identifier expected")

        attributes: List[Attribute] = []
        while True:
            self._skip_whitespace()
            char = self._peek()
            if char is None:
                raise self._error(f"unexpected end of input in <{identifier}>")
            if char in "/>":
                break
            attributes.append(self._parse_attribute())
        return identifier, attributes

    def _parse_element(self) -> Element:
        identifier, attributes = self._parse_element_open()
        category = element_type_for(identifier).category

        if self._peek() == "/":
            self._expect("/>")
            return Element(identifier, tuple(attributes))
        self._expect(">")
        if category is ElementCategory.SELF_CLOSING:
            return Element(identifier, tuple(attributes))
        if category is ElementCategory.TEXT_ONLY:
            body = self._parse_text_only_block(identifier)
            return Element(identifier, tuple(attributes), (Text(body),))

        self.depth += 1
        if self.depth > self.config.max_depth:
            raise self._error(
                f"maximum nesting depth of {self.config.max_depth} exceeded"
            )
        children = self._parse_children(identifier)
        self.depth -= 1
        return Element(identifier, tuple(attributes), tuple(children))

    def _parse_text_only_block(self, identifier: str) -> str:
        self.state = ParserState.PARSE_TEXT_ONLY_BLOCK
        closing = f"</{identifier}"
        end = self.text.find(closing, self.index)
        if end == -1:
            raise self._error(f"unterminated <{identifier}> block, expected '{closing}>'")
        body = self.text[self.index:end]
        self.index = end + len(closing)
        self._skip_whitespace()
        self._expect(">")
        return body

    def _parse_children(self, identifier: str) -> List[Node]:
        children: List[Node] = []
        while True:
            self.state = ParserState.PARSE_CHILDREN
            if self.index >= len(self.text):
                raise self._error(f"unexpected end of input, expected </{identifier}>")

            if self._startswith("</"):
                self.index += 2
                closing_identifier = self._read_identifier()
                if closing_identifier != identifier:
                    raise self._error(
                        f"unexpected closing identifier </{closing_identifier}>, "
                        f"expected </{identifier}>"
                    )
                self._skip_whitespace()
                self._expect(">")
                return children

            children.append(self._seek_entity())


def parse_markup(text: str, correlation_id: Optional[str] = None) -> Document:
    """Parse markup text with the default parser configuration."""
    return MarkupParser(correlation_id=correlation_id).parse(text)
