"""Static vocabulary tables and the custom identifier extension registry.

Wire codes for known element and attribute names are fixed. New names may only
be appended with fresh codes; retired codes (element 22, attribute 15) are never
reused.
"""

import re
import threading
from enum import Enum, auto
from typing import Dict, List, Tuple, Union


class VocabularyKind(Enum):
    """The two independent vocabulary tables."""

    ELEMENT = auto()
    ATTRIBUTE = auto()


class ElementCategory(Enum):
    """Structural classification of an element."""

    NORMAL = auto()
    SELF_CLOSING = auto()   # Never carries children, e.g. <br>
    TEXT_ONLY = auto()      # Body kept verbatim as one text node, e.g. <script>


class UnknownCodeError(LookupError):
    """Raised when a numeric code is not present in a vocabulary table."""

    def __init__(self, kind: VocabularyKind, code: int) -> None:
        super().__init__(f"{kind.name.lower()} code {code} does not exist")
        self.kind = kind
        self.code = code


class ElementType(Enum):
    """Known element identifiers and their wire codes."""

    CUSTOM = ("", 1)
    COMMENT = ("", 2)
    TEXT = ("", 3)
    DOCTYPE = ("!doctype", 4, ElementCategory.SELF_CLOSING)
    HTML = ("html", 5)
    HEAD = ("head", 6)
    BODY = ("body", 7)
    DIV = ("div", 8)
    SCRIPT = ("script", 9, ElementCategory.TEXT_ONLY)
    STYLE = ("style", 10, ElementCategory.TEXT_ONLY)
    A = ("a", 11)
    TITLE = ("title", 12)
    HEADER = ("header", 13)
    H1 = ("h1", 14)
    P = ("p", 15)
    UL = ("ul", 16)
    LI = ("li", 17)
    META = ("meta", 18, ElementCategory.SELF_CLOSING)
    BR = ("br", 19, ElementCategory.SELF_CLOSING)
    LINK = ("link", 20, ElementCategory.SELF_CLOSING)
    IMG = ("img", 21, ElementCategory.SELF_CLOSING)
    SPAN = ("span", 23)
    I = ("i", 24)  # noqa: E741
    NAV = ("nav", 25)
    H4 = ("h4", 26)
    H3 = ("h3", 27)
    H2 = ("h2", 28)
    STRONG = ("strong", 29)
    IFRAME = ("iframe", 30)
    FOOTER = ("footer", 31)

    def __init__(
        self,
        identifier: str,
        code: int,
        category: ElementCategory = ElementCategory.NORMAL,
    ) -> None:
        self.identifier = identifier
        self.code = code
        self.category = category

    @property
    def is_reserved(self) -> bool:
        """Reserved codes frame the stream and carry no identifier of their own."""
        return not self.identifier


class AttributeType(Enum):
    """Known attribute identifiers and their wire codes."""

    CUSTOM = ("", 1)
    CONTENT = ("", 2)           # End-of-attributes marker
    HREF = ("href", 3)
    HTML = ("html", 4)
    LANG = ("lang", 5)
    CLASS = ("class", 6)
    CHARSET = ("charset", 7)
    NAME = ("name", 8)
    SRC = ("src", 9)
    CONTENT_ATTR = ("content", 10)
    STYLE = ("style", 11)
    ONCLICK = ("onclick", 12)
    TARGET = ("target", 13)
    ID = ("id", 14)
    REL = ("rel", 16)
    TYPE = ("type", 17)
    ASYNC = ("async", 18)
    TITLE = ("title", 19)
    ALT = ("alt", 20)

    def __init__(self, identifier: str, code: int) -> None:
        self.identifier = identifier
        self.code = code

    @property
    def is_reserved(self) -> bool:
        return not self.identifier


_ELEMENTS_BY_NAME: Dict[str, ElementType] = {
    member.identifier: member for member in ElementType if member.identifier
}
_ELEMENTS_BY_CODE: Dict[int, ElementType] = {member.code: member for member in ElementType}
_ATTRIBUTES_BY_NAME: Dict[str, AttributeType] = {
    member.identifier: member for member in AttributeType if member.identifier
}
_ATTRIBUTES_BY_CODE: Dict[int, AttributeType] = {
    member.code: member for member in AttributeType
}

VocabularyType = Union[ElementType, AttributeType]


def element_type_for(name: str) -> ElementType:
    """Look up an element name case-insensitively, CUSTOM when unknown."""
    return _ELEMENTS_BY_NAME.get(name.lower(), ElementType.CUSTOM)


def attribute_type_for(name: str) -> AttributeType:
    """Look up an attribute name case-insensitively, CUSTOM when unknown."""
    return _ATTRIBUTES_BY_NAME.get(name.lower(), AttributeType.CUSTOM)


def element_type_for_code(code: int) -> ElementType:
    try:
        return _ELEMENTS_BY_CODE[code]
    except KeyError:
        raise UnknownCodeError(VocabularyKind.ELEMENT, code) from None


def attribute_type_for_code(code: int) -> AttributeType:
    try:
        return _ATTRIBUTES_BY_CODE[code]
    except KeyError:
        raise UnknownCodeError(VocabularyKind.ATTRIBUTE, code) from None


def _type_for(kind: VocabularyKind, name: str) -> VocabularyType:
    if kind is VocabularyKind.ELEMENT:
        return element_type_for(name)
    return attribute_type_for(name)


def _type_for_code(kind: VocabularyKind, code: int) -> VocabularyType:
    if kind is VocabularyKind.ELEMENT:
        return element_type_for_code(code)
    return attribute_type_for_code(code)


def identifier_to_code(kind: VocabularyKind, name: str) -> int:
    """Map an identifier to its wire code.

    Args:
        kind: Which vocabulary table to consult
        name: Element or attribute identifier, any case

    Returns:
        The fixed code for a known name, otherwise the reserved CUSTOM code
    """
    return _type_for(kind, name).code


def code_to_identifier(kind: VocabularyKind, code: int) -> str:
    """Map a vocabulary code back to its canonical identifier.

    Reserved codes have no identifier: for CUSTOM the caller must use the name
    carried inline in the stream.

    Raises:
        UnknownCodeError: If the code is not in the table
        ValueError: If the code is a reserved framing or custom code
    """
    vocabulary_type = _type_for_code(kind, code)
    if vocabulary_type.is_reserved:
        raise ValueError(
            f"{kind.name.lower()} code {code} ({vocabulary_type.name}) is reserved"
        )
    return vocabulary_type.identifier


def canonical_identifier(kind: VocabularyKind, name: str) -> str:
    """Return the registry spelling for a known name, or ``name`` unchanged."""
    vocabulary_type = _type_for(kind, name)
    if vocabulary_type.is_reserved:
        return name
    return vocabulary_type.identifier


def highest_code(kind: VocabularyKind) -> int:
    """Highest code ever assigned in a static table."""
    codes = _ELEMENTS_BY_CODE if kind is VocabularyKind.ELEMENT else _ATTRIBUTES_BY_CODE
    return max(codes)


_NON_IDENTIFIER_CHARS = re.compile(r"[^A-Z0-9]+")


class ExtensionRegistry:
    """Append-only record of custom identifiers in first-use order.

    Decoding never needs this table since custom names travel inline. It exists
    so that callers can be told about new vocabulary and can generate static
    table entries for it. Safe to share between threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._names: Dict[VocabularyKind, List[str]] = {
            VocabularyKind.ELEMENT: [],
            VocabularyKind.ATTRIBUTE: [],
        }

    def register(self, kind: VocabularyKind, name: str) -> bool:
        """Record ``name``; returns True only the first time it is seen."""
        with self._lock:
            names = self._names[kind]
            if name in names:
                return False
            names.append(name)
            return True

    def names(self, kind: VocabularyKind) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._names[kind])

    @property
    def elements(self) -> Tuple[str, ...]:
        return self.names(VocabularyKind.ELEMENT)

    @property
    def attributes(self) -> Tuple[str, ...]:
        return self.names(VocabularyKind.ATTRIBUTE)

    def __len__(self) -> int:
        with self._lock:
            return sum(len(names) for names in self._names.values())

    def generate_listing(self, kind: VocabularyKind) -> str:
        """Render enum member lines that would add the recorded names to a table.

        Codes continue after the highest static code so that no live or
        retired code is handed out twice.
        """
        lines = []
        code = highest_code(kind)
        for name in self.names(kind):
            code += 1
            member = _NON_IDENTIFIER_CHARS.sub("_", name.upper()).strip("_") or "UNNAMED"
            if member[0].isdigit():
                member = f"_{member}"
            lines.append(f'{member} = ("{name.lower()}", {code})')
        return "\n".join(lines)
