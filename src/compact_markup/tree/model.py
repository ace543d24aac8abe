"""Immutable document model for parsed markup.

A document is an ordered sequence of root nodes, each of which is an
``Element``, a ``Text`` run or a ``Comment``. Instances are value objects:
two trees compare equal when their structure, identifiers and payloads match.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union

from compact_markup.vocabulary import (
    AttributeType,
    ElementCategory,
    ElementType,
    VocabularyKind,
    attribute_type_for,
    canonical_identifier,
    element_type_for,
)


@dataclass(frozen=True)
class Attribute:
    """A single attribute; ``value`` is None when only the name is present."""

    name: str
    value: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Attribute name cannot be empty")
        object.__setattr__(
            self, "name", canonical_identifier(VocabularyKind.ATTRIBUTE, self.name)
        )

    @property
    def attribute_type(self) -> AttributeType:
        return attribute_type_for(self.name)

    @property
    def is_custom(self) -> bool:
        return self.attribute_type is AttributeType.CUSTOM


@dataclass(frozen=True)
class Text:
    """Raw character data."""

    value: str


@dataclass(frozen=True)
class Comment:
    """Comment payload, including any retained terminator characters."""

    value: str


@dataclass(frozen=True)
class Element:
    """A markup element with ordered attributes and children.

    Known names are stored in the registry's spelling so that an element read
    back from the binary form compares equal to the one that was written.
    """

    name: str
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple["Node", ...] = ()

    def __post_init__(self) -> None:
        """Normalise sequences and enforce the category's child constraints."""
        if not self.name:
            raise ValueError("Element name cannot be empty")
        object.__setattr__(
            self, "name", canonical_identifier(VocabularyKind.ELEMENT, self.name)
        )
        object.__setattr__(self, "attributes", tuple(self.attributes))
        object.__setattr__(self, "children", tuple(self.children))

        for attribute in self.attributes:
            if not isinstance(attribute, Attribute):
                raise TypeError("Attributes must be Attribute instances")
        for child in self.children:
            if not isinstance(child, (Element, Text, Comment)):
                raise TypeError("Children must be Element, Text or Comment instances")

        category = self.category
        if category is ElementCategory.SELF_CLOSING and self.children:
            raise ValueError(f"Self-closing element <{self.name}> cannot have children")
        if category is ElementCategory.TEXT_ONLY and (
            len(self.children) > 1
            or any(not isinstance(child, Text) for child in self.children)
        ):
            raise ValueError(
                f"Text-only element <{self.name}> must contain at most one text node"
            )

    @property
    def element_type(self) -> ElementType:
        return element_type_for(self.name)

    @property
    def category(self) -> ElementCategory:
        return self.element_type.category

    @property
    def is_custom(self) -> bool:
        return self.element_type is ElementType.CUSTOM

    @property
    def is_self_closing(self) -> bool:
        return self.category is ElementCategory.SELF_CLOSING

    @property
    def is_text_only(self) -> bool:
        return self.category is ElementCategory.TEXT_ONLY

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the value of the first attribute called ``name``."""
        wanted = canonical_identifier(VocabularyKind.ATTRIBUTE, name)
        for attribute in self.attributes:
            if attribute.name == wanted:
                return attribute.value
        return default

    def has_attribute(self, name: str) -> bool:
        wanted = canonical_identifier(VocabularyKind.ATTRIBUTE, name)
        return any(attribute.name == wanted for attribute in self.attributes)


Node = Union[Element, Text, Comment]


def iter_nodes(nodes: Iterable[Node]) -> Iterator[Node]:
    """Walk ``nodes`` and all their descendants in pre-order."""
    stack = list(reversed(tuple(nodes)))
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Element):
            stack.extend(reversed(node.children))


@dataclass(frozen=True)
class Document:
    """Ordered sequence of root nodes; markup need not have a single root."""

    nodes: Tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def iter_nodes(self) -> Iterator[Node]:
        """Walk every node of the document in pre-order."""
        return iter_nodes(self.nodes)

    def statistics(self) -> Dict[str, Any]:
        """Count nodes by kind and collect identifiers outside the vocabulary."""
        kinds: Counter = Counter()
        custom_elements = []
        custom_attributes = []
        for node in self.iter_nodes():
            kinds[type(node).__name__.lower()] += 1
            if not isinstance(node, Element):
                continue
            if node.is_custom and node.name not in custom_elements:
                custom_elements.append(node.name)
            for attribute in node.attributes:
                if attribute.is_custom and attribute.name not in custom_attributes:
                    custom_attributes.append(attribute.name)

        return {
            "root_nodes": len(self.nodes),
            "total_nodes": sum(kinds.values()),
            "elements": kinds["element"],
            "text_nodes": kinds["text"],
            "comments": kinds["comment"],
            "custom_elements": custom_elements,
            "custom_attributes": custom_attributes,
        }
