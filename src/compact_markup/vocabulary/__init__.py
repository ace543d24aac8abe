"""Vocabulary registries mapping element and attribute names to wire codes."""

from .registry import (
    AttributeType,
    ElementCategory,
    ElementType,
    ExtensionRegistry,
    UnknownCodeError,
    VocabularyKind,
    attribute_type_for,
    attribute_type_for_code,
    canonical_identifier,
    code_to_identifier,
    element_type_for,
    element_type_for_code,
    highest_code,
    identifier_to_code,
)

__all__ = [
    "AttributeType",
    "ElementCategory",
    "ElementType",
    "ExtensionRegistry",
    "UnknownCodeError",
    "VocabularyKind",
    "attribute_type_for",
    "attribute_type_for_code",
    "canonical_identifier",
    "code_to_identifier",
    "element_type_for",
    "element_type_for_code",
    "highest_code",
    "identifier_to_code",
]
