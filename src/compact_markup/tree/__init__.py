"""Document model and renderer.

Key Components:
    Document: Ordered root node container
    Element, Text, Comment: The three node kinds
    Attribute: Name with optional value
    render: Convert a tree back to markup text
"""

from .model import (
    Attribute,
    Comment,
    Document,
    Element,
    Node,
    Text,
    iter_nodes,
)
from .renderer import render, render_attribute

__all__ = [
    "Attribute",
    "Comment",
    "Document",
    "Element",
    "Node",
    "Text",
    "iter_nodes",
    "render",
    "render_attribute",
]
