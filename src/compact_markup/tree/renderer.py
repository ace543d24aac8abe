"""Render document trees back to markup text.

The output is structurally equivalent to the parsed input, not byte-identical:
attribute quoting and empty-element spelling are chosen here. Text, including
whitespace between tags, is emitted exactly as stored.
"""

from typing import List, Union

from .model import Attribute, Comment, Document, Element, Node, Text


def render_attribute(attribute: Attribute) -> str:
    """Render one attribute, quoting with ' only when the value contains "."""
    if attribute.value is None:
        return attribute.name
    quote = "'" if '"' in attribute.value else '"'
    return f"{attribute.name}={quote}{attribute.value}{quote}"


def _render_into(node: Node, parts: List[str]) -> None:
    if isinstance(node, Text):
        parts.append(node.value)
    elif isinstance(node, Comment):
        parts.append(f"<!{node.value}>")
    elif isinstance(node, Element):
        parts.append(f"<{node.name}")
        for attribute in node.attributes:
            parts.append(" ")
            parts.append(render_attribute(attribute))
        if node.is_text_only and not node.children:
            # <name></name> would read back with an empty Text body
            parts.append("/>")
            return
        parts.append(">")
        if node.is_self_closing:
            return
        # Text-only bodies are a single raw Text child, so the generic path
        # emits them unchanged.
        for child in node.children:
            _render_into(child, parts)
        parts.append(f"</{node.name}>")
    else:
        raise TypeError(f"Cannot render {type(node).__name__}")


def render(target: Union[Document, Node]) -> str:
    """Render a document or a single node to markup text."""
    parts: List[str] = []
    nodes = target.nodes if isinstance(target, Document) else (target,)
    for node in nodes:
        _render_into(node, parts)
    return "".join(parts)
