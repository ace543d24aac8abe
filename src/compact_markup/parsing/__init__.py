"""Markup parsing layer.

Key Components:
    MarkupParser: State-machine parser producing Document trees
    ParserState: States reported with ParseError diagnostics
    parse_markup: Convenience function using default configuration
"""

from .parser import MarkupParser, ParserState, parse_markup

__all__ = [
    "MarkupParser",
    "ParserState",
    "parse_markup",
]
