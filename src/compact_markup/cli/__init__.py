"""Command-line interface module for Compact Markup.

This module provides the compact-markup tool for packing, unpacking and
inspecting markup files.
"""

from .main import main

__all__ = ["main"]
