"""Command-line interface module for plainxml.

This module provides the ``plainxml`` tool for querying, re-rendering and
exporting XML files.
"""

from .main import main

__all__ = ["main"]
