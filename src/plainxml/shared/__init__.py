"""Shared utilities for plainxml.

This module provides the configuration objects, exception types, diagnostics
and logging helpers used across the parser, query, mutation and render layers.
"""

from .result import ParseDiagnostic
from .config import (
    ConfigError,
    ConfigValidationError,
    DocumentConfig,
    ParseConfig,
    RenderConfig,
)
from .errors import (
    InvalidDocumentFormatError,
    InvalidNotationError,
    NoDocumentError,
    NotationRequiresNamespaceError,
    PathSyntaxError,
    PlainXmlError,
    RenderError,
    TraversalError,
    XmlParseError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "ParseDiagnostic",
    "ConfigError",
    "ConfigValidationError",
    "DocumentConfig",
    "ParseConfig",
    "RenderConfig",
    "InvalidDocumentFormatError",
    "InvalidNotationError",
    "NoDocumentError",
    "NotationRequiresNamespaceError",
    "PathSyntaxError",
    "PlainXmlError",
    "RenderError",
    "TraversalError",
    "XmlParseError",
    "CorrelationLogger",
    "get_logger",
]
