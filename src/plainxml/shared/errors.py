"""Exception types raised by plainxml.

All errors share the PlainXmlError base so callers can catch the library's
failures as a group, while each category can still be told apart. Categories
that correspond to a builtin error family also derive from it (invalid names
are ValueErrors, precondition failures are RuntimeErrors).
"""

from typing import Optional

from .result import ParseDiagnostic


class PlainXmlError(Exception):
    """Base exception for all plainxml errors."""


class XmlParseError(PlainXmlError):
    """Raised when the input is not well-formed XML."""

    def __init__(self, diagnostic: ParseDiagnostic) -> None:
        super().__init__(diagnostic.describe())
        self.diagnostic = diagnostic

    @property
    def line(self) -> Optional[int]:
        return self.diagnostic.line

    @property
    def column(self) -> Optional[int]:
        return self.diagnostic.column


class InvalidNotationError(PlainXmlError, ValueError):
    """Raised when a name satisfies neither the bracketed nor the spaced notation."""

    def __init__(self, name: str) -> None:
        super().__init__(f"'{name}' is invalid")
        self.name = name


class NotationRequiresNamespaceError(PlainXmlError, ValueError):
    """Raised for an unqualified name when no default namespace is configured."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"'{name}' must use correct notation, or default namespace must be defined"
        )
        self.name = name


class PathSyntaxError(PlainXmlError, ValueError):
    """Raised when brackets in a delimited path string are unbalanced."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(f"{message} in path: {path}")
        self.path = path


class NoDocumentError(PlainXmlError, RuntimeError):
    """Raised when a document is used before parse or import."""

    def __init__(self) -> None:
        super().__init__("No parsed document available")


class InvalidDocumentFormatError(PlainXmlError, RuntimeError):
    """Raised when an imported value fails the parsed document shape check."""

    def __init__(self, detail: Optional[str] = None) -> None:
        message = "Invalid parsed document format"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.detail = detail


class TraversalError(PlainXmlError, RuntimeError):
    """Raised when filter or modify is re-entered from inside a callback."""


class RenderError(PlainXmlError, RuntimeError):
    """Raised when a namespace cannot be mapped to a prefix while rendering."""
