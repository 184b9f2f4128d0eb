"""Diagnostic types for plainxml.

A ParseDiagnostic records the first problem reported by the underlying XML
parser, with the position it was reported at.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ParseDiagnostic:
    """Single parser diagnostic with position information."""

    message: str
    line: Optional[int] = None
    column: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")

    @property
    def position(self) -> Optional[Dict[str, int]]:
        """Position as a mapping, or None when the parser reported none."""
        if self.line is None:
            return None
        return {"line": self.line, "column": self.column or 0}

    def describe(self) -> str:
        """Render the diagnostic the way parse errors are reported."""
        if self.line is None:
            return f"XML error '{self.message}'"
        return f"XML error '{self.message}' at {self.line}:{self.column or 0}"

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "line": self.line, "column": self.column}
