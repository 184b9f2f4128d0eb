"""Tests for exception types, diagnostics and logging helpers."""

import logging

import pytest

from plainxml.shared import (
    InvalidDocumentFormatError,
    InvalidNotationError,
    NoDocumentError,
    NotationRequiresNamespaceError,
    ParseDiagnostic,
    PathSyntaxError,
    PlainXmlError,
    RenderError,
    TraversalError,
    XmlParseError,
    get_logger,
)


class TestParseDiagnostic:
    """Test ParseDiagnostic records."""

    def test_describe_with_position(self):
        """Test the message format with a line and column."""
        diagnostic = ParseDiagnostic("Opening and ending tag mismatch", line=3, column=7)

        assert diagnostic.describe() == "XML error 'Opening and ending tag mismatch' at 3:7"
        assert diagnostic.position == {"line": 3, "column": 7}

    def test_describe_without_position(self):
        """Test the message format when no position is known."""
        diagnostic = ParseDiagnostic("Document is empty")

        assert diagnostic.describe() == "XML error 'Document is empty'"
        assert diagnostic.position is None

    def test_empty_message_rejected(self):
        """Test that a diagnostic needs a message."""
        with pytest.raises(ValueError, match="Diagnostic message cannot be empty"):
            ParseDiagnostic("")

    def test_to_dict(self):
        """Test conversion to a plain dictionary."""
        diagnostic = ParseDiagnostic("bad", line=1, column=2)

        assert diagnostic.to_dict() == {"message": "bad", "line": 1, "column": 2}


class TestErrors:
    """Test the exception hierarchy and messages."""

    def test_all_errors_share_base(self):
        """Test that every library error derives from PlainXmlError."""
        for error_type in (
            XmlParseError,
            InvalidNotationError,
            NotationRequiresNamespaceError,
            PathSyntaxError,
            NoDocumentError,
            InvalidDocumentFormatError,
            TraversalError,
            RenderError,
        ):
            assert issubclass(error_type, PlainXmlError)

    def test_xml_parse_error(self):
        """Test that parse errors expose the diagnostic position."""
        error = XmlParseError(ParseDiagnostic("boom", line=2, column=5))

        assert str(error) == "XML error 'boom' at 2:5"
        assert error.line == 2
        assert error.column == 5

    def test_notation_messages(self):
        """Test the messages of the notation errors."""
        assert str(InvalidNotationError("word")) == "'word' is invalid"
        assert str(NotationRequiresNamespaceError("word")) == (
            "'word' must use correct notation, or default namespace must be defined"
        )
        assert isinstance(InvalidNotationError("word"), ValueError)

    def test_path_syntax_message(self):
        """Test that path errors name the offending path."""
        error = PathSyntaxError("Unexpected }", "a}/b")

        assert str(error) == "Unexpected } in path: a}/b"
        assert error.path == "a}/b"

    def test_document_messages(self):
        """Test the messages of the document precondition errors."""
        assert str(NoDocumentError()) == "No parsed document available"
        assert str(InvalidDocumentFormatError()) == "Invalid parsed document format"
        assert str(InvalidDocumentFormatError("missing root")) == (
            "Invalid parsed document format: missing root"
        )


class TestCorrelationLogger:
    """Test the correlation-aware logger."""

    def test_records_carry_correlation_fields(self, caplog):
        """Test that component and correlation ID are attached to records."""
        logger = get_logger("plainxml.test", "doc-42", "tester")

        with caplog.at_level(logging.DEBUG, logger="plainxml.test"):
            logger.info("hello", extra={"nodes": 3})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "tester"
        assert record.correlation_id == "doc-42"
        assert record.nodes == 3

    def test_component_defaults_to_module_name(self):
        """Test the component name derived from the logger name."""
        logger = get_logger("plainxml.render.renderer")

        assert logger.component == "renderer"
        assert logger.correlation_id is None
