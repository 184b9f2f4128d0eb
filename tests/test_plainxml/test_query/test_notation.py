"""Tests for qualified name notations."""

import pytest

from plainxml.query import notation
from plainxml.shared import InvalidNotationError, NotationRequiresNamespaceError


class TestTryParse:
    """Test splitting names in either notation."""

    def test_bracketed(self):
        """Test the bracketed notation."""
        assert notation.try_parse("{urn:x}title") == ("urn:x", "title")

    def test_bracketed_empty_namespace(self):
        """Test the bracketed notation with no namespace."""
        assert notation.try_parse("{}title") == ("", "title")

    def test_spaced(self):
        """Test the spaced notation."""
        assert notation.try_parse("urn:x title") == ("urn:x", "title")

    def test_plain_word(self):
        """Test that a bare word is not a qualified name."""
        assert notation.try_parse("title") is None

    def test_more_than_one_space(self):
        """Test that names with two spaces are rejected without raising."""
        assert notation.try_parse("urn:x title extra") is None

    def test_unclosed_bracket(self):
        """Test that an unclosed bracket is rejected without raising."""
        assert notation.try_parse("{urn:x title") is None


class TestParse:
    """Test strict parsing."""

    def test_notations_agree(self):
        """Test that both notations of one name give the same pair."""
        assert notation.parse("urn:x title") == notation.parse("{urn:x}title")

    def test_invalid(self):
        """Test that a bare word fails with the offending name."""
        with pytest.raises(InvalidNotationError, match="'plainword' is invalid") as exc_info:
            notation.parse("plainword")

        assert exc_info.value.name == "plainword"


class TestEnsureValid:
    """Test normalization to bracketed notation."""

    def test_qualified_names_normalized(self):
        """Test that both notations normalize to the bracketed one."""
        assert notation.ensure_valid("urn:x title", None) == "{urn:x}title"
        assert notation.ensure_valid("{urn:x}title", "urn:other") == "{urn:x}title"

    def test_default_namespace_applied(self):
        """Test that bare names get the default namespace."""
        assert notation.ensure_valid("title", "urn:x") == "{urn:x}title"

    def test_requires_namespace(self):
        """Test that bare names fail without a default namespace."""
        with pytest.raises(NotationRequiresNamespaceError, match="'title' must use correct notation"):
            notation.ensure_valid("title", None)


class TestHelpers:
    """Test the small notation helpers."""

    def test_to_clark(self):
        """Test building bracketed names."""
        assert notation.to_clark("urn:x", "a") == "{urn:x}a"
        assert notation.to_clark(None, "a") == "{}a"

    def test_is_qualified(self):
        """Test qualified name detection."""
        assert notation.is_qualified("{}a")
        assert notation.is_qualified("urn:x a")
        assert not notation.is_qualified("a")

    def test_namespace_and_local_name(self):
        """Test extracting the parts of a name."""
        assert notation.namespace_of("{urn:x}a") == "urn:x"
        assert notation.local_name("{urn:x}a") == "a"
        assert notation.local_name("a") == "a"
