"""Tests for the configuration system."""

import json

import pytest

from plainxml.shared.config import (
    ConfigError,
    ConfigValidationError,
    DocumentConfig,
    ParseConfig,
    RenderConfig,
)


class TestParseConfig:
    """Test suite for ParseConfig."""

    def test_default_configuration(self):
        """Test default parse configuration values."""
        config = ParseConfig()

        assert config.huge_tree is False
        assert config.remove_comments is True
        assert config.remove_pis is True


class TestRenderConfig:
    """Test suite for RenderConfig."""

    def test_default_configuration(self):
        """Test default render configuration values."""
        config = RenderConfig()

        assert config.indent == 0
        assert config.trim is False
        assert config.omit_single_prefix is False

    def test_indent_validation(self):
        """Test that a negative or non-integer indent is rejected."""
        with pytest.raises(ValueError, match="indent must be an integer >= 0"):
            RenderConfig(indent=-1)

        with pytest.raises(ValueError, match="indent must be an integer >= 0"):
            RenderConfig(indent="2")


class TestDocumentConfig:
    """Test suite for DocumentConfig."""

    def test_default_configuration(self):
        """Test default document configuration values."""
        config = DocumentConfig()

        assert config.default_namespace is None
        assert config.default_namespace_prefix is None
        assert isinstance(config.parse, ParseConfig)
        assert isinstance(config.render, RenderConfig)
        assert config.logging_level == "WARNING"
        assert config.correlation_id is None

    def test_prefix_requires_namespace(self):
        """Test that a default prefix without a default namespace is rejected."""
        with pytest.raises(ConfigValidationError) as exc_info:
            DocumentConfig(default_namespace_prefix="x")

        assert exc_info.value.field_name == "default_namespace_prefix"
        assert "Set default_namespace" in exc_info.value.suggestions

    @pytest.mark.parametrize("prefix", ["xml", "xmlns"])
    def test_reserved_prefix(self, prefix):
        """Test that reserved prefixes cannot be used for the default namespace."""
        with pytest.raises(ConfigValidationError, match="reserved prefix"):
            DocumentConfig(default_namespace="urn:x", default_namespace_prefix=prefix)

    def test_logging_level_validation(self):
        """Test that unknown logging levels are rejected."""
        with pytest.raises(ConfigValidationError, match="logging_level"):
            DocumentConfig(logging_level="CHATTY")

        assert DocumentConfig(logging_level="DEBUG").logging_level == "DEBUG"

    def test_immutable(self):
        """Test that the configuration cannot be changed in place."""
        config = DocumentConfig()

        with pytest.raises(AttributeError):
            config.default_namespace = "urn:x"

    def test_override(self):
        """Test deriving a configuration with top-level and nested overrides."""
        config = DocumentConfig()
        derived = config.override(
            default_namespace="urn:x",
            render__indent=2,
            parse__huge_tree=True,
        )

        assert derived.default_namespace == "urn:x"
        assert derived.render.indent == 2
        assert derived.render.trim is False
        assert derived.parse.huge_tree is True
        # Original unchanged
        assert config.default_namespace is None
        assert config.render.indent == 0

    def test_override_unknown_component(self):
        """Test that overrides of unknown components are rejected."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration component"):
            DocumentConfig().override(writer__indent=2)

    def test_override_invalid_value(self):
        """Test that invalid nested values surface as validation errors."""
        with pytest.raises(ConfigValidationError, match="indent"):
            DocumentConfig().override(render__indent=-4)

    def test_to_dict(self):
        """Test conversion to a plain dictionary."""
        config = DocumentConfig(default_namespace="urn:x", default_namespace_prefix="x")
        data = config.to_dict()

        assert data["default_namespace"] == "urn:x"
        assert data["default_namespace_prefix"] == "x"
        assert data["render"] == {"indent": 0, "trim": False, "omit_single_prefix": False}
        assert data["parse"]["remove_comments"] is True

    def test_json_round_trip(self):
        """Test that to_json and from_json reproduce the configuration."""
        config = DocumentConfig(
            default_namespace="urn:x",
            render=RenderConfig(indent=4, trim=True),
            logging_level="INFO",
        )
        restored = DocumentConfig.from_json(config.to_json())

        assert restored == config
        assert json.loads(config.to_json())["render"]["indent"] == 4

    def test_from_dict_partial(self):
        """Test that missing fields keep their defaults."""
        config = DocumentConfig.from_dict({"render": {"indent": 2}})

        assert config.render.indent == 2
        assert config.render.trim is False
        assert config.parse == ParseConfig()

    def test_from_dict_unknown_fields(self):
        """Test that unknown fields are reported rather than ignored."""
        with pytest.raises(ConfigValidationError) as exc_info:
            DocumentConfig.from_dict({"default_namspace": "urn:x"})

        assert "default_namspace" in str(exc_info.value)
        assert "default_namespace" in exc_info.value.suggestions

    def test_from_dict_invalid_nested(self):
        """Test that invalid nested sections raise ConfigValidationError."""
        with pytest.raises(ConfigValidationError):
            DocumentConfig.from_dict({"render": {"spaces": 2}})

        with pytest.raises(ConfigValidationError):
            DocumentConfig.from_dict({"render": {"indent": -1}})

    def test_error_hierarchy(self):
        """Test that validation errors are configuration errors."""
        assert issubclass(ConfigValidationError, ConfigError)
