"""Configuration classes for plainxml.

This module provides configuration objects for parsing, rendering and
document-level query defaults.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

_COMPONENTS = ("parse", "render")


@dataclass
class ParseConfig:
    """Configuration for the XML tree builder."""

    huge_tree: bool = False
    remove_comments: bool = True
    remove_pis: bool = True


@dataclass
class RenderConfig:
    """Default options for serializing a document."""

    indent: int = 0
    trim: bool = False
    omit_single_prefix: bool = False

    def __post_init__(self) -> None:
        """Validate render configuration."""
        if not isinstance(self.indent, int) or self.indent < 0:
            raise ValueError("indent must be an integer >= 0")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class DocumentConfig:
    """Configuration for an XmlDoc instance.

    Holds the default namespace used for unqualified path segments and
    attribute names, the prefix to render that namespace with, and the
    parse and render defaults. Immutable; use override() to derive variants.
    """

    default_namespace: Optional[str] = None
    default_namespace_prefix: Optional[str] = None
    parse: ParseConfig = field(default_factory=ParseConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    logging_level: str = "WARNING"
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete document configuration."""
        try:
            self.render.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e), field_name="render") from e

        if self.default_namespace_prefix and not self.default_namespace:
            raise ConfigValidationError(
                "default_namespace_prefix requires default_namespace",
                field_name="default_namespace_prefix",
                suggestions=["Set default_namespace", "Remove default_namespace_prefix"],
            )
        if self.default_namespace_prefix in ("xml", "xmlns"):
            raise ConfigValidationError(
                f"'{self.default_namespace_prefix}' is a reserved prefix",
                field_name="default_namespace_prefix",
            )
        if logging.getLevelName(self.logging_level) == f"Level {self.logging_level}":
            raise ConfigValidationError(
                f"logging_level must be a standard level name, got {self.logging_level}",
                field_name="logging_level",
            )

    def override(self, **kwargs: Any) -> "DocumentConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; nested fields use ``component__field``

        Returns:
            New DocumentConfig instance with overrides applied

        Example:
            >>> config = DocumentConfig()
            >>> config.override(render__indent=2, default_namespace="urn:x").render.indent
            2
        """
        nested: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                    )
                nested.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        try:
            for component, values in nested.items():
                top_level[component] = replace(getattr(self, component), **values)
            return replace(self, **top_level)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files surface
        instead of being ignored.
        """
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(sorted(unknown))}",
                suggestions=sorted(known),
            )

        values = dict(data)
        try:
            if "parse" in values:
                values["parse"] = ParseConfig(**values["parse"])
            if "render" in values:
                values["render"] = RenderConfig(**values["render"])
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "DocumentConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))
