"""Plain record types for parsed XML.

A parsed document is a tree of Node records without parent links. Names are
stored in bracketed notation (``{namespace}local``, with ``{}local`` for
elements in no namespace). Prefixes are not part of the tree; they live in the
document-wide namespace table of ParsedDocument and are only used when
rendering.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from plainxml.shared.errors import InvalidDocumentFormatError

FORMAT_VERSION = 1
XSI_PREFIX = "xsi"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
XML_PREFIX = "xml"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def initial_namespaces() -> Dict[str, str]:
    """Namespace table every parsed document starts with."""
    return {XSI_PREFIX: XSI_NAMESPACE}


def allocate_prefix(namespaces: Dict[str, str], namespace: str) -> str:
    """Bind a namespace to the first free synthetic prefix (ns1, ns2, ...)."""
    number = 1
    while f"ns{number}" in namespaces:
        number += 1
    prefix = f"ns{number}"
    namespaces[prefix] = namespace
    return prefix


def merge_namespaces(target: Dict[str, str], source: Mapping[str, str]) -> None:
    """Add the bindings of another namespace table to ``target``.

    Namespaces already bound in ``target`` keep their prefix. A prefix taken by
    a different namespace in ``target`` is replaced with a synthetic one.
    """
    bound = set(target.values())
    for prefix, namespace in source.items():
        if namespace in bound:
            continue
        if prefix in target:
            allocate_prefix(target, namespace)
        else:
            target[prefix] = namespace
        bound.add(namespace)


@dataclass
class Node:
    """A single XML element.

    ``value`` is the concatenation of all text directly inside the element, so
    mixed content loses the positions of text relative to child elements.
    """

    name: str
    value: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)

    def copy(self) -> "Node":
        return copy.deepcopy(self)

    def iter(self):
        """Yield this node and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.iter()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "attributes": dict(self.attributes),
            "children": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Node":
        """Rebuild a node tree from its dictionary form.

        Raises:
            InvalidDocumentFormatError: if a record lacks a name or has fields
                of the wrong type
        """
        if not isinstance(data, Mapping) or not isinstance(data.get("name"), str):
            raise InvalidDocumentFormatError("node record without a name")
        value = data.get("value", "")
        attributes = data.get("attributes", {})
        children = data.get("children", [])
        if (
            not isinstance(value, str)
            or not isinstance(attributes, Mapping)
            or not isinstance(children, list)
        ):
            raise InvalidDocumentFormatError(f"malformed node record {data['name']}")
        return cls(
            name=data["name"],
            value=value,
            attributes={str(key): str(val) for key, val in attributes.items()},
            children=[cls.from_dict(child) for child in children],
        )


@dataclass
class ParsedDocument:
    """Versioned container for a parsed tree and its namespace table."""

    root: Node
    namespaces: Dict[str, str] = field(default_factory=initial_namespaces)
    version: int = FORMAT_VERSION

    def to_dict(self) -> Dict[str, Any]:
        """Export to the plain interchange form."""
        return {
            "version": self.version,
            "root": self.root.to_dict(),
            "namespaces": dict(self.namespaces),
        }

    @staticmethod
    def validate(value: Any) -> bool:
        """Minimal shape check of an interchange value; not exhaustive."""
        return (
            isinstance(value, Mapping)
            and value.get("root") is not None
            and value.get("version") == FORMAT_VERSION
        )

    @classmethod
    def from_dict(cls, value: Any) -> "ParsedDocument":
        """Import an interchange value, copying everything it contains."""
        if not cls.validate(value):
            raise InvalidDocumentFormatError()
        namespaces = value.get("namespaces") or {}
        if not isinstance(namespaces, Mapping):
            raise InvalidDocumentFormatError("namespaces must be a mapping")
        return cls(
            root=Node.from_dict(value["root"]),
            namespaces={str(prefix): str(uri) for prefix, uri in namespaces.items()},
            version=value["version"],
        )
