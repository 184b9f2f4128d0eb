"""Qualified name notations.

A qualified name can be spelled in two ways:

- bracketed (Clark) notation: ``{namespace-uri}local-name``
- spaced notation: ``namespace-uri local-name``

Spaced notation is only usable for a single path segment or attribute name,
since its separator would clash with the segment separator of a path string.
Names stored in the tree always use the bracketed form.
"""

from typing import Optional, Tuple

from plainxml.shared.errors import InvalidNotationError, NotationRequiresNamespaceError


def try_parse(name: str) -> Optional[Tuple[str, str]]:
    """Split a name into namespace and local name.

    Returns:
        (namespace, local name), or None if the name uses neither notation
    """
    parts = name.split(" ")
    if len(parts) > 2:
        return None
    if len(parts) == 2:
        return parts[0], parts[1]
    if name.startswith("{"):
        end = name.find("}")
        if end != -1:
            return name[1:end], name[end + 1:]
    return None


def parse(name: str) -> Tuple[str, str]:
    """Split a name into namespace and local name, or raise InvalidNotationError."""
    result = try_parse(name)
    if result is None:
        raise InvalidNotationError(name)
    return result


def ensure_valid(name: str, default_namespace: Optional[str]) -> str:
    """Normalize a name to bracketed notation.

    Args:
        name: Name in either notation, or a bare local name
        default_namespace: Namespace applied to a bare local name

    Returns:
        The name as ``{namespace}local``
    """
    parsed = try_parse(name)
    if parsed is not None:
        return to_clark(*parsed)
    if default_namespace is None:
        raise NotationRequiresNamespaceError(name)
    return to_clark(default_namespace, name)


def to_clark(namespace: Optional[str], local: str) -> str:
    return "{" + (namespace or "") + "}" + local


def is_qualified(name: str) -> bool:
    return try_parse(name) is not None


def namespace_of(name: str) -> str:
    """Namespace part of a qualified name ("" for no namespace)."""
    return parse(name)[0]


def local_name(name: str) -> str:
    """Local part of a qualified name; bare names are returned unchanged."""
    parsed = try_parse(name)
    return parsed[1] if parsed is not None else name
