"""Document-level API for plainxml.

This module provides XmlDoc, the document model combining parsing, path
queries, tree mutation, import/export and rendering, and the module-level
``parse`` convenience function.
"""

from typing import Optional

from plainxml.shared import DocumentConfig
from plainxml.tree.builder import XmlInput

from .document import XmlDoc


def parse(
    xml: XmlInput,
    default_namespace: Optional[str] = None,
    default_namespace_prefix: Optional[str] = None,
    config: Optional[DocumentConfig] = None
) -> XmlDoc:
    """Parse XML text into a new XmlDoc.

    Examples:
        >>> doc = parse("<r><a>1</a><a>2</a></r>")
        >>> doc.all_values(path="{}a")
        ['1', '2']
    """
    doc = XmlDoc(config)
    if default_namespace is not None:
        doc.set_default_namespace(default_namespace, default_namespace_prefix)
    return doc.parse(xml)


__all__ = ["XmlDoc", "parse"]
