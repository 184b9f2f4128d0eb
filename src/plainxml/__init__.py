"""plainxml: a lightweight XML document model.

XML is parsed into a tree of plain Node records, queried with simplified
namespace-aware paths, mutated with filter/modify callbacks and rendered back
to XML with namespaces, attributes and text preserved.

Progressive API Disclosure:
- Level 1: ``parse()`` returning an XmlDoc
- Level 2: ``XmlDoc`` with a DocumentConfig
- Level 3: the building blocks: XmlTreeBuilder, PathQueryEngine, Renderer
"""

__version__ = "0.1.0"
__author__ = "plainxml developers"

from .api import XmlDoc, parse
from .query import PathQueryEngine, QueryPath, notation
from .render import Renderer
from .shared import (
    DocumentConfig,
    InvalidDocumentFormatError,
    InvalidNotationError,
    NoDocumentError,
    NotationRequiresNamespaceError,
    ParseConfig,
    PathSyntaxError,
    PlainXmlError,
    RenderConfig,
    RenderError,
    TraversalError,
    XmlParseError,
)
from .tree import ModifyAction, Node, NodeEditor, ParsedDocument, XmlTreeBuilder

__all__ = [
    "__author__",
    "__version__",
    "parse",
    "XmlDoc",
    "Node",
    "ParsedDocument",
    "NodeEditor",
    "ModifyAction",
    "XmlTreeBuilder",
    "PathQueryEngine",
    "QueryPath",
    "Renderer",
    "notation",
    "DocumentConfig",
    "ParseConfig",
    "RenderConfig",
    "PlainXmlError",
    "XmlParseError",
    "InvalidNotationError",
    "NotationRequiresNamespaceError",
    "PathSyntaxError",
    "NoDocumentError",
    "InvalidDocumentFormatError",
    "TraversalError",
    "RenderError",
]
