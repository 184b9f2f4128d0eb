"""XML document model.

XmlDoc holds one parsed tree together with the query configuration (default
namespace and default namespace prefix) and exposes the read, write, import,
export and render operations on it.

Examples:
    >>> doc = XmlDoc().parse('<r xmlns="urn:x"><t pref="preferred">A</t></r>')
    >>> doc.set_default_namespace("urn:x").first_value(path="t")
    'A'
    >>> doc.attr(doc.first(path="t"), "pref")
    'preferred'
"""

import contextlib
from typing import Any, Dict, Iterator, List, Optional

from plainxml.query import PathQueryEngine, PathSpec, notation
from plainxml.render import Renderer
from plainxml.shared import (
    DocumentConfig,
    NoDocumentError,
    TraversalError,
    get_logger,
)
from plainxml.tree import (
    MutationContext,
    Node,
    ParsedDocument,
    XmlTreeBuilder,
    filter_tree,
    modify_tree,
)
from plainxml.tree.builder import XmlInput
from plainxml.tree.mutation import FilterPredicate, ModifyCallback


class XmlDoc:
    """Parsed XML document with namespace-aware path queries."""

    def __init__(
        self,
        config: Optional[DocumentConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize an empty document.

        Args:
            config: Document configuration (defaults apply when omitted)
            correlation_id: Optional correlation ID for logging; falls back to
                the one in the configuration
        """
        self.config = config or DocumentConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self._parsed: Optional[ParsedDocument] = None
        self._default_namespace = self.config.default_namespace
        self._default_namespace_prefix = self.config.default_namespace_prefix
        self._traversing = False
        self._logger = get_logger(__name__, self.correlation_id, "document")

    def parse(self, xml: XmlInput) -> "XmlDoc":
        """Parse XML text, replacing any document held so far."""
        builder = XmlTreeBuilder(self.config.parse, self.correlation_id)
        self._parsed = builder.build(xml)
        return self

    def to_xml(
        self,
        indent: Optional[int] = None,
        trim: Optional[bool] = None,
        node: Optional[Node] = None,
        omit_single_prefix: Optional[bool] = None
    ) -> str:
        """Serialize the document (or the subtree at ``node``) as XML.

        Options left as None take their value from the render configuration.
        """
        render_config = self.config.render
        renderer = Renderer(
            self.document,
            self._default_namespace,
            self._default_namespace_prefix,
            self.correlation_id,
        )
        return renderer.render(
            indent=render_config.indent if indent is None else indent,
            trim=render_config.trim if trim is None else trim,
            node=node,
            omit_single_prefix=(
                render_config.omit_single_prefix
                if omit_single_prefix is None else omit_single_prefix
            ),
        )

    def import_parsed(self, parsed: Any) -> None:
        """Load a value previously produced by export().

        Raises:
            InvalidDocumentFormatError: if the value fails the shape check
        """
        if isinstance(parsed, ParsedDocument):
            parsed = parsed.to_dict()
        self._parsed = ParsedDocument.from_dict(parsed)
        self._logger.debug("Imported parsed document")

    def export(self) -> Dict[str, Any]:
        """Export the document as a plain, JSON-compatible value."""
        return self.document.to_dict()

    def set_default_namespace(
        self, namespace: Optional[str], prefix: Optional[str] = None
    ) -> "XmlDoc":
        """Set the namespace for unqualified path segments and attribute names.

        Args:
            namespace: Namespace URI, or None for no default
            prefix: Prefix for the default namespace when rendering XML
        """
        self._default_namespace = namespace
        self._default_namespace_prefix = prefix
        return self

    @property
    def default_namespace(self) -> Optional[str]:
        return self._default_namespace

    @property
    def default_namespace_prefix(self) -> Optional[str]:
        return self._default_namespace_prefix

    @property
    def document(self) -> ParsedDocument:
        """The parsed document; raises NoDocumentError before parse or import."""
        if self._parsed is None:
            raise NoDocumentError()
        return self._parsed

    @property
    def namespaces(self) -> Dict[str, str]:
        """Copy of the prefix to namespace table."""
        return dict(self.document.namespaces)

    def root(self) -> Optional[Node]:
        """Root node, or None if the document is uninitialized."""
        return self._parsed.root if self._parsed is not None else None

    def all(self, node: Optional[Node] = None, path: PathSpec = "") -> List[Node]:
        """Get all nodes matching a path below a node.

        Args:
            node: Node to start from (default: the document root)
            path: Path as a list of segments or a ``/``-delimited string; each
                segment in bracketed or spaced notation, or a bare name when a
                default namespace is set. An empty path selects the direct
                children.
        """
        start = node if node is not None else self.document.root
        engine = PathQueryEngine(self._default_namespace)
        return engine.all(start.children, path)

    def first(self, node: Optional[Node] = None, path: PathSpec = "") -> Optional[Node]:
        """Get the first node matching a path, or None."""
        nodes = self.all(node, path)
        return nodes[0] if nodes else None

    def all_values(
        self,
        node: Optional[Node] = None,
        path: PathSpec = "",
        trim: bool = True,
        empty_values: bool = False
    ) -> List[str]:
        """Get the text values of all nodes matching a path.

        Empty strings (after trimming) are left out unless ``empty_values``.
        """
        values = [self.value(match, trim) for match in self.all(node, path)]
        if not empty_values:
            values = [value for value in values if value != ""]
        return values

    def first_value(
        self, node: Optional[Node] = None, path: PathSpec = "", trim: bool = True
    ) -> Optional[str]:
        """Get the text value of the first node matching a path, or None."""
        match = self.first(node, path)
        return self.value(match, trim) if match is not None else None

    def attr(self, node: Optional[Node], name: str, trim: bool = True) -> Optional[str]:
        """Get an attribute value, or None if absent.

        The name is looked up qualified (bracketed, or with the default
        namespace) first and then literally as stored.

        Raises:
            NotationRequiresNamespaceError: if the name is bare and no default
                namespace is set
        """
        if node is None:
            return None
        result = node.attributes.get(notation.ensure_valid(name, self._default_namespace))
        if result is None:
            result = node.attributes.get(name)
        if result is not None and trim:
            result = result.strip()
        return result

    def value(self, node: Node, trim: bool = True) -> str:
        return node.value.strip() if trim else node.value

    def name(self, node: Node, omit_default: bool = False) -> str:
        """Get the bracketed name of a node.

        With ``omit_default``, a node in the default namespace is named by its
        local name only.
        """
        namespace, local = notation.parse(node.name)
        if omit_default and namespace == self._default_namespace:
            return local
        return node.name

    def filter(self, predicate: FilterPredicate) -> int:
        """Remove every node for which ``predicate(node, path, parents)`` is False.

        Returns:
            Number of removed nodes
        """
        with self._traversal("filter"):
            return filter_tree(self.document.root, predicate)

    def modify(self, callback: ModifyCallback) -> int:
        """Visit every node with ``callback(editor, path, index, parents)``.

        Returning ModifyAction.DROP removes the node and its subtree.

        Returns:
            Number of dropped nodes
        """
        parsed = self.document
        context = MutationContext(parsed.namespaces, self._default_namespace)
        with self._traversal("modify"):
            return modify_tree(parsed.root, callback, context)

    @contextlib.contextmanager
    def _traversal(self, operation: str) -> Iterator[None]:
        """Reject nested filter/modify runs on this document."""
        if self._traversing:
            raise TraversalError(
                f"Cannot {operation} while the document is being traversed"
            )
        self._traversing = True
        try:
            yield
        finally:
            self._traversing = False
