"""XML serialization of parsed documents.

Rendering runs in two passes over the tree:

1. Prefix discovery resolves the namespace of every element and qualified
   attribute to a prefix, allocating ``ns1``, ``ns2``, ... for namespaces the
   document's table has no prefix for. It works on a copy of the table; the
   source document is never changed.
2. Emission builds the output with lxml, declaring all namespaces on the
   first rendered element so that no declaration is repeated further down.
"""

from typing import Dict, List, Optional, Tuple

from lxml import etree

from plainxml.query import notation
from plainxml.shared import RenderError, get_logger
from plainxml.tree.node import (
    XML_NAMESPACE,
    XML_PREFIX,
    XSI_NAMESPACE,
    XSI_PREFIX,
    Node,
    ParsedDocument,
    allocate_prefix,
)


class Renderer:
    """Render a ParsedDocument (or one of its subtrees) as XML text."""

    def __init__(
        self,
        parsed: ParsedDocument,
        default_namespace: Optional[str] = None,
        default_namespace_prefix: Optional[str] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize renderer.

        Args:
            parsed: Document to render
            default_namespace: Namespace for elements and attributes without one
            default_namespace_prefix: Prefix to render the default namespace with
            correlation_id: Optional correlation ID for logging
        """
        self._parsed = parsed
        self._default_namespace = default_namespace or None
        self._default_prefix = default_namespace_prefix or None
        self._logger = get_logger(__name__, correlation_id, "renderer")

    def render(
        self,
        indent: int = 0,
        trim: bool = False,
        node: Optional[Node] = None,
        omit_single_prefix: bool = False
    ) -> str:
        """Render the document as an XML string.

        Args:
            indent: Pretty-print with this many spaces per level (0 = compact)
            trim: Strip leading and trailing whitespace from text values
            node: Node to render (default: the document root)
            omit_single_prefix: Render names without prefixes when the rendered
                nodes use at most one namespace besides xsi and xml

        Returns:
            XML text starting with an XML declaration
        """
        start = node if node is not None else self._parsed.root

        namespaces = dict(self._parsed.namespaces)
        if self._default_namespace and self._default_prefix:
            namespaces[self._default_prefix] = self._default_namespace
        resolved: Dict[str, str] = {}
        unqualified = self._discover(start, namespaces, resolved)

        # Elements in no namespace count as one namespace
        used = [uri for uri in resolved if uri not in (XSI_NAMESPACE, XML_NAMESPACE)]
        omit_prefixes = omit_single_prefix and len(used) + unqualified <= 1
        if omit_prefixes:
            default_uri = used[0] if used else None
            nsmap = self._omitted_nsmap(default_uri, resolved)
        else:
            nsmap = self._declared_nsmap(namespaces, resolved)

        try:
            element = self._emit(start, trim, omit_prefixes, resolved, nsmap=nsmap)
            if indent:
                etree.indent(element, space=" " * indent)
            output = etree.tostring(element, xml_declaration=True, encoding="UTF-8")
        except ValueError as e:
            raise RenderError(f"Cannot render document: {e}") from e

        self._logger.debug(
            "Rendered XML document",
            extra={
                "declared_namespaces": len(nsmap),
                "allocated_prefixes": len(namespaces) - len(self._parsed.namespaces),
                "omit_prefixes": omit_prefixes,
                "output_bytes": len(output),
            }
        )
        return output.decode("utf-8")

    def _effective_namespace(self, namespace: str) -> str:
        return namespace or self._default_namespace or ""

    def _discover(self, start: Node, namespaces: Dict[str, str], resolved: Dict[str, str]) -> bool:
        """Resolve a prefix for every namespace used in the subtree.

        Returns:
            True if some element has no namespace
        """
        unqualified = False
        for current in start.iter():
            element_ns = self._effective_namespace(notation.namespace_of(current.name))
            if element_ns:
                self._prefix_for(element_ns, namespaces, resolved)
            else:
                unqualified = True
            for attribute in current.attributes:
                parsed = notation.try_parse(attribute)
                if parsed is None:
                    continue
                attribute_ns = self._effective_namespace(parsed[0])
                if attribute_ns:
                    self._prefix_for(attribute_ns, namespaces, resolved)
        return unqualified

    def _prefix_for(self, namespace: str, namespaces: Dict[str, str], resolved: Dict[str, str]) -> str:
        if namespace in resolved:
            return resolved[namespace]
        if namespace == XML_NAMESPACE:
            prefix = XML_PREFIX
        elif namespace == self._default_namespace and self._default_prefix:
            prefix = self._default_prefix
        else:
            prefix = next(
                (p for p, uri in namespaces.items() if uri == namespace),
                None
            ) or allocate_prefix(namespaces, namespace)
        resolved[namespace] = prefix
        return prefix

    @staticmethod
    def _declared_nsmap(namespaces: Dict[str, str], resolved: Dict[str, str]) -> Dict[str, str]:
        """Declarations for the first rendered element, in table order.

        A used namespace is declared only under its resolved prefix; xsi is
        declared only when used.
        """
        nsmap: Dict[str, str] = {}
        for prefix, uri in namespaces.items():
            if prefix == XML_PREFIX:
                continue
            if uri in resolved:
                if resolved[uri] == prefix:
                    nsmap[prefix] = uri
            elif prefix != XSI_PREFIX:
                nsmap[prefix] = uri
        return nsmap

    @staticmethod
    def _omitted_nsmap(
        default_uri: Optional[str], resolved: Dict[str, str]
    ) -> Dict[Optional[str], str]:
        nsmap: Dict[Optional[str], str] = {}
        if default_uri:
            nsmap[None] = default_uri
        if XSI_NAMESPACE in resolved:
            nsmap[XSI_PREFIX] = XSI_NAMESPACE
        return nsmap

    def _emit(
        self,
        current: Node,
        trim: bool,
        omit_prefixes: bool,
        resolved: Dict[str, str],
        parent: Optional[etree._Element] = None,
        nsmap: Optional[Dict] = None
    ) -> etree._Element:
        namespace, local = notation.parse(current.name)
        tag = self._tag(self._effective_namespace(namespace), local, omit_prefixes, resolved)
        if parent is None:
            element = etree.Element(tag, nsmap=nsmap)
        else:
            element = etree.SubElement(parent, tag)

        for key, value in self._attributes(current, omit_prefixes, resolved):
            element.set(key, value)

        text = current.value.strip() if trim else current.value
        if text:
            element.text = text
        for child in current.children:
            self._emit(child, trim, omit_prefixes, resolved, parent=element)
        return element

    def _tag(self, namespace: str, local: str, omit_prefixes: bool, resolved: Dict[str, str]) -> str:
        if not namespace:
            return local
        if not omit_prefixes and namespace not in resolved:
            raise RenderError(f"No prefix found for namespace {namespace}")
        return notation.to_clark(namespace, local)

    def _attributes(
        self, current: Node, omit_prefixes: bool, resolved: Dict[str, str]
    ) -> List[Tuple[str, str]]:
        result = []
        for key, value in current.attributes.items():
            parsed = notation.try_parse(key)
            if parsed is None:
                result.append((key, value))
                continue
            namespace, local = parsed
            namespace = self._effective_namespace(namespace)
            if not namespace or (
                omit_prefixes and namespace not in (XSI_NAMESPACE, XML_NAMESPACE)
            ):
                result.append((local, value))
            else:
                result.append((self._tag(namespace, local, omit_prefixes, resolved), value))
        return result
