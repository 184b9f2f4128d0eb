"""Tree building from lxml pull-parser events.

XmlTreeBuilder consumes the event stream of ``lxml.etree.XMLPullParser`` and
assembles Node records from it, collecting every prefixed namespace declaration
into the document's namespace table. The parser runs with network access,
external DTD loading and entity resolution disabled.
"""

from typing import Iterator, List, Optional, Tuple, Union

from lxml import etree

from plainxml.shared import (
    ParseConfig,
    ParseDiagnostic,
    XmlParseError,
    get_logger,
)

from .node import Node, ParsedDocument, initial_namespaces

XmlInput = Union[str, bytes]

_EVENTS = ("start", "end", "start-ns")


class XmlTreeBuilder:
    """Build a ParsedDocument from XML text."""

    def __init__(
        self,
        config: Optional[ParseConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParseConfig()
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, "tree_builder")

    def build(self, xml: XmlInput) -> ParsedDocument:
        """Parse XML text into a ParsedDocument.

        Args:
            xml: XML document as text or encoded bytes; the encoding
                declaration only applies to bytes

        Returns:
            ParsedDocument with the root node and the namespace table

        Raises:
            XmlParseError: if the input is not well-formed
        """
        namespaces = initial_namespaces()
        stack: List[Node] = []
        root: Optional[Node] = None
        element_count = 0

        try:
            for event, item in self._events(xml):
                if event == "start-ns":
                    prefix, uri = item
                    if prefix:
                        namespaces[prefix] = uri
                elif event == "start":
                    node = Node(
                        name=self._qualify(item.tag),
                        attributes=dict(item.attrib),
                    )
                    if stack:
                        stack[-1].children.append(node)
                    else:
                        root = node
                    stack.append(node)
                    element_count += 1
                else:
                    node = stack.pop()
                    node.value = (item.text or "") + "".join(
                        child.tail or "" for child in item
                    )
                    # Children are fully converted once their parent ends
                    del item[:]
        except etree.XMLSyntaxError as e:
            diagnostic = self._diagnostic_from(e)
            self._logger.warning(
                "XML parsing failed",
                extra={"diagnostic": diagnostic.to_dict()}
            )
            raise XmlParseError(diagnostic) from e

        if root is None:
            raise XmlParseError(ParseDiagnostic("Document has no root element"))

        self._logger.debug(
            "Parsed XML document",
            extra={
                "input_length": len(xml),
                "element_count": element_count,
                "namespace_count": len(namespaces),
            }
        )
        return ParsedDocument(root=root, namespaces=namespaces)

    def _create_parser(self) -> etree.XMLPullParser:
        return etree.XMLPullParser(
            events=_EVENTS,
            no_network=True,
            resolve_entities=False,
            load_dtd=False,
            huge_tree=self.config.huge_tree,
            remove_comments=self.config.remove_comments,
            remove_pis=self.config.remove_pis,
        )

    def _events(self, xml: XmlInput) -> Iterator[Tuple[str, object]]:
        """Yield parser events; a self-closing element yields start and end at once."""
        parser = self._create_parser()
        parser.feed(xml)
        yield from parser.read_events()
        parser.close()
        yield from parser.read_events()

    @staticmethod
    def _qualify(tag: str) -> str:
        return tag if tag.startswith("{") else "{}" + tag

    @staticmethod
    def _diagnostic_from(error: etree.XMLSyntaxError) -> ParseDiagnostic:
        """Describe the first error reported by libxml2."""
        error_log = getattr(error, "error_log", None)
        entries = [
            entry for entry in (error_log or [])
            if entry.level >= etree.ErrorLevels.ERROR
        ]
        if entries:
            first = entries[0]
            return ParseDiagnostic(
                message=first.message.strip() or str(error),
                line=first.line,
                column=first.column,
            )
        line, column = getattr(error, "position", (None, None)) or (None, None)
        return ParseDiagnostic(message=str(error) or "Unknown XML error", line=line, column=column)
