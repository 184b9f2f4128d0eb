"""In-place tree mutation.

Two depth-first, pre-order traversals change a tree in place:

- filter_tree removes every node a predicate rejects, together with its subtree.
- modify_tree hands each node to a callback through a NodeEditor; the callback
  may edit the node (name, value, attributes, children) or drop it.

Callbacks get the bracketed path of the node, relative to the root the way
query paths are written (``{ns}a/{ns}b``), and the list of its ancestors, root
first, so decisions can depend on where a node sits in the tree.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional

from plainxml.query import notation
from plainxml.shared.errors import TraversalError

from .node import Node, merge_namespaces

if TYPE_CHECKING:
    from plainxml.api.document import XmlDoc


class ModifyAction(Enum):
    """Outcome of a modify callback."""

    KEEP = auto()
    DROP = auto()


FilterPredicate = Callable[[Node, str, List[Node]], bool]
ModifyCallback = Callable[["NodeEditor", str, int, List[Node]], Any]


@dataclass
class MutationContext:
    """Document state a NodeEditor needs to qualify names and merge namespaces."""

    namespaces: Dict[str, str]
    default_namespace: Optional[str] = None


class NodeEditor:
    """Mutable view of a node handed to modify callbacks."""

    def __init__(self, node: Node, context: MutationContext) -> None:
        self._node = node
        self._context = context

    @property
    def node(self) -> Node:
        return self._node

    @property
    def name(self) -> str:
        return self._node.name

    @property
    def value(self) -> str:
        return self._node.value

    @property
    def attributes(self) -> Dict[str, str]:
        """Copy of the attributes; use set_attribute/remove_attribute to change them."""
        return dict(self._node.attributes)

    @property
    def children(self) -> List[Node]:
        return list(self._node.children)

    def rename(self, name: str) -> None:
        """Rename the node; unqualified names get the default namespace."""
        self._node.name = notation.ensure_valid(name, self._context.default_namespace)

    def set_value(self, value: str) -> None:
        self._node.value = value

    def set_attribute(self, name: str, value: str) -> None:
        """Set an attribute; names in either notation are stored bracketed."""
        self._node.attributes[self._attribute_key(name)] = value

    def remove_attribute(self, name: str) -> bool:
        """Remove an attribute, trying the qualified name before the literal one.

        Bare names need a default namespace, as in XmlDoc.attr.
        """
        for key in self._attribute_candidates(name):
            if key in self._node.attributes:
                del self._node.attributes[key]
                return True
        return False

    def add_child(
        self,
        name: str,
        value: str = "",
        attributes: Optional[Mapping[str, str]] = None,
        index: Optional[int] = None
    ) -> Node:
        """Create a child node and insert it at ``index`` (append when None).

        Returns:
            The new node
        """
        child = Node(
            name=notation.ensure_valid(name, self._context.default_namespace),
            value=value,
            attributes={
                self._attribute_key(key): val for key, val in (attributes or {}).items()
            },
        )
        if index is None:
            self._node.children.append(child)
        else:
            if not (0 <= index <= len(self._node.children)):
                raise IndexError("Child index out of range")
            self._node.children.insert(index, child)
        return child

    def remove_children(self) -> None:
        self._node.children.clear()

    def replace_children(self, source: "XmlDoc", source_node: Optional[Node] = None) -> None:
        """Replace all children with copies of another document's children.

        Args:
            source: Document to copy from
            source_node: Node of ``source`` whose children are copied (default:
                the source root)

        Names without a namespace are qualified with the source document's
        default namespace, and the source namespace table is merged into this
        document's table.
        """
        parsed = source.document
        start = source_node if source_node is not None else parsed.root
        copies = [
            _qualified_copy(child, source.default_namespace) for child in start.children
        ]
        merge_namespaces(self._context.namespaces, parsed.namespaces)
        if source.default_namespace and source.default_namespace_prefix:
            merge_namespaces(
                self._context.namespaces,
                {source.default_namespace_prefix: source.default_namespace},
            )
        self._node.children[:] = copies

    def _attribute_key(self, name: str) -> str:
        parsed = notation.try_parse(name)
        return notation.to_clark(*parsed) if parsed is not None else name

    def _attribute_candidates(self, name: str) -> List[str]:
        return [notation.ensure_valid(name, self._context.default_namespace), name]


def _qualified_copy(node: Node, default_namespace: Optional[str]) -> Node:
    """Deep copy of a subtree with empty namespaces replaced by the default."""
    def qualify(name: str) -> str:
        parsed = notation.try_parse(name)
        if parsed is None or parsed[0] or not default_namespace:
            return name
        return notation.to_clark(default_namespace, parsed[1])

    return Node(
        name=qualify(node.name),
        value=node.value,
        attributes={qualify(key): value for key, value in node.attributes.items()},
        children=[_qualified_copy(child, default_namespace) for child in node.children],
    )


def _child_path(parent_path: str, name: str) -> str:
    return f"{parent_path}/{name}" if parent_path else name


def filter_tree(root: Node, predicate: FilterPredicate) -> int:
    """Remove every node below ``root`` for which ``predicate`` returns False.

    Returns:
        Number of nodes removed (subtrees of removed nodes are not counted)
    """
    return _filter_children(root, predicate, [root], "")


def _filter_children(
    parent: Node, predicate: FilterPredicate, parents: List[Node], parent_path: str
) -> int:
    kept: List[Node] = []
    removed = 0
    for child in parent.children:
        path = _child_path(parent_path, child.name)
        if not predicate(child, path, list(parents)):
            removed += 1
            continue
        kept.append(child)
        removed += _filter_children(child, predicate, parents + [child], path)
    parent.children[:] = kept
    return removed


def modify_tree(root: Node, callback: ModifyCallback, context: MutationContext) -> int:
    """Visit the root and every descendant with ``callback``.

    The root is visited first with an empty path, index 0 and no parents; it
    cannot be dropped. Children are visited after their parent's callback
    returns, so children it inserted are visited as well.

    The index passed for a child is its position among its siblings before
    the parent's callback ran. Children inserted by that callback get their
    position in the list the callback left behind.

    Returns:
        Number of nodes dropped
    """
    original = list(root.children)
    outcome = callback(NodeEditor(root, context), "", 0, [])
    if outcome is ModifyAction.DROP:
        raise TraversalError("The root node cannot be dropped")
    return _modify_children(root, original, callback, context, [root], "")


def _modify_children(
    parent: Node,
    original: List[Node],
    callback: ModifyCallback,
    context: MutationContext,
    parents: List[Node],
    parent_path: str
) -> int:
    positions = {id(child): index for index, child in enumerate(original)}
    kept: List[Node] = []
    dropped = 0
    for position, child in enumerate(list(parent.children)):
        index = positions.get(id(child), position)
        path = _child_path(parent_path, child.name)
        grandchildren = list(child.children)
        outcome = callback(NodeEditor(child, context), path, index, list(parents))
        if outcome is ModifyAction.DROP:
            dropped += 1
            continue
        kept.append(child)
        # The callback may have renamed the node
        renamed_path = _child_path(parent_path, child.name)
        dropped += _modify_children(
            child, grandchildren, callback, context, parents + [child], renamed_path
        )
    parent.children[:] = kept
    return dropped
