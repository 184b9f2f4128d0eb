"""Parsed XML trees.

Key Components:
    Node: plain element record (name, value, attributes, children)
    ParsedDocument: versioned container of a tree and its namespace table
    XmlTreeBuilder: builds a ParsedDocument from lxml pull-parser events
    filter_tree / modify_tree: in-place pre-order mutation
    NodeEditor: mutable node view passed to modify callbacks
"""

from .node import (
    FORMAT_VERSION,
    Node,
    ParsedDocument,
    allocate_prefix,
    merge_namespaces,
)
from .builder import XmlTreeBuilder
from .mutation import (
    ModifyAction,
    MutationContext,
    NodeEditor,
    filter_tree,
    modify_tree,
)

__all__ = [
    "FORMAT_VERSION",
    "Node",
    "ParsedDocument",
    "allocate_prefix",
    "merge_namespaces",
    "XmlTreeBuilder",
    "ModifyAction",
    "MutationContext",
    "NodeEditor",
    "filter_tree",
    "modify_tree",
]
