"""Simplified path queries over a Node tree.

A path is a sequence of element names, each step selecting matching children
of the nodes selected by the previous step. It is not XPath: there are no
predicates, attribute tests or axes other than child.

Paths may be given as a sequence of segments (where each segment may use the
bracketed or the spaced notation) or as a single ``/``-delimited string (where
only the bracketed notation is possible). Both are normalized to a QueryPath
before evaluation.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from plainxml.shared.errors import PathSyntaxError
from plainxml.tree.node import Node

from . import notation

PathSpec = Union[str, Sequence[str], "QueryPath"]


@dataclass(frozen=True)
class QueryPath:
    """Normalized segment sequence of a path query."""

    segments: Tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def head(self) -> str:
        return self.segments[0]

    @property
    def tail(self) -> "QueryPath":
        return QueryPath(self.segments[1:])

    @classmethod
    def from_sequence(cls, segments: Iterable[str]) -> "QueryPath":
        return cls(tuple(segments))

    @classmethod
    def from_string(cls, path: str) -> "QueryPath":
        """Split a path string on ``/`` outside of ``{...}`` spans.

        Raises:
            PathSyntaxError: on a repeated ``{`` or an unmatched ``}``
        """
        if not path:
            return cls()

        segments: List[str] = []
        collected = ""
        in_namespace = False
        for char in path:
            if char == "{":
                if in_namespace:
                    raise PathSyntaxError("Unexpected repeated {", path)
                in_namespace = True
            elif char == "}":
                if not in_namespace:
                    raise PathSyntaxError("Unexpected }", path)
                in_namespace = False
            elif char == "/" and not in_namespace:
                segments.append(collected)
                collected = ""
                continue
            collected += char
        if collected:
            segments.append(collected)
        return cls(tuple(segments))

    @classmethod
    def coerce(cls, path: Optional[PathSpec]) -> "QueryPath":
        if path is None:
            return cls()
        if isinstance(path, QueryPath):
            return path
        if isinstance(path, str):
            return cls.from_string(path)
        return cls.from_sequence(path)


class PathQueryEngine:
    """Resolve QueryPaths against lists of sibling nodes.

    Unqualified segments are qualified with the default namespace. When no
    child at a level matches the qualified name, the same local name in no
    namespace is tried instead; the fallback is decided for the whole level,
    not per branch.
    """

    def __init__(self, default_namespace: Optional[str] = None) -> None:
        self.default_namespace = default_namespace

    def all(self, nodes: List[Node], path: Optional[PathSpec]) -> List[Node]:
        """Return all nodes matching the path below the given siblings.

        An empty path selects the siblings themselves.
        """
        return self._resolve(nodes, QueryPath.coerce(path))

    def _resolve(self, nodes: List[Node], path: QueryPath) -> List[Node]:
        if not path:
            return list(nodes)

        segment = notation.ensure_valid(path.head, self.default_namespace)
        remaining = path.tail
        for candidate in (segment, notation.to_clark("", notation.local_name(segment))):
            matched, result = self._match_level(nodes, candidate, remaining)
            if matched:
                return result
        return []

    def _match_level(
        self, nodes: List[Node], name: str, remaining: QueryPath
    ) -> Tuple[bool, List[Node]]:
        """Match one level, reporting whether any node took part in the result."""
        matched = False
        result: List[Node] = []
        for node in nodes:
            if node.name != name:
                continue
            if not remaining:
                matched = True
                result.append(node)
            elif node.children:
                matched = True
                result.extend(self._resolve(node.children, remaining))
        return matched, result
