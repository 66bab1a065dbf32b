# trie_node.py
# Single node of the character trie used by TrieMap.
# One node per character position; the path to a node is never stored,
# callers rebuild it by concatenating characters on the way down.

from __future__ import annotations
from typing import Any, Dict, Iterator, List, Optional, Tuple

ROOT_CHAR = " "


class TrieNode:
    """
    A single node in the trie.
    character: the char this node stands for (root uses ROOT_CHAR)
    value: payload, only meaningful when boundary is set
    boundary: True if some inserted key ends exactly here
    children: char -> TrieNode, handed out in ascending char order
    """

    __slots__ = ("character", "value", "boundary", "_children")

    def __init__(self, character: str = ROOT_CHAR, value: Any = None, boundary: bool = False) -> None:
        self.character = character
        self.boundary = boundary
        self.value = value if boundary else None
        self._children: Dict[str, TrieNode] = {}

    # lookup -------------------------------------------------------------
    def child_at(self, ch: str) -> Optional[TrieNode]:
        return self._children.get(ch)

    def children(self) -> List[TrieNode]:
        """Children sorted by character (empty list for a leaf)."""
        return [self._children[ch] for ch in sorted(self._children)]

    def has_children(self) -> bool:
        return bool(self._children)

    def has_stored_value(self) -> bool:
        return self.boundary and self.value is not None

    # mutation -------------------------------------------------------------
    def upsert_child(self, ch: str, value: Any = None, force: bool = False, make_boundary: bool = False) -> bool:
        """
        Create the child at `ch`, or overwrite an existing child's value.
        An existing child is only touched when a value is given and either
        `force` is set or the child is not a boundary yet. Returns False when
        nothing was written.
        """
        node = self._children.get(ch)
        if node is None:
            self._children[ch] = TrieNode(ch, value, make_boundary)
            return True
        if value is not None and (force or not node.boundary):
            node.value = value
            node.boundary = make_boundary
            return True
        return False

    def clear_value(self) -> Any:
        """Detach and return the value. Boundary is left alone."""
        old = self.value
        self.value = None
        return old

    def set_boundary(self, boundary: bool) -> None:
        self.boundary = boundary
        if not boundary:
            self.value = None

    # traversal ---------------------------------------------------------
    def walk(self, prefix: str = "") -> Iterator[Tuple[str, TrieNode]]:
        """
        Pre-order (path, node) over this subtree, siblings in ascending char
        order. Uses an explicit stack, so key length isn't bounded by the
        interpreter's recursion limit.
        """
        stack: List[Tuple[str, TrieNode]] = [(prefix, self)]
        while stack:
            path, node = stack.pop()
            yield path, node
            # reversed so the smallest char comes off the stack first
            for child in reversed(node.children()):
                stack.append((path + child.character, child))

    def iter_entries(self, prefix: str) -> Iterator[Tuple[str, Any]]:
        """(path, value) for every value-bearing node of the subtree."""
        for path, node in self.walk(prefix):
            if node.has_stored_value():
                yield path, node.value

    def copy(self) -> TrieNode:
        """Deep copy of this node and its subtree (values are shared, not copied)."""
        clone = TrieNode(self.character, self.value, self.boundary)
        pending = [(self, clone)]
        while pending:
            src, dst = pending.pop()
            for ch, child in src._children.items():
                twin = TrieNode(child.character, child.value, child.boundary)
                dst._children[ch] = twin
                pending.append((child, twin))
        return clone

    # structural equality --------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrieNode):
            return NotImplemented
        pending = [(self, other)]
        while pending:
            a, b = pending.pop()
            if a is b:
                continue
            if (
                a.character != b.character
                or a.boundary != b.boundary
                or a.value != b.value
                or a._children.keys() != b._children.keys()
            ):
                return False
            pending.extend((child, b._children[ch]) for ch, child in a._children.items())
        return True

    def __hash__(self) -> int:
        # values may be unhashable, equal nodes still hash alike
        return hash(tuple((node.character, node.boundary, len(node._children)) for _path, node in self.walk()))

    def __repr__(self) -> str:
        return f"TrieNode({self.character!r}, boundary={self.boundary}, value={self.value!r}, children={len(self._children)})"
