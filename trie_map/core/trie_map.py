# trie_map.py
# Character trie mapping string keys to values, with prefix queries a dict
# can't answer: completions, sub-maps, longest present prefix and the value
# of the longest value-bearing prefix ("best matching key").
#
# Locking: one RWLock per tree, shared by every node. Each public method
# holds it for the whole operation, so a multi-char add/remove/walk is
# atomic with respect to other writers. Private helpers assume the lock is
# already held and never take it again (RWLock isn't reentrant). Callers that
# never share a map across threads can pass `lock_factory=NullLock`.

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple, Union

from trie_map.core.trie_node import TrieNode
from trie_map.utils.rw_lock import NullLock, RWLock

logger = logging.getLogger(__name__)

Entry = Tuple[str, Any]
PairSource = Union["TrieMap", Mapping, Iterable[Entry], None]
LockFactory = Callable[[], Union[RWLock, NullLock]]


class TrieMap:
    """
    Ordered prefix tree from str keys to values.

    >>> tm = TrieMap()
    >>> tm.add("132", "Artikel 4")
    True
    >>> tm.add("132276", "Artikel 1")
    True
    >>> tm.get_completions("132")
    ['132', '132276']
    >>> tm.get_value_for_best_matching_key("1322")
    'Artikel 4'

    Three lookup outcomes are kept apart:
     - no such path:            contains_prefix(k) is False
     - path, but not a key:     contains_prefix(k) is True, k not in keys()
     - key without a value:     k in keys(), get(k) is None
    """

    __hash__ = None  # mutable, equality is structural

    def __init__(self, initial: PairSource = None, lock_factory: LockFactory = RWLock) -> None:
        self._lock_factory = lock_factory
        self._lock = lock_factory()
        self._root = TrieNode()
        if initial is not None:
            self.put_all(initial)

    # insertion -----------------------------------------------------
    def add(self, key: str, value: Any = None) -> bool:
        """
        Add `key` (optionally with `value`). Refuses to overwrite a key that
        already exists and returns False in that case. Empty key: no-op, True.
        """
        with self._lock.write_lock():
            ok = self._add(key, value, force=False)
        if not ok:
            logger.debug("add refused for existing key %r", key)
        return ok

    def force_add(self, key: str, value: Any) -> bool:
        """Add `key` with `value`, overwriting whatever was stored there."""
        with self._lock.write_lock():
            return self._add(key, value, force=True)

    def put(self, key: str, value: Any) -> Any:
        """dict-style put: force-add and return the value stored before."""
        with self._lock.write_lock():
            previous = self._value_at(key)
            self._add(key, value, force=True)
        return previous

    def put_all(self, pairs: PairSource) -> None:
        """Force-add every (key, value) from a mapping or iterable of pairs."""
        if pairs is None:
            return
        # materialized first: the source may read this very map
        if isinstance(pairs, TrieMap):
            items = pairs.entries()
        elif isinstance(pairs, Mapping):
            items = list(pairs.items())
        else:
            items = list(pairs)
        with self._lock.write_lock():
            for key, value in items:
                self._add(key, value, force=True)

    # lookup ---------------------------------------------------------
    def get(self, key: str) -> Any:
        """
        Value at the node reached by `key`, or None when there is no such
        path. Does not check that `key` is a complete key.
        """
        with self._lock.read_lock():
            return self._value_at(key)

    def contains_prefix(self, prefix: str) -> bool:
        """True if a node exists for `prefix`. The empty prefix is the root."""
        with self._lock.read_lock():
            return self._match(prefix) is not None

    def contains_value(self, value: Any) -> bool:
        return self.get_path_for_value(value) is not None

    def get_path_for_value(self, value: Any) -> Optional[str]:
        """First key (in key order) whose stored value equals `value`."""
        with self._lock.read_lock():
            for path, stored in self._root.iter_entries(""):
                if stored == value:
                    return path
        return None

    # removal ---------------------------------------------------------
    def remove(self, key: str) -> Any:
        """
        Detach the value at `key` and clear its boundary. Returns the old
        value, or None when the path doesn't exist. Nodes are never pruned.
        """
        with self._lock.write_lock():
            node = self._match(key) if isinstance(key, str) else None
            if node is None:
                return None
            old = node.clear_value()
            node.set_boundary(False)
            return old

    def clear(self) -> None:
        with self._lock.write_lock():
            self._root = TrieNode()
        logger.debug("trie map cleared")

    # prefix queries ------------------------------------------------------
    def get_completions(self, prefix: Optional[str]) -> List[str]:
        """All keys at or below `prefix`, in ascending order."""
        prefix = prefix or ""
        out: List[str] = []
        with self._lock.read_lock():
            node = self._match(prefix)
            if node is not None:
                self._collect_keys(node, prefix, out)
        return out

    def get_sub_values(self, prefix: Optional[str]) -> List[Any]:
        """Stored values at or below `prefix` in key order. None/"" = whole tree."""
        prefix = prefix or ""
        out: List[Any] = []
        with self._lock.read_lock():
            node = self._match(prefix)
            if node is not None:
                out.extend(value for _path, value in node.iter_entries(prefix))
        return out

    def get_sub_map(self, prefix: Optional[str]) -> TrieMap:
        """
        Independent TrieMap holding every (key, value) below `prefix`.
        Keys keep their full form, the prefix isn't stripped.
        """
        prefix = prefix or ""
        sub = TrieMap(lock_factory=self._lock_factory)
        with self._lock.read_lock():
            node = self._match(prefix)
            pairs = list(node.iter_entries(prefix)) if node is not None else []
        for path, value in pairs:
            sub.put(path, value)
        logger.debug("sub map for %r: %d entries", prefix, len(pairs))
        return sub

    def get_best_matching_path(self, prefix: Optional[str]) -> Optional[str]:
        """
        Longest leading part of `prefix` that exists as a path in the tree.
        None for an empty prefix or when not even the first char matches.
        The result need not be a complete key.
        """
        if not prefix:
            return None
        with self._lock.read_lock():
            consumed = sum(1 for _node in self._walk(prefix))
        return prefix[:consumed] if consumed else None

    def get_value_for_best_matching_key(self, prefix: Optional[str]) -> Any:
        """Value of the longest value-bearing key that `prefix` starts with."""
        if not prefix:
            return None
        best = None
        with self._lock.read_lock():
            for node in self._walk(prefix):
                if node.has_stored_value():
                    best = node.value
        return best

    def get_values_on_path(self, prefix: Optional[str]) -> List[Any]:
        """Stored values of every key passed while walking `prefix`, root first."""
        if not prefix:
            return []
        with self._lock.read_lock():
            return [node.value for node in self._walk(prefix) if node.has_stored_value()]

    # enumeration ----------------------------------------------------------
    def keys(self) -> List[str]:
        return self.get_completions("")

    def values(self) -> List[Any]:
        return self.get_sub_values("")

    def entries(self) -> List[Entry]:
        """(key, value) for every key, in key order. Value may be None."""
        with self._lock.read_lock():
            keys: List[str] = []
            self._collect_keys(self._root, "", keys)
            return [(k, self._value_at(k)) for k in keys]

    def size(self) -> int:
        return len(self.keys())

    def is_empty(self) -> bool:
        with self._lock.read_lock():
            return not self._root.has_children()

    def copy(self) -> TrieMap:
        """Deep copy with its own lock (same kind of lock)."""
        clone = TrieMap(lock_factory=self._lock_factory)
        with self._lock.read_lock():
            clone._root = self._root.copy()
        return clone

    # python protocol ---------------------------------------------------------
    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains_prefix(key)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TrieMap):
            return NotImplemented
        # one lock at a time, holding both can deadlock with `other == self`
        with self._lock.read_lock():
            mine = self._root.copy()
        with other._lock.read_lock():
            return mine == other._root

    def __str__(self) -> str:
        with self._lock.read_lock():
            body = "".join(f"{path} : {value};\n" for path, value in self._root.iter_entries(""))
        return "{" + body + "}"

    def __repr__(self) -> str:
        return f"TrieMap({dict(self.entries())!r})"

    # internals (lock held by caller) --------------------------------------------
    def _add(self, key: str, value: Any, force: bool) -> bool:
        if not key:
            return True
        node = self._root
        for ch in key[:-1]:
            node.upsert_child(ch)
            node = node.child_at(ch)
        return node.upsert_child(key[-1], value, force, True)

    def _match(self, prefix: Optional[str]) -> Optional[TrieNode]:
        """Node for the exact char sequence `prefix`, root for ""."""
        node = self._root
        for ch in prefix or "":
            node = node.child_at(ch)
            if node is None:
                return None
        return node

    def _value_at(self, key: object) -> Any:
        if not isinstance(key, str):
            return None
        node = self._match(key)
        return node.value if node is not None else None

    def _walk(self, prefix: str) -> Iterator[TrieNode]:
        """Yield each node reached along `prefix`, stopping at the first miss."""
        node = self._root
        for ch in prefix:
            node = node.child_at(ch)
            if node is None:
                return
            yield node

    def _collect_keys(self, node: TrieNode, prefix: str, out: List[str]) -> None:
        """Boundary paths under `node`, ascending by char."""
        out.extend(path for path, n in node.walk(prefix) if n.boundary)
