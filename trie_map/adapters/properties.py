# properties.py - key/value properties bag backed by a TrieMap
#
# String keys live in the trie, anything else in a plain side dict owned by
# this adapter. Optional `defaults` (another TrieBackedProperties) is only
# consulted by get_property and by keys()/values().

from __future__ import annotations

from collections import abc
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple

from trie_map.core.trie_map import TrieMap
from trie_map.utils.rw_lock import RWLock

_COMMENT_MARKS = ("#", "!")


def parse_property_line(line: str) -> Optional[Tuple[str, str]]:
    """
    Split one `key=value` / `key: value` line. Returns None for blank and
    comment lines. A line without a separator is a key with empty value.
    """
    text = line.strip()
    if not text or text.startswith(_COMMENT_MARKS):
        return None
    cut = min((i for i in (text.find("="), text.find(":")) if i >= 0), default=-1)
    if cut < 0:
        return text, ""
    return text[:cut].strip(), text[cut + 1:].strip()


class TrieBackedProperties:
    """Properties facade: get/set_property plus the mapping basics."""

    def __init__(self, trie: Optional[TrieMap] = None, defaults: Optional[TrieBackedProperties] = None) -> None:
        self.trie = trie if trie is not None else TrieMap()
        self.defaults = defaults
        self._other: Dict[Hashable, Any] = {}
        self._lock = RWLock()

    # access -----------------------------------------------------------
    def get(self, key: Hashable) -> Any:
        with self._lock.read_lock():
            if isinstance(key, str):
                result = self.trie.get(key)
                if result is not None:
                    return result
            return self._other.get(key) if isinstance(key, abc.Hashable) else None

    def put(self, key: Hashable, value: Any) -> Any:
        """Store and return the previous value (None if there was none)."""
        with self._lock.write_lock():
            if isinstance(key, str):
                return self.trie.put(key, value)
            previous = self._other.get(key)
            self._other[key] = value
            return previous

    def put_all(self, pairs: Dict[Hashable, Any]) -> None:
        for key, value in pairs.items():
            self.put(key, value)

    def remove(self, key: Hashable) -> Any:
        with self._lock.write_lock():
            result = self.trie.remove(key) if isinstance(key, str) else None
            if result is None and isinstance(key, abc.Hashable):
                result = self._other.pop(key, None)
            return result

    def get_property(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """String value for `key`, falling back to `defaults`, then `default`."""
        value = self.get(key)
        if isinstance(value, str):
            return value
        if self.defaults is not None:
            value = self.defaults.get_property(key)
            if value is not None:
                return value
        return default

    def set_property(self, key: str, value: str) -> Any:
        return self.put(key, value)

    def load(self, lines: Iterable[str]) -> int:
        """Read `key=value` lines into this bag. Returns how many were stored."""
        count = 0
        for line in lines:
            parsed = parse_property_line(line)
            if parsed is None:
                continue
            key, value = parsed
            self.set_property(key, value)
            count += 1
        return count

    # queries ------------------------------------------------------------
    def contains_key(self, key: Hashable) -> bool:
        with self._lock.read_lock():
            if key in self.trie:
                return True
            return isinstance(key, abc.Hashable) and key in self._other

    def contains_value(self, value: Any) -> bool:
        if value is None:
            raise TypeError("properties can't hold None values")
        with self._lock.read_lock():
            return self.trie.contains_value(value) or value in self._other.values()

    def keys(self) -> List[Hashable]:
        """All keys, own and defaults, without duplicates (trie keys first)."""
        with self._lock.read_lock():
            keys: List[Hashable] = list(self.trie.keys())
            keys.extend(self._other)
        if self.defaults is not None:
            seen = set(keys)
            keys.extend(k for k in self.defaults.keys() if k not in seen)
        return keys

    def values(self) -> List[Any]:
        with self._lock.read_lock():
            values = self.trie.values() + list(self._other.values())
        if self.defaults is not None:
            values.extend(self.defaults.values())
        return values

    def entries(self) -> List[Tuple[Hashable, Any]]:
        """Own entries only (no defaults)."""
        with self._lock.read_lock():
            return list(self.trie.entries()) + list(self._other.items())

    def size(self) -> int:
        with self._lock.read_lock():
            return self.trie.size() + len(self._other)

    def is_empty(self) -> bool:
        with self._lock.read_lock():
            return self.trie.is_empty() and not self._other

    # lifecycle ------------------------------------------------------------
    def clear(self) -> None:
        with self._lock.write_lock():
            self.trie.clear()
            self._other.clear()

    def copy(self) -> TrieBackedProperties:
        with self._lock.read_lock():
            clone = TrieBackedProperties(self.trie.copy(), self.defaults)
            clone._other.update(self._other)
        return clone

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TrieBackedProperties):
            return NotImplemented
        return self.trie == other.trie and self._other == other._other

    __hash__ = None

    def __str__(self) -> str:
        return f"{self.trie},{self._other}"
