# mapping.py - dict-like (MutableMapping) view over a TrieMap

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Iterator, List, Optional

from trie_map.core.trie_map import TrieMap


class TrieMapping(MutableMapping):
    """
    MutableMapping adapter so a TrieMap can go wherever a dict is expected.
    Membership follows the trie's structural lookup: a key "exists" when its
    path exists, even if no key ends there. Only str keys are storable.
    """

    def __init__(self, trie: Optional[TrieMap] = None, **kwargs: Any) -> None:
        self.trie = trie if trie is not None else TrieMap()
        if kwargs:
            self.trie.put_all(kwargs)

    def __getitem__(self, key: Any) -> Any:
        if not isinstance(key, str) or not self.trie.contains_prefix(key):
            raise KeyError(key)
        return self.trie.get(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        if not isinstance(key, str):
            raise TypeError(f"TrieMapping keys must be str, not {type(key).__name__}")
        self.trie.put(key, value)

    def __delitem__(self, key: Any) -> None:
        if not isinstance(key, str) or not self.trie.contains_prefix(key):
            raise KeyError(key)
        self.trie.remove(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.trie.keys())

    def __len__(self) -> int:
        return self.trie.size()

    def __contains__(self, key: object) -> bool:
        return key in self.trie

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TrieMapping):
            return self.trie == other.trie
        return super().__eq__(other)

    __hash__ = None

    def clear(self) -> None:
        # faster than MutableMapping's popitem loop
        self.trie.clear()

    # prefix helpers ------------------------------------------------------
    def completions(self, prefix: str) -> List[str]:
        return self.trie.get_completions(prefix)

    def sub_mapping(self, prefix: str) -> TrieMapping:
        return TrieMapping(self.trie.get_sub_map(prefix))

    def __repr__(self) -> str:
        return f"TrieMapping({dict(self.trie.entries())!r})"
