"""
trie_map

In-memory character trie mapping str keys to values, with prefix queries:
completions, sub-maps, longest present prefix and best matching key.
"""

from trie_map.core import TrieMap, TrieNode
from trie_map.adapters import TrieBackedProperties, TrieMapping

__all__ = ["TrieMap", "TrieNode", "TrieMapping", "TrieBackedProperties"]

__version__ = "0.1.0"
