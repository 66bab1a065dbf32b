"""
trie_map.adapters

Wrappers that expose a TrieMap through other interfaces:
 - TrieMapping: collections.abc.MutableMapping view
 - TrieBackedProperties: properties bag with defaults and non-str keys
"""

from .mapping import TrieMapping
from .properties import TrieBackedProperties, parse_property_line

__all__ = ["TrieMapping", "TrieBackedProperties", "parse_property_line"]
