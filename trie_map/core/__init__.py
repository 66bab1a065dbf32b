"""
trie_map.core

The prefix tree itself:
 - TrieNode: one node per character, boundary flag and optional value
 - TrieMap: the tree plus insertion, matching, enumeration and removal
"""

from .trie_node import TrieNode
from .trie_map import TrieMap

__all__ = ["TrieNode", "TrieMap"]
