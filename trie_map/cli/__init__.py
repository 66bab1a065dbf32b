from .cli import TrieShell, main

__all__ = ["TrieShell", "main"]
