"""Projection store readers consumed by the graph engine."""
from .memory import MemoryAncestryReader
from .sqlite import SQLiteAncestryReader
from .store import AncestryReader

__all__ = [
    "AncestryReader",
    "MemoryAncestryReader",
    "SQLiteAncestryReader",
]
