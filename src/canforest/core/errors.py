"""
Exceptions raised by canforest.
"""
from __future__ import annotations
from pathlib import Path


class ForestryError(Exception):
    """Base exception for all canforest errors."""
    pass


class TreeIndexError(ForestryError, IndexError):
    """Raised when a tree index falls outside the forest."""
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Tree number {index} does not exist.")


class ForestFileFormatError(ForestryError, ValueError):
    """Raised when a tabular forest file contains a line that cannot be parsed."""
    def __init__(self, path: str | Path, line_no: int, reason: str):
        self.path = str(path)
        self.line_no = line_no
        self.reason = reason
        super().__init__(f"{self.path}, line {line_no}: {reason}")


class SnapshotError(ForestryError):
    """Raised when a snapshot file cannot be decoded."""
    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(reason)
