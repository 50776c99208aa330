"""
Ports - Interfaces for external dependencies

These define HOW the core touches the filesystem,
but NOT the implementation details.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO

from .domain import SplitConfig


class SplitStorage(ABC):
    """Port for the files involved in a split"""

    @abstractmethod
    def preflight(self, config: SplitConfig) -> None:
        """Check source/destination before any byte is read"""
        pass

    @abstractmethod
    def open_source(self, path: Path) -> BinaryIO:
        """Open the source for binary reading"""
        pass

    @abstractmethod
    def create_split_file(self, path: Path, overwrite: bool) -> BinaryIO:
        """Create the destination, exclusively unless overwrite is set"""
        pass

    @abstractmethod
    def remove_split_file(self, path: Path) -> None:
        """Remove a partially written destination"""
        pass

    @abstractmethod
    def replace_with_tail(self, path: Path, source: BinaryIO, offset: int) -> int:
        """Atomically replace `path` with `source` from `offset` on, return bytes kept"""
        pass
