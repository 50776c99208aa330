"""
Dependency Injection Container

Wires together the hexagonal architecture by creating and injecting dependencies.
"""
from pathlib import Path
from typing import Optional

from .adapters import FilesystemStorage
from .core import SplitFileService, DryRunService


class Container:
    """Dependency injection container for the application"""

    def __init__(self, allowed_root: Optional[str | Path] = None):
        # Adapters (infrastructure)
        self.storage = FilesystemStorage()

        # Services (use cases)
        self.split_file = SplitFileService(storage=self.storage)
        self.dry_run = DryRunService(storage=self.storage)

        # MCP handlers only touch files under this directory (None = anywhere)
        self.allowed_root = Path(allowed_root).resolve() if allowed_root else None
