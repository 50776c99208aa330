"""
Adapters - External implementations of ports

This package contains implementations of the core ports:
- filesystem.py: Local filesystem storage with atomic tail rewrite
- mcp/: MCP tool schemas and handlers
"""
from .filesystem import FilesystemStorage

__all__ = [
    "FilesystemStorage",
]
