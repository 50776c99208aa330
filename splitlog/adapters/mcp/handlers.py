"""
MCP Tool Handlers

Shared handlers for MCP tools (and the CLI) that use the hexagonal core.
"""
import asyncio
import logging
from typing import Any, Optional

from ...container import Container
from ...core.domain import SplitConfig, SplitResult, build_config
from ...core.errors import ConfigurationError, SplitlogError

logger = logging.getLogger(__name__)


class MCPHandlers:
    """Handlers for MCP tools using dependency injection"""

    def __init__(self, container: Container):
        self.container = container

    async def split_file(
        self,
        path: str,
        split_path: Optional[str] = None,
        line: Optional[int] = None,
        pattern: Optional[str] = None,
        lines_back: int = 0,
        force: bool = False,
        dry_run: bool = False
    ) -> dict[str, Any]:
        """Build a config from tool arguments and run the split"""
        try:
            config = build_config(
                source=path,
                destination=split_path,
                line=line,
                pattern=pattern,
                lines_back=lines_back,
                overwrite=force,
                dry_run=dry_run
            )
        except SplitlogError as e:
            return _error(e)

        return await self.run(config)

    async def run(self, config: SplitConfig) -> dict[str, Any]:
        """Pre-flight checks, then the real or dry-run split"""
        try:
            self._check_root(config)
            await asyncio.to_thread(self.container.storage.preflight, config)

            service = self.container.dry_run if config.dry_run else self.container.split_file
            result = await asyncio.to_thread(service.execute, config)

        except SplitlogError as e:
            logger.info(f"split of {config.source} failed: {e}")
            return _error(e)

        return _serialize(result)

    def _check_root(self, config: SplitConfig) -> None:
        """Refuse paths outside the configured root, if any"""
        root = self.container.allowed_root
        if root is None:
            return
        for path in (config.source, config.destination):
            if not path.resolve().is_relative_to(root):
                raise ConfigurationError(f"{path} is outside {root}")


def _error(e: SplitlogError) -> dict[str, Any]:
    return {
        "success": False,
        "error": str(e),
        "error_type": type(e).__name__
    }


def _serialize(result: SplitResult) -> dict[str, Any]:
    point = result.split_point
    return {
        "success": True,
        "dry_run": result.dry_run,
        "path": str(result.source),
        "split_path": str(result.destination),
        "match_line": point.anchor_line,
        "lines_back": point.lines_back,
        "split_line": point.split_line,
        "split_offset": point.offset,
        "written_bytes": result.written_bytes,
        "remaining_bytes": result.remaining_bytes,
        "preview": [
            {"line_number": p.line_number, "text": p.text, "mark": p.mark}
            for p in result.preview
        ]
    }
