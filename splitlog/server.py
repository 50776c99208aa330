"""
splitlog MCP Server

MCP delivery layer - exposes the split as an MCP tool over stdio or
streamable HTTP. Separation of concerns: this file only handles MCP protocol.
"""
import argparse
import os
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .container import Container
from .adapters.mcp import MCPHandlers


def get_allowed_root() -> Optional[str]:
    """Directory the tool may touch (env SPLITLOG_ROOT), None for anywhere"""
    return os.getenv("SPLITLOG_ROOT") or None


def get_host() -> str:
    """Interface the HTTP transports bind to (env SPLITLOG_HTTP_HOST)"""
    return os.getenv("SPLITLOG_HTTP_HOST", "127.0.0.1")


def get_port(var: str = "SPLITLOG_HTTP_PORT", default: int = 6661) -> int:
    """Port from the environment variable `var`, `default` when unset"""
    value = os.getenv(var)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Invalid {var} value: {value}") from None


HTTP_HOST = get_host()
HTTP_PORT = get_port()

handlers = MCPHandlers(Container(allowed_root=get_allowed_root()))

# Initialize MCP server with HTTP config
mcp = FastMCP("splitlog", host=HTTP_HOST, port=HTTP_PORT)


@mcp.tool()
async def split_file(
    path: str,
    split_path: Optional[str] = None,
    line: Optional[int] = None,
    pattern: Optional[str] = None,
    lines_back: int = 0,
    force: bool = False,
    dry_run: bool = False
) -> dict:
    """
    Split a text file: earlier lines go to SPLIT, FILE keeps the rest.

    The cut is at `line`, or at the first line matching `pattern`, moved
    up by `lines_back` lines. FILE is rewritten atomically (temp file +
    rename), so it is never left half-written.

    Args:
        path: File to split
        split_path: File receiving the head (default: <path>.1)
        line: Split at this line number (>= 2). Use either line or pattern.
        pattern: Split at the first line matching this regex
        lines_back: Lines to go back from the match (max 6)
        force: Overwrite split_path if it exists
        dry_run: Only report what would happen

    Returns:
        Dictionary with split line, byte offset and byte counts
        (plus a preview around the cut for dry runs)

    Example:
        split_file("/var/log/app.log", pattern="^2025-06-01", dry_run=True)
        → {split_line: 48211, split_offset: 9120044, preview: [...], ...}
    """
    return await handlers.split_file(
        path=path,
        split_path=split_path,
        line=line,
        pattern=pattern,
        lines_back=lines_back,
        force=force,
        dry_run=dry_run
    )


def main():
    """Main entry point for the MCP server."""
    parser = argparse.ArgumentParser(
        description="splitlog: split text files at a line or pattern. MCP server."
    )
    parser.add_argument(
        "--transport",
        default="stdio",
        choices=["stdio", "streamable-http"],
        help="Transport method (default: stdio)"
    )
    args = parser.parse_args()

    # Run the server
    if args.transport == "streamable-http":
        print(f"Starting splitlog on http://{HTTP_HOST}:{HTTP_PORT}")
        mcp.run(transport="streamable-http")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
