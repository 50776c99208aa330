"""
Formatters for split results

Render handler results as plain text.
Used by the CLI and both MCP servers for consistent presentation.
"""

from typing import Any

MARKS = {"split": ">", "match": "="}


def format_preview(preview: list[dict[str, Any]]) -> list[str]:
    """Preview lines with a gutter mark and right-aligned line numbers.

    Example output:
             1: first line
        >    2: split lands here
             3: between split and match
        =    4: matching line
             5: first line after the match
    """
    lines = []
    for entry in preview:
        mark = MARKS.get(entry["mark"], " ")
        lines.append(f"{mark} {entry['line_number']:>4}: {entry['text']}")
    return lines


def format_split_file(result: dict[str, Any]) -> str:
    """Format split_file result.

    Example output (dry run):
        * would split file app.log at line 3, offset 24
        * preview:
        >    3: line 3
             4: line 4
        =    5: line 5
             6: line 6
        * would write 24 bytes to file app.log.1
        * would rewrite file app.log to 60 bytes

    Example output (real run):
        * split file app.log at line 3, offset 24
        * wrote 24 bytes to file app.log.1
        * rewrote file app.log to 60 bytes
    """
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    path = result["path"]
    split_path = result["split_path"]
    lines = []

    if result["dry_run"]:
        lines.append(
            f"* would split file {path} at line {result['split_line']}, "
            f"offset {result['split_offset']}"
        )
        lines.append("* preview:")
        lines.extend(format_preview(result["preview"]))
        lines.append(f"* would write {result['written_bytes']} bytes to file {split_path}")
        lines.append(f"* would rewrite file {path} to {result['remaining_bytes']} bytes")
    else:
        lines.append(
            f"* split file {path} at line {result['split_line']}, "
            f"offset {result['split_offset']}"
        )
        lines.append(f"* wrote {result['written_bytes']} bytes to file {split_path}")
        lines.append(f"* rewrote file {path} to {result['remaining_bytes']} bytes")

    return "\n".join(lines)
