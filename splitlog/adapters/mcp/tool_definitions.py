"""
MCP Tool Definitions

Single source of truth for tool schemas and descriptions.
Used by both stdio and HTTP/SSE servers.
"""
from ...core.domain import MAX_LINES_BACK

# Tool schemas for MCP
TOOL_SCHEMAS = {
    "split_file": {
        "name": "split_file",
        "description": f"""Split a log/text file: move the head into a SPLIT file, keep the tail in FILE.

split_file("/var/log/app.log", pattern="^2025-06-01") → head up to that line goes to app.log.1
split_file("/var/log/app.log", line=1000, dry_run=true) → preview only, nothing written
split_file("app.log", pattern="BEGIN", lines_back=2) → cut 2 lines above the match (max {MAX_LINES_BACK})
""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "description": "File to split (rewritten atomically to keep only the tail)"
                },
                "split_path": {
                    "type": "string",
                    "description": "File receiving the head. Defaults to <path>.1"
                },
                "line": {
                    "type": "integer",
                    "description": "Split at this line number (>= 2). Use either line or pattern."
                },
                "pattern": {
                    "type": "string",
                    "description": "Split at the first line matching this regex. Use either line or pattern."
                },
                "lines_back": {
                    "type": "integer",
                    "description": f"Number of lines to go back from the match (max {MAX_LINES_BACK})",
                    "default": 0
                },
                "force": {
                    "type": "boolean",
                    "description": "Overwrite split_path if it exists",
                    "default": False
                },
                "dry_run": {
                    "type": "boolean",
                    "description": "Do not change files, show what would be changed",
                    "default": False
                }
            },
            "required": ["path"]
        }
    }
}
