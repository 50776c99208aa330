#!/usr/bin/env python3
"""
splitlog over SSE

Serves the `split_file` tool registered in `splitlog.server` through
FastMCP's SSE app, next to a /ping health check, under uvicorn.

Run with: splitlog-http

Configuration:
- PORT: Server port (default: 5003)
- SPLITLOG_HTTP_HOST: Interface to bind (default: 127.0.0.1)
- SPLITLOG_ROOT: Only files under this directory may be split (default: unrestricted)
"""

import logging

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Mount, Route

from . import __version__
from .server import get_allowed_root, get_host, get_port, mcp

logger = logging.getLogger(__name__)

DEFAULT_PORT = 5003

LOG_FORMAT = "[%(asctime)s.%(msecs)03d] [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y/%m/%d %H:%M:%S"


async def handle_ping(request: Request) -> Response:
    """Health check, also shows which directory the tool is limited to"""
    return JSONResponse({
        "status": "ok",
        "version": __version__,
        "root": get_allowed_root()
    })


def create_app() -> Starlette:
    """/ping plus the SSE endpoints (/sse, /messages/) of the FastMCP server"""
    return Starlette(routes=[
        Route("/ping", handle_ping),
        Mount("/", app=mcp.sse_app()),
    ])


def main():
    """Run the SSE server under uvicorn"""
    import uvicorn

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    host = get_host()
    port = get_port("PORT", DEFAULT_PORT)
    logger.info(f"splitlog SSE server on http://{host}:{port}/sse, root={get_allowed_root() or 'any'}")
    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
