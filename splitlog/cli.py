#!/usr/bin/env python3
"""
CLI for splitlog - split FILE at a line, moving the head into SPLIT

Usage:
  splitlog -i 1000 app.log                 # lines 1-999 go to app.log.1, app.log keeps 1000+
  splitlog -p '^2025-06-01' app.log old.log # split at first line matching the regex
  splitlog -p BEGIN -b 2 app.log           # cut 2 lines above the match
  splitlog -n -p BEGIN app.log             # dry run: preview, byte counts, no changes
  splitlog -f -i 10 app.log old.log        # overwrite old.log if it exists

Exit status: 0 on success, 1 on runtime failure, 2 on usage errors.
"""

import argparse
import asyncio
import logging
import sys

from .container import Container
from .adapters.mcp import MCPHandlers
from .core.domain import MAX_LINES_BACK, SplitConfig, build_config
from .core.errors import SplitlogError
from .formatters import format_split_file

PROG = "splitlog"


async def split_command(config: SplitConfig) -> int:
    """Split (or simulate splitting) one file"""
    container = Container()
    handlers = MCPHandlers(container)

    result = await handlers.run(config)

    if not result["success"]:
        print(f"{PROG}: {result['error']}", file=sys.stderr)
        return 1

    if config.dry_run:
        print(format_split_file(result))

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage="%(prog)s [FLAGS] FILE [SPLIT]",
        description=(
            "Split FILE at given position, writing earlier lines to SPLIT file "
            "and removing them from FILE. If SPLIT is omitted, FILE.1 will be used."
        ),
        epilog=(
            "One (and only one) of -i, -p flags must be used. "
            "Note that original FILE can be rewritten even without -f flag."
        )
    )

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("-i", "--line", type=int, metavar="N", help="split at N-th line")
    target.add_argument("-p", "--pattern", metavar="RE", help="split at given regexp pattern")

    parser.add_argument(
        "-b", "--back-from-match",
        dest="lines_back",
        type=int,
        default=0,
        metavar="N",
        help=f"number of lines to go back from the match, max={MAX_LINES_BACK}"
    )
    parser.add_argument("-f", "--force", action="store_true", help="force overwriting SPLIT file if exists")
    parser.add_argument(
        "-n", "--dry-run",
        action="store_true",
        help="do not change files, show what would be changed"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")

    parser.add_argument("file", metavar="FILE", help="file to split")
    parser.add_argument("split", metavar="SPLIT", nargs="?", help="file receiving the earlier lines")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Without -v the "splitlog: ..." error line is all that reaches stderr
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format=f"{PROG}: [%(levelname)s] %(message)s",
            stream=sys.stderr
        )

    try:
        config = build_config(
            source=args.file,
            destination=args.split,
            line=args.line,
            pattern=args.pattern,
            lines_back=args.lines_back,
            overwrite=args.force,
            dry_run=args.dry_run
        )
    except SplitlogError as e:
        parser.error(str(e))

    return asyncio.run(split_command(config))


if __name__ == "__main__":
    sys.exit(main())
