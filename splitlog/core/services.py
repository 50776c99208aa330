"""
Application Services - Use cases that orchestrate the split

These are the entry points to the core. They drive the line scanner
and the storage port, but contain no filesystem details themselves.
"""
import logging
from pathlib import Path
from typing import BinaryIO

from .domain import (
    MAX_LINES_BACK,
    PREVIEW_LINES_BACK,
    PREVIEW_LINES_FWD,
    PreviewLine,
    SplitConfig,
    SplitPoint,
    SplitResult,
)
from .errors import SplitResolutionError, io_step
from .ports import SplitStorage
from .scanner import LineScanner, PreviewScanner, resolve_split

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class SplitFileService:
    """Use case: move the head of a file into a split file, keep the tail"""

    def __init__(self, storage: SplitStorage):
        self.storage = storage

    def execute(self, config: SplitConfig) -> SplitResult:
        """
        Split `config.source` at the resolved line.

        The head goes to `config.destination`; the tail atomically
        replaces the source. On any failure the source is left as it
        was and the partial split file is removed.
        """
        logger.info(
            f"split {config.source} at {config.matcher.describe()}, "
            f"{config.lines_back} lines back -> {config.destination}"
        )

        with io_step("open input file"):
            source = self.storage.open_source(config.source)

        with source:
            split_file = self.storage.create_split_file(config.destination, config.overwrite)
            try:
                point = self._write_head(source, split_file, config)
                with io_step("close split file"):
                    split_file.close()
            except BaseException as e:
                _close_after_error(split_file)
                outcome = self._discard_split_file(config.destination)
                if isinstance(e, SplitResolutionError):
                    e.cleanup = outcome
                else:
                    logger.info(f"split of {config.source} failed, {outcome}")
                raise

            logger.debug(f"split file {config.destination} holds {point.offset} bytes")

            try:
                remaining = self.storage.replace_with_tail(config.source, source, point.offset)
            except BaseException:
                outcome = self._discard_split_file(config.destination)
                logger.info(f"rewrite of {config.source} failed, {outcome}")
                raise

        logger.info(
            f"split {config.source} at line {point.split_line}: "
            f"{point.offset} bytes to {config.destination}, {remaining} bytes kept"
        )

        return SplitResult(
            source=config.source,
            destination=config.destination,
            split_point=point,
            written_bytes=point.offset,
            remaining_bytes=remaining
        )

    def _write_head(self, source: BinaryIO, split_file: BinaryIO, config: SplitConfig) -> SplitPoint:
        """Stream lines into the split file until the match, then cut back"""
        def write(raw: bytes) -> None:
            with io_step("write split"):
                split_file.write(raw)

        scanner = LineScanner(source)
        point = resolve_split(scanner, config.matcher, config.lines_back, on_line=write)

        # Lines between the split line and the match were already written
        if config.lines_back > 0:
            with io_step("truncate split file"):
                split_file.truncate(point.offset)

        return point

    def _discard_split_file(self, path: Path) -> str:
        """Remove the split file, describe the outcome"""
        try:
            self.storage.remove_split_file(path)
        except OSError as e:
            return str(e)
        return f"removed file {path}"


class DryRunService:
    """Use case: resolve a split and report it without touching any file"""

    def __init__(self, storage: SplitStorage):
        self.storage = storage

    def execute(self, config: SplitConfig) -> SplitResult:
        with io_step("open input file"):
            source = self.storage.open_source(config.source)

        with source:
            scanner = PreviewScanner(source)
            head_bytes = 0

            def count(raw: bytes) -> None:
                nonlocal head_bytes
                head_bytes += len(raw)

            point = resolve_split(scanner, config.matcher, config.lines_back, on_line=count)
            if config.lines_back > 0:
                head_bytes = point.offset

            preview = self._preview(scanner, point)

            with io_step("seek input file"):
                source.seek(point.offset)
            with io_step("copy split to simulated temp"):
                remaining = sum(len(chunk) for chunk in iter(lambda: source.read(CHUNK_SIZE), b""))

        logger.debug(f"dry run on {config.source}: split line {point.split_line}, offset {point.offset}")

        return SplitResult(
            source=config.source,
            destination=config.destination,
            split_point=point,
            written_bytes=head_bytes,
            remaining_bytes=remaining,
            dry_run=True,
            preview=preview
        )

    def _preview(self, scanner: PreviewScanner, point: SplitPoint) -> list[PreviewLine]:
        """
        Lines around the cut.

        Up to PREVIEW_LINES_BACK lines before the split line (bounded by
        the ring and by the start of the file), the split line, any lines
        up to the match, the match, then PREVIEW_LINES_FWD lines read
        past the match.
        """
        first = min(point.lines_back + PREVIEW_LINES_BACK, MAX_LINES_BACK, point.anchor_line - 1)

        lines = []
        for i in range(first, -1, -1):
            if i == point.lines_back:
                mark = "split"
            elif i == 0:
                mark = "match"
            else:
                mark = ""
            lines.append(PreviewLine(point.anchor_line - i, scanner.previews[i], mark))

        # The scanner is discarded afterwards, so reading on is harmless.
        # Lines past the match are never scanned by a real split.
        scanner.reject_binary = False
        for _ in range(PREVIEW_LINES_FWD):
            with io_step("read input file past the match"):
                n = scanner.read_line()
            if n == 0:
                break
            lines.append(PreviewLine(scanner.line_number, scanner.previews[0]))

        return lines


def _close_after_error(stream: BinaryIO) -> None:
    """Close on an error path; the original error takes precedence"""
    try:
        stream.close()
    except OSError as e:
        logger.debug(f"close after error failed: {e}")
