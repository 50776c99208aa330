"""
Filesystem Storage Adapter

Implements SplitStorage port using the local filesystem.
"""
import logging
import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import BinaryIO

from ..core.domain import SplitConfig
from ..core.errors import (
    ConflictError,
    IsDirectoryError,
    NotFoundError,
    SplitIOError,
    io_step,
)
from ..core.ports import SplitStorage

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class FilesystemStorage(SplitStorage):
    """Local files, tail rewrite via temp file + rename"""

    def preflight(self, config: SplitConfig) -> None:
        """Reject missing/directory sources and destinations we must not touch"""
        try:
            src_stat = config.source.stat()
        except OSError:
            raise NotFoundError(f"file {config.source} not found") from None

        if stat.S_ISDIR(src_stat.st_mode):
            raise IsDirectoryError(f"{config.source} is a dir")

        try:
            dst_stat = config.destination.stat()
        except FileNotFoundError:
            return
        except OSError as e:
            raise SplitIOError(f"stat split file: {e}") from e

        if os.path.samestat(src_stat, dst_stat):
            raise ConflictError(f"{config.source} and {config.destination} are the same file")
        if not config.overwrite and not config.dry_run:
            raise ConflictError(f"{config.destination} already exists")

    def open_source(self, path: Path) -> BinaryIO:
        return open(path, "rb")

    def create_split_file(self, path: Path, overwrite: bool) -> BinaryIO:
        """Create the split file; exclusive unless overwrite is set"""
        try:
            return open(path, "wb" if overwrite else "xb")
        except FileExistsError:
            raise ConflictError(f"{path} already exists") from None
        except OSError as e:
            raise SplitIOError(f"create split file: {e}") from e

    def remove_split_file(self, path: Path) -> None:
        path.unlink()

    def replace_with_tail(self, path: Path, source: BinaryIO, offset: int) -> int:
        """
        Copy `source` from `offset` on into a temp file next to `path`,
        then rename it over `path`.

        The temp file lives in the same directory so the rename stays on
        one filesystem. Until the rename succeeds `path` is untouched; on
        failure the temp file is removed.
        """
        with io_step("seek input file"):
            source.seek(offset)

        with io_step("tempfile"):
            fd, tmp_name = tempfile.mkstemp(prefix=f"{path.name}.split", dir=path.parent)
        tmp_path = Path(tmp_name)

        try:
            with io_step("copy inputfile tail to tempfile"):
                with os.fdopen(fd, "wb") as tmp:
                    shutil.copyfileobj(source, tmp, CHUNK_SIZE)
                    kept = tmp.tell()

            # mkstemp creates 0600; keep the original permissions
            with io_step("copy file mode"):
                shutil.copymode(path, tmp_path)

            with io_step("close input file"):
                source.close()

            with io_step("rename tempfile to orig"):
                os.replace(tmp_path, path)
        except BaseException:
            self._remove_temp(tmp_path)
            raise

        logger.debug(f"rewrote {path} from offset {offset}, {kept} bytes kept")
        return kept

    def _remove_temp(self, tmp_path: Path) -> None:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.info(f"could not remove temp file {tmp_path}: {e}")
