"""
Errors - Failure taxonomy for splitting files

Every error raised by the core derives from SplitlogError, so delivery
layers (CLI, MCP) can catch one type and report the message verbatim.
"""
from contextlib import contextmanager
from typing import Iterator, Optional


class SplitlogError(Exception):
    """Base class for all splitlog failures"""


class ConfigurationError(SplitlogError):
    """Conflicting or missing split target, lookback over maximum"""


class PatternError(SplitlogError):
    """Split pattern does not compile"""


class NotFoundError(SplitlogError):
    """Source file does not exist"""


class IsDirectoryError(SplitlogError):
    """Source path is a directory"""


class ConflictError(SplitlogError):
    """Destination exists (without overwrite) or is the source itself"""


class BinaryInputError(SplitlogError):
    """Source contains a NUL byte"""


class SplitIOError(SplitlogError):
    """Underlying read/write/seek/rename/truncate/close failure"""


class SplitResolutionError(SplitlogError):
    """
    The split point could not be resolved.

    When a real run has to discard the partially written split file,
    the outcome of that removal is attached as `cleanup` and becomes
    part of the message.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
        self.cleanup: Optional[str] = None

    def __str__(self) -> str:
        if self.cleanup is None:
            return self.reason
        return f"{self.reason}, {self.cleanup}"


class SplitNotFoundError(SplitResolutionError):
    """No line matched before end of input"""


class InvalidSplitPositionError(SplitResolutionError):
    """Split line resolved to 1 or below"""


@contextmanager
def io_step(operation: str) -> Iterator[None]:
    """Re-raise OSError from the wrapped block as SplitIOError("<operation>: ...")"""
    try:
        yield
    except OSError as e:
        raise SplitIOError(f"{operation}: {e}") from e
