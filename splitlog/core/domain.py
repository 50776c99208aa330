"""
Domain Models - Pure split entities

No external dependencies. Matchers, the per-run configuration and the
values a split produces.
"""
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .errors import ConfigurationError, PatternError

MAX_LINES_BACK = 6
PREVIEW_LINES_BACK = 4  # must be < MAX_LINES_BACK
PREVIEW_LINES_FWD = 3
MAX_PEEK_SIZE = 78


@dataclass(frozen=True)
class LineMatcher:
    """Fires on an absolute 1-based line number"""
    line: int

    def matches(self, line_number: int, raw: bytes) -> bool:
        return line_number == self.line

    def describe(self) -> str:
        return f"line {self.line}"


@dataclass(frozen=True)
class PatternMatcher:
    """Fires on the first line whose raw bytes (newline included) match"""
    regex: re.Pattern

    @classmethod
    def compile(cls, pattern: str) -> "PatternMatcher":
        try:
            return cls(re.compile(pattern.encode("utf-8")))
        except re.error as e:
            raise PatternError(f"invalid pattern {pattern!r}: {e}") from e

    def matches(self, line_number: int, raw: bytes) -> bool:
        return self.regex.search(raw) is not None

    def describe(self) -> str:
        return f"pattern {self.regex.pattern.decode('utf-8', errors='replace')!r}"


Matcher = Union[LineMatcher, PatternMatcher]


@dataclass(frozen=True)
class SplitConfig:
    """Validated input for one split run"""
    matcher: Matcher
    source: Path
    destination: Path
    lines_back: int = 0
    overwrite: bool = False
    dry_run: bool = False

    def __post_init__(self):
        if self.lines_back < 0:
            raise ConfigurationError("lines back must not be negative")
        if self.lines_back > MAX_LINES_BACK:
            raise ConfigurationError(f"max value for lines back is {MAX_LINES_BACK}")


@dataclass(frozen=True)
class SplitPoint:
    """Where a file gets cut"""
    anchor_line: int  # line the matcher fired on
    lines_back: int
    offset: int  # first byte of the retained tail

    @property
    def split_line(self) -> int:
        return self.anchor_line - self.lines_back


@dataclass
class PreviewLine:
    """A line shown around the cut in a dry run"""
    line_number: int
    text: str
    mark: str = ""  # "split", "match" or ""


@dataclass
class SplitResult:
    """Outcome of a split (real or simulated)"""
    source: Path
    destination: Path
    split_point: SplitPoint
    written_bytes: int
    remaining_bytes: int
    dry_run: bool = False
    preview: list[PreviewLine] = field(default_factory=list)


def build_config(
    source: str | Path,
    destination: Optional[str | Path] = None,
    line: Optional[int] = None,
    pattern: Optional[str] = None,
    lines_back: int = 0,
    overwrite: bool = False,
    dry_run: bool = False
) -> SplitConfig:
    """
    Build a SplitConfig from primitive options.

    Exactly one of `line` / `pattern` must be given. The destination
    defaults to `<source>.1`.
    """
    if (line is None) == (pattern is None):
        raise ConfigurationError("need a line number or a pattern, not both")

    if line is not None:
        if line < 2:
            raise ConfigurationError("split does not make sense at line < 2")
        matcher: Matcher = LineMatcher(line)
    else:
        matcher = PatternMatcher.compile(pattern)

    source = Path(source)
    destination = Path(destination) if destination else Path(f"{source}.1")

    return SplitConfig(
        matcher=matcher,
        source=source,
        destination=destination,
        lines_back=lines_back,
        overwrite=overwrite,
        dry_run=dry_run
    )
