"""
Line Scanner - Streaming line reader with bounded lookback

Reads a binary stream line by line, remembering the start offsets of
the last MAX_LINES_BACK + 1 lines so the split can be moved back from
the matched line without buffering the file.
"""
from collections import deque
from typing import BinaryIO, Callable, Optional

from .domain import MAX_LINES_BACK, MAX_PEEK_SIZE, Matcher, SplitPoint
from .errors import (
    BinaryInputError,
    InvalidSplitPositionError,
    SplitNotFoundError,
    io_step,
)


class LookbackRing:
    """Fixed-size window, index 0 is the newest entry"""

    def __init__(self, capacity: int = MAX_LINES_BACK + 1, fill=0):
        self._items = deque([fill] * capacity, maxlen=capacity)

    def push(self, value) -> None:
        # appendleft on a full deque drops the oldest (rightmost) entry
        self._items.appendleft(value)

    def __getitem__(self, index: int):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)


class LineScanner:
    """Reads lines and tracks line number and byte offsets"""

    def __init__(self, stream: BinaryIO, reject_binary: bool = True):
        self.stream = stream
        self.reject_binary = reject_binary
        self.line = b""
        self.line_number = 0
        self.end_offset = 0
        self.offsets = LookbackRing()

    def read_line(self) -> int:
        """Read the next line, return its size in bytes (0 at end of input)"""
        raw = self.stream.readline()
        if not raw:
            return 0
        if self.reject_binary and b"\0" in raw:
            raise BinaryInputError("binary input")

        self.line = raw
        self.line_number += 1
        self.offsets.push(self.end_offset)
        self.end_offset += len(raw)
        return len(raw)


class PreviewScanner(LineScanner):
    """LineScanner that also keeps display previews of recent lines"""

    def __init__(self, stream: BinaryIO, reject_binary: bool = True):
        super().__init__(stream, reject_binary)
        self.previews = LookbackRing(fill="")

    def read_line(self) -> int:
        n = super().read_line()
        if n:
            self.previews.push(peek(self.line))
        return n


def peek(raw: bytes, limit: int = MAX_PEEK_SIZE) -> str:
    """Display-safe copy of a line: no line ending, at most `limit` chars"""
    text = raw.rstrip(b"\r\n").decode("utf-8", errors="replace")
    if len(text) > limit:
        return text[:limit - 2] + ".."
    return text


def resolve_split(
    scanner: LineScanner,
    matcher: Matcher,
    lines_back: int,
    on_line: Optional[Callable[[bytes], None]] = None
) -> SplitPoint:
    """
    Scan until the matcher fires and compute the split point.

    Every line read before the match is passed to `on_line`. The matched
    line is not. Raises SplitNotFoundError when input ends first, and
    InvalidSplitPositionError when the split would land on line 1 or
    before it.
    """
    found = False
    while True:
        with io_step("read to find split place"):
            n = scanner.read_line()
        if n == 0:
            break
        if matcher.matches(scanner.line_number, scanner.line):
            found = True
            break
        if on_line is not None:
            on_line(scanner.line)

    if not found:
        raise SplitNotFoundError("split place not found")

    point = SplitPoint(
        anchor_line=scanner.line_number,
        lines_back=lines_back,
        offset=scanner.offsets[lines_back]
    )
    if point.split_line < 1:
        raise InvalidSplitPositionError("not splitting at line < 1")
    if point.split_line == 1:
        raise InvalidSplitPositionError("not splitting at line 1")

    return point
