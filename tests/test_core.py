"""
Unit tests for splitlog.core

Tests matchers, configuration, the lookback ring, the line scanner and
split resolution without touching the filesystem.
"""
import io

import pytest

from splitlog.core.domain import (
    MAX_LINES_BACK,
    LineMatcher,
    PatternMatcher,
    SplitConfig,
    SplitPoint,
    build_config,
)
from splitlog.core.errors import (
    BinaryInputError,
    ConfigurationError,
    InvalidSplitPositionError,
    PatternError,
    SplitIOError,
    SplitNotFoundError,
)
from splitlog.core.scanner import (
    LineScanner,
    LookbackRing,
    PreviewScanner,
    peek,
    resolve_split,
)
from conftest import numbered


class TestMatchers:
    """Test the two matcher variants."""

    def test_line_matcher(self):
        """Test line matcher fires only on its line number."""
        m = LineMatcher(5)
        assert m.matches(5, b"anything\n")
        assert not m.matches(4, b"anything\n")
        assert m.describe() == "line 5"

    def test_pattern_matcher_searches_anywhere(self):
        """Test pattern matches anywhere in the line."""
        m = PatternMatcher.compile("ERROR")
        assert m.matches(1, b"12:00 ERROR disk full\n")
        assert not m.matches(1, b"12:00 INFO ok\n")

    def test_pattern_sees_trailing_newline(self):
        """Test pattern runs on raw bytes including the newline."""
        m = PatternMatcher.compile(r"5\n")
        assert m.matches(1, b"line 5\n")
        assert not m.matches(1, b"line 5")

    def test_pattern_end_anchor(self):
        """Test $ anchors before the trailing newline."""
        m = PatternMatcher.compile(r"^line 5$")
        assert m.matches(1, b"line 5\n")
        assert not m.matches(1, b"line 50\n")

    def test_bad_pattern(self):
        """Test uncompilable pattern raises PatternError."""
        with pytest.raises(PatternError):
            PatternMatcher.compile("(")

    def test_matchers_are_immutable(self):
        """Test matchers are frozen."""
        m = LineMatcher(3)
        with pytest.raises(AttributeError):
            m.line = 4


class TestBuildConfig:
    """Test building SplitConfig from primitive options."""

    def test_default_destination(self):
        """Test destination defaults to <source>.1."""
        config = build_config("/tmp/app.log", line=3)
        assert str(config.destination) == "/tmp/app.log.1"
        assert config.matcher == LineMatcher(3)

    def test_explicit_destination(self):
        """Test explicit destination is kept."""
        config = build_config("app.log", "old.log", pattern="x", lines_back=2, overwrite=True)
        assert str(config.destination) == "old.log"
        assert config.lines_back == 2
        assert config.overwrite is True
        assert config.dry_run is False

    def test_needs_exactly_one_target(self):
        """Test both or neither of line/pattern is an error."""
        with pytest.raises(ConfigurationError):
            build_config("app.log")
        with pytest.raises(ConfigurationError):
            build_config("app.log", line=3, pattern="x")

    def test_line_below_two(self):
        """Test splitting at line < 2 is rejected up front."""
        with pytest.raises(ConfigurationError, match="line < 2"):
            build_config("app.log", line=1)

    def test_lines_back_bounds(self):
        """Test lines back must be within 0..MAX_LINES_BACK."""
        build_config("app.log", line=10, lines_back=MAX_LINES_BACK)
        with pytest.raises(ConfigurationError, match="max value for lines back is 6"):
            build_config("app.log", line=10, lines_back=MAX_LINES_BACK + 1)
        with pytest.raises(ConfigurationError, match="must not be negative"):
            build_config("app.log", line=10, lines_back=-1)

    def test_bad_pattern(self):
        """Test pattern errors surface from build_config."""
        with pytest.raises(PatternError):
            build_config("app.log", pattern="[")

    def test_config_is_frozen(self):
        """Test SplitConfig cannot be mutated."""
        config = build_config("app.log", line=3)
        assert isinstance(config, SplitConfig)
        with pytest.raises(AttributeError):
            config.dry_run = True


class TestLookbackRing:
    """Test the fixed-size lookback window."""

    def test_newest_first(self):
        """Test index 0 is the most recent push."""
        ring = LookbackRing(3)
        for value in (10, 20, 30):
            ring.push(value)
        assert [ring[i] for i in range(3)] == [30, 20, 10]

    def test_bounded(self):
        """Test the oldest entry is dropped once full."""
        ring = LookbackRing(3)
        for value in range(100):
            ring.push(value)
        assert len(ring) == 3
        assert [ring[i] for i in range(3)] == [99, 98, 97]

    def test_fill(self):
        """Test unused slots hold the fill value."""
        ring = LookbackRing(fill="")
        assert len(ring) == MAX_LINES_BACK + 1
        assert ring[MAX_LINES_BACK] == ""


class TestLineScanner:
    """Test line numbers and offsets."""

    def test_offsets_and_line_numbers(self):
        """Test each read records the line's start offset."""
        scanner = LineScanner(io.BytesIO(b"a\nbb\nccc\n"))
        assert scanner.read_line() == 2
        assert scanner.read_line() == 3
        assert scanner.read_line() == 4
        assert scanner.line == b"ccc\n"
        assert scanner.line_number == 3
        assert scanner.end_offset == 9
        assert [scanner.offsets[i] for i in range(3)] == [5, 2, 0]

    def test_last_line_without_newline(self):
        """Test a final unterminated line is still a line."""
        scanner = LineScanner(io.BytesIO(b"a\nbb"))
        assert scanner.read_line() == 2
        assert scanner.read_line() == 2
        assert scanner.line == b"bb"
        assert scanner.line_number == 2
        assert scanner.read_line() == 0
        assert scanner.line_number == 2

    def test_empty_input(self):
        """Test empty input ends immediately."""
        scanner = LineScanner(io.BytesIO(b""))
        assert scanner.read_line() == 0
        assert scanner.line_number == 0

    def test_binary_input_rejected(self):
        """Test NUL bytes raise BinaryInputError."""
        scanner = LineScanner(io.BytesIO(b"ok\nbad\x00line\n"))
        scanner.read_line()
        with pytest.raises(BinaryInputError):
            scanner.read_line()

    def test_binary_guard_can_be_disabled(self):
        """Test reject_binary=False lets NUL bytes through."""
        scanner = LineScanner(io.BytesIO(b"bad\x00line\n"), reject_binary=False)
        assert scanner.read_line() == 9

    def test_ring_stays_bounded_on_large_input(self):
        """Test only the last MAX_LINES_BACK + 1 offsets are kept."""
        scanner = LineScanner(io.BytesIO(numbered(1, 5000)))
        while scanner.read_line():
            pass
        assert len(scanner.offsets) == MAX_LINES_BACK + 1
        assert scanner.line_number == 5000


class TestPreviewScanner:
    """Test previews kept alongside offsets."""

    def test_previews_follow_lines(self):
        """Test previews are stripped copies, newest first."""
        scanner = PreviewScanner(io.BytesIO(b"one\r\ntwo\n"))
        scanner.read_line()
        scanner.read_line()
        assert scanner.previews[0] == "two"
        assert scanner.previews[1] == "one"

    def test_peek_truncates(self):
        """Test long lines are capped with a marker."""
        text = peek(b"x" * 200 + b"\n", limit=10)
        assert text == "xxxxxxxx.."
        assert len(text) == 10

    def test_peek_short_line(self):
        """Test short lines pass through unchanged."""
        assert peek(b"hello\n") == "hello"

    def test_peek_invalid_utf8(self):
        """Test undecodable bytes are replaced, not fatal."""
        assert peek(b"\xffok\n") == "\ufffdok"


class TestResolveSplit:
    """Test split point resolution."""

    def test_match_without_lookback(self):
        """Test split at the matched line itself."""
        seen = []
        scanner = LineScanner(io.BytesIO(numbered(1, 10)))
        point = resolve_split(scanner, LineMatcher(5), 0, on_line=seen.append)

        assert point == SplitPoint(anchor_line=5, lines_back=0, offset=len(numbered(1, 4)))
        assert point.split_line == 5
        assert seen == [f"line {i}\n".encode() for i in range(1, 5)]

    def test_match_with_lookback(self):
        """Test lookback moves the offset to an earlier line start."""
        scanner = LineScanner(io.BytesIO(numbered(1, 10)))
        point = resolve_split(scanner, PatternMatcher.compile("^line 5$"), 2)

        assert point.anchor_line == 5
        assert point.split_line == 3
        assert point.offset == len(numbered(1, 2))

    def test_more_lookback_moves_split_earlier(self):
        """Test split line is match line minus lookback."""
        offsets = []
        for back in range(4):
            scanner = LineScanner(io.BytesIO(numbered(1, 10)))
            point = resolve_split(scanner, LineMatcher(8), back)
            assert point.split_line == 8 - back
            offsets.append(point.offset)
        assert offsets == sorted(offsets, reverse=True)
        assert len(set(offsets)) == 4

    def test_not_found(self):
        """Test no match raises SplitNotFoundError."""
        scanner = LineScanner(io.BytesIO(numbered(1, 10)))
        with pytest.raises(SplitNotFoundError, match="split place not found"):
            resolve_split(scanner, PatternMatcher.compile("nope"), 0)

    def test_split_at_line_one(self):
        """Test a split landing on line 1 is rejected."""
        scanner = LineScanner(io.BytesIO(numbered(1, 10)))
        with pytest.raises(InvalidSplitPositionError, match="at line 1"):
            resolve_split(scanner, LineMatcher(3), 2)

    def test_split_before_line_one(self):
        """Test a lookback past the start is rejected."""
        scanner = LineScanner(io.BytesIO(numbered(1, 10)))
        with pytest.raises(InvalidSplitPositionError, match="line < 1"):
            resolve_split(scanner, LineMatcher(3), 3)

    def test_pattern_on_first_line(self):
        """Test a match on line 1 cannot be split."""
        scanner = LineScanner(io.BytesIO(numbered(1, 10)))
        with pytest.raises(InvalidSplitPositionError):
            resolve_split(scanner, PatternMatcher.compile("line 1"), 0)

    def test_read_error_wrapped(self):
        """Test read failures surface as SplitIOError."""
        class Broken(io.BytesIO):
            def readline(self, *args):
                raise OSError("device gone")

        scanner = LineScanner(Broken())
        with pytest.raises(SplitIOError, match="read to find split place: device gone"):
            resolve_split(scanner, LineMatcher(3), 0)
