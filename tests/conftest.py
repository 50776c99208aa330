"""Shared fixtures: numbered text files in tmp_path."""
import pytest


def numbered(first: int, last: int) -> bytes:
    """Bytes of lines `line <first>` .. `line <last>`, newline-terminated"""
    return b"".join(f"line {i}\n".encode() for i in range(first, last + 1))


@pytest.fixture
def make_file(tmp_path):
    """Create a file; defaults to 10 numbered lines"""
    def _make(name: str = "app.log", content: bytes | None = None, lines: int = 10):
        path = tmp_path / name
        path.write_bytes(numbered(1, lines) if content is None else content)
        return path
    return _make
