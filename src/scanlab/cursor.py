"""Read-only scan position over an immutable byte span."""

from __future__ import annotations

from collections.abc import Callable

from scanlab.tokens import is_whitespace


class Cursor:
    """A scanning position over `text`. The offset never moves backwards."""

    __slots__ = ("text", "size", "offset")

    def __init__(self, text: bytes | str) -> None:
        if isinstance(text, str):
            text = text.encode("utf-8")
        self.text = bytes(text)
        self.size = len(self.text)
        self.offset = 0

    def __repr__(self) -> str:
        return f"Cursor(offset={self.offset}, size={self.size})"

    @property
    def at_end(self) -> bool:
        return self.offset >= self.size

    def peek(self, ahead: int = 0) -> int | None:
        """Return the byte `ahead` positions from the offset, or None past the end."""
        idx = self.offset + ahead
        if idx < self.size:
            return self.text[idx]
        return None

    def startswith(self, literal: bytes) -> bool:
        return self.text.startswith(literal, self.offset)

    def advance(self, count: int = 1) -> None:
        self.offset = min(self.size, self.offset + count)

    def skip_while(self, predicate: Callable[[int], bool]) -> int:
        """Advance over bytes matching `predicate`; return how many were skipped."""
        start = self.offset
        while self.offset < self.size and predicate(self.text[self.offset]):
            self.offset += 1
        return self.offset - start

    def skip_whitespace(self) -> int:
        return self.skip_while(is_whitespace)

    def skip_to_line_end(self) -> None:
        """Advance to the next newline (left unconsumed) or the end of the span."""
        newline = self.text.find(b"\n", self.offset)
        self.offset = self.size if newline < 0 else newline

    def slice(self, start: int) -> bytes:
        """Return the bytes from `start` up to the current offset."""
        return self.text[start : self.offset]
