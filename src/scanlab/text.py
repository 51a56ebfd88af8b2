"""Byte strings backed by an allocator, plus the string utilities built on them."""

from __future__ import annotations

from collections.abc import Iterable

from scanlab.buffer import GrowableBuffer
from scanlab.memory import Allocator


def _as_bytes(data: object) -> bytes:
    if isinstance(data, Text):
        return data.to_bytes()
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected text or bytes, got {type(data).__name__}")


class Text(GrowableBuffer):
    """A growable byte string. Holds exactly its content, with no terminator."""

    def __init__(self, allocator: Allocator, *, inline_capacity: int = 0) -> None:
        super().__init__(allocator, "B", inline_capacity=inline_capacity)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview, allocator: Allocator) -> Text:
        text = cls(allocator)
        text.append(data)
        return text

    @classmethod
    def from_str(cls, data: str, allocator: Allocator) -> Text:
        return cls.from_bytes(data.encode("utf-8"), allocator)

    def _spawn(self) -> Text:
        return Text(self._allocator, inline_capacity=self._inline_capacity)

    def append(self, data: Text | bytes | bytearray | memoryview | str | int) -> None:
        """Append a single byte (int) or a run of bytes."""
        if isinstance(data, int):
            self.push(data)
            return
        chunk = _as_bytes(data)
        if not chunk:
            return
        self.reserve(self._count + len(chunk))
        start = self._block.start + self._count
        self._block.buffer[start : start + len(chunk)] = chunk
        self._count += len(chunk)

    def __iadd__(self, data: Text | bytes | str | int) -> Text:
        self.append(data)
        return self

    def to_bytes(self) -> bytes:
        return bytes(self._block.view()[: self._count])

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __str__(self) -> str:
        return self.to_bytes().decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"Text({self.to_bytes()!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Text, bytes, bytearray, memoryview, str)):
            return self.to_bytes() == _as_bytes(other)
        return NotImplemented


def concat(
    texts: Iterable[Text | bytes | str],
    allocator: Allocator,
    separator: Text | bytes | str | None = None,
) -> Text:
    """Join texts into a new Text, with `separator` between neighbours."""
    parts = [_as_bytes(t) for t in texts]
    sep = _as_bytes(separator) if separator is not None else b""
    result = Text(allocator)
    result.reserve(sum(len(p) for p in parts) + len(sep) * max(0, len(parts) - 1))
    for i, part in enumerate(parts):
        if i and sep:
            result.append(sep)
        result.append(part)
    return result


def split(data: Text | bytes | str, delim: bytes | str, allocator: Allocator) -> list[Text]:
    """Split on `delim`. Runs of the delimiter collapse; empty parts are dropped."""
    raw = _as_bytes(data)
    sep = _as_bytes(delim)
    if len(sep) != 1:
        raise ValueError(f"delimiter must be a single byte, got {sep!r}")
    return [Text.from_bytes(part, allocator) for part in raw.split(sep) if part]


def split_lines(data: Text | bytes | str, allocator: Allocator) -> list[Text]:
    """Split into non-empty lines; a trailing CR on each line is dropped."""
    raw = _as_bytes(data)
    lines = []
    for line in raw.split(b"\n"):
        if line.endswith(b"\r"):
            line = line[:-1]
        if line:
            lines.append(Text.from_bytes(line, allocator))
    return lines


def file_extension(name: str) -> str | None:
    """Return the extension of `name` including the dot, or None."""
    dot = name.rfind(".")
    if dot < 0:
        return None
    return name[dot:]
