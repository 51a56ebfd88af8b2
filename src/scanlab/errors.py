"""Error types: fatal resource/bounds faults and formatted lex failures."""

from __future__ import annotations

from scanlab.tokens import Position


class ScanlabFatalError(Exception):
    """A caller or configuration defect. Aborts the operation; never retried."""


class AllocationError(ScanlabFatalError, MemoryError):
    """An allocator could not satisfy a request (arena exhausted, bad size)."""


class BoundsError(ScanlabFatalError, IndexError):
    """Out-of-range access into a container."""


class LexError(Exception):
    """A lexical failure with position and source context.

    The lexer itself never raises this; it reports failures as data
    (`LexFailure`). Outer layers convert with `LexFailure.to_error`.
    """

    def __init__(self, message: str, position: Position, source: bytes) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.scan") -> str:
        lines = self.source.splitlines(keepends=True)
        line_idx = self.position.line - 1
        col = self.position.column

        # Build the source line (strip trailing newline for display)
        if 0 <= line_idx < len(lines):
            raw_line = lines[line_idx].rstrip(b"\n").rstrip(b"\r")
        else:
            raw_line = b""
        source_line = raw_line.decode("utf-8", errors="replace")

        # Pad with the bytes before the column so the caret lines up
        pad = raw_line[: col - 1].decode("utf-8", errors="replace")
        pad = "".join("\t" if ch == "\t" else " " for ch in pad)

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )
