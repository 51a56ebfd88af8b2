"""scanlab lexer: converts source text into a token sequence or a failure."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar

from scanlab.cursor import Cursor
from scanlab.errors import LexError
from scanlab.memory import Allocator, HeapAllocator
from scanlab.numeric import text_to_float
from scanlab.symbols import DEFAULT_SYMBOLS, SymbolTable
from scanlab.text import Text
from scanlab.tokens import (
    Identifier,
    NumericLiteral,
    StringLiteral,
    Symbol,
    Token,
    is_digit,
    is_ident_char,
    is_letter,
    position_at,
)

logger = logging.getLogger(__name__)

_QUOTE = 0x22
_DOT = 0x2E


class _State(Enum):
    SCANNING = auto()
    DONE = auto()
    ERROR = auto()


@dataclass(frozen=True, slots=True)
class LexerConfig:
    """Scanner options.

    strict_strings: treat a string literal without a closing quote as a
    failure at the opening quote instead of taking the rest of the input.
    """

    comment_marker: str = "//"
    strict_strings: bool = False
    symbols: SymbolTable = field(default=DEFAULT_SYMBOLS)

    def __post_init__(self) -> None:
        if not self.comment_marker:
            raise ValueError("comment marker must not be empty")


@dataclass(frozen=True, slots=True)
class LexSuccess:
    tokens: tuple[Token, ...]

    ok: ClassVar[bool] = True

    def release(self) -> None:
        """Release every payload buffer owned by the tokens."""
        for token in self.tokens:
            token.release()


@dataclass(frozen=True, slots=True)
class LexFailure:
    offset: int
    message: str = "unexpected character"

    ok: ClassVar[bool] = False

    def to_error(self, source: bytes | str) -> LexError:
        """Build a LexError with line/column context for reporting."""
        if isinstance(source, str):
            source = source.encode("utf-8")
        return LexError(self.message, position_at(source, self.offset), source)


LexResult = LexSuccess | LexFailure


def _describe(ch: int) -> str:
    if 0x20 <= ch < 0x7F:
        return repr(chr(ch))
    return f"byte 0x{ch:02x}"


class Lexer:
    """Scan source text into tokens, allocating payloads from `allocator`."""

    def __init__(
        self,
        source: bytes | str,
        allocator: Allocator,
        config: LexerConfig | None = None,
    ) -> None:
        self._cursor = Cursor(source)
        self._allocator = allocator
        self._config = config if config is not None else LexerConfig()
        self._comment = self._config.comment_marker.encode("utf-8")
        self._symbols = self._config.symbols
        self._tokens: list[Token] = []
        self._state = _State.SCANNING
        self._error_offset = 0
        self._error_message = ""

    def tokenize(self) -> LexResult:
        """Scan the whole source. Never raises for bad input; see LexFailure."""
        cursor = self._cursor
        cursor.offset = 0
        self._tokens = []
        self._state = _State.SCANNING

        try:
            while self._state is _State.SCANNING:
                if cursor.at_end:
                    self._state = _State.DONE
                    break
                self._step()
        except BaseException:
            self._discard()
            raise

        if self._state is _State.ERROR:
            self._discard()
            logger.debug("lex failure at offset %d: %s", self._error_offset, self._error_message)
            return LexFailure(self._error_offset, self._error_message)

        logger.debug("lexed %d tokens from %d bytes", len(self._tokens), cursor.size)
        return LexSuccess(tuple(self._tokens))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fail(self, offset: int, message: str) -> bool:
        self._state = _State.ERROR
        self._error_offset = offset
        self._error_message = message
        return True

    def _discard(self) -> None:
        for token in self._tokens:
            token.release()
        self._tokens = []

    def _skip_trivia(self) -> None:
        """Skip any mix of line comments and whitespace."""
        cursor = self._cursor
        while True:
            if cursor.startswith(self._comment):
                cursor.advance(len(self._comment))
                cursor.skip_to_line_end()
            elif not cursor.skip_whitespace():
                return

    # ------------------------------------------------------------------
    # One iteration: the first rule that applies wins
    # ------------------------------------------------------------------

    def _step(self) -> None:
        self._skip_trivia()
        if self._cursor.at_end:
            return
        handled = (
            self._lex_symbol()
            or self._lex_identifier()
            or self._lex_string()
            or self._lex_number()
        )
        if not handled:
            ch = self._cursor.peek()
            self._fail(self._cursor.offset, f"unexpected character {_describe(ch)}")

    def _lex_symbol(self) -> bool:
        entry = self._symbols.match(self._cursor)
        if entry is None:
            return False
        self._tokens.append(Symbol(entry.type, self._cursor.offset))
        self._cursor.advance(len(entry.literal))
        return True

    def _lex_identifier(self) -> bool:
        cursor = self._cursor
        if not is_letter(cursor.peek()):
            return False
        start = cursor.offset
        cursor.skip_while(is_ident_char)
        name = Text.from_bytes(cursor.slice(start), self._allocator)
        self._tokens.append(Identifier(name, start))
        return True

    def _lex_string(self) -> bool:
        cursor = self._cursor
        if cursor.peek() != _QUOTE:
            return False
        start = cursor.offset
        cursor.advance()
        content_start = cursor.offset
        closing = cursor.text.find(b'"', content_start)
        if closing < 0:
            if self._config.strict_strings:
                return self._fail(start, "unterminated string literal")
            # Without a closing quote the literal runs to the end of input
            cursor.offset = cursor.size
            content = cursor.slice(content_start)
        else:
            cursor.offset = closing
            content = cursor.slice(content_start)
            cursor.advance()
        value = Text.from_bytes(content, self._allocator)
        self._tokens.append(StringLiteral(value, start))
        return True

    def _lex_number(self) -> bool:
        cursor = self._cursor
        if not is_digit(cursor.peek()):
            return False
        start = cursor.offset
        seen_dot = False
        while not cursor.at_end:
            ch = cursor.peek()
            if ch == _DOT:
                if seen_dot:
                    return self._fail(cursor.offset, "second decimal point in numeric literal")
                seen_dot = True
            elif not is_digit(ch):
                break
            cursor.advance()
        value = text_to_float(cursor.slice(start))
        if value is None:
            return self._fail(start, "malformed numeric literal")
        self._tokens.append(NumericLiteral(value, start))
        return True


def tokenize(
    source: bytes | str,
    allocator: Allocator | None = None,
    config: LexerConfig | None = None,
) -> LexResult:
    """Convenience function: tokenize source, allocating from a fresh heap
    allocator unless one is given."""
    if allocator is None:
        allocator = HeapAllocator()
    return Lexer(source, allocator, config).tokenize()
