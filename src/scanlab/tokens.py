"""Token types, token variants, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from scanlab.text import Text


class TokenType(Enum):
    # Keywords
    KEYWORD_IF = auto()  # if
    KEYWORD_WHILE = auto()  # while

    # Payload-carrying
    IDENTIFIER = auto()  # [A-Za-z][A-Za-z0-9_]*
    NUMERIC_LITERAL = auto()  # 12, 3.5
    STRING_LITERAL = auto()  # "..."

    # Comparison / logical
    LESS = auto()  # <
    GREATER = auto()  # >
    LESS_EQUAL = auto()  # <=
    GREATER_EQUAL = auto()  # >=
    EQUAL = auto()  # ==
    NOT_EQUAL = auto()  # !=
    NOT = auto()  # !
    AND = auto()  # &&
    OR = auto()  # ||

    # Arithmetic / assignment
    PLUS = auto()  # +
    MINUS = auto()  # -
    MULTIPLY = auto()  # *
    DIVIDE = auto()  # /
    ASSIGN = auto()  # =

    # Punctuation
    LEFT_PAREN = auto()  # (
    RIGHT_PAREN = auto()  # )
    COMMA = auto()  # ,
    SEMICOLON = auto()  # ;
    LEFT_BRACKET = auto()  # [
    RIGHT_BRACKET = auto()  # ]


PAYLOAD_TYPES = frozenset(
    {TokenType.IDENTIFIER, TokenType.NUMERIC_LITERAL, TokenType.STRING_LITERAL}
)


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based byte offset."""

    line: int
    column: int
    offset: int


def position_at(source: bytes, offset: int) -> Position:
    """Translate a byte offset into a line/column Position."""
    offset = max(0, min(offset, len(source)))
    line = source.count(b"\n", 0, offset) + 1
    line_start = source.rfind(b"\n", 0, offset) + 1
    return Position(line, offset - line_start + 1, offset)


# ----------------------------------------------------------------------
# Token variants. Only the variant's own payload is reachable.
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Symbol:
    """A keyword, operator, or punctuation token. Carries no payload."""

    kind: TokenType
    offset: int = 0

    @property
    def type(self) -> TokenType:
        return self.kind

    def release(self) -> None:
        pass


@dataclass(frozen=True, slots=True)
class Identifier:
    name: Text
    offset: int = 0

    type: ClassVar[TokenType] = TokenType.IDENTIFIER

    def release(self) -> None:
        self.name.release()


@dataclass(frozen=True, slots=True)
class NumericLiteral:
    value: float
    offset: int = 0

    type: ClassVar[TokenType] = TokenType.NUMERIC_LITERAL

    def release(self) -> None:
        pass


@dataclass(frozen=True, slots=True)
class StringLiteral:
    value: Text
    offset: int = 0

    type: ClassVar[TokenType] = TokenType.STRING_LITERAL

    def release(self) -> None:
        self.value.release()


Token = Symbol | Identifier | NumericLiteral | StringLiteral


# ----------------------------------------------------------------------
# Character classification (ASCII bytes)
# ----------------------------------------------------------------------

_WHITESPACE = frozenset(b" \t\n\r\f\v")


def is_letter(ch: int) -> bool:
    """Return True if ch is an ASCII letter."""
    return 0x41 <= ch <= 0x5A or 0x61 <= ch <= 0x7A


def is_digit(ch: int) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return 0x30 <= ch <= 0x39


def is_whitespace(ch: int) -> bool:
    return ch in _WHITESPACE


def is_ident_char(ch: int) -> bool:
    """Return True if ch may continue an identifier."""
    return is_letter(ch) or is_digit(ch) or ch == 0x5F
