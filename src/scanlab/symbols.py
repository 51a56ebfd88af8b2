"""Fixed-symbol table: keywords, operators, and punctuation."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from scanlab.cursor import Cursor
from scanlab.tokens import PAYLOAD_TYPES, TokenType, is_ident_char, is_letter


@dataclass(frozen=True, slots=True)
class SymbolEntry:
    """One literal and the token type it produces.

    Word entries (keywords) only match when the literal is not immediately
    followed by an identifier character.
    """

    literal: bytes
    type: TokenType
    word: bool = False

    @classmethod
    def of(cls, literal: str, tt: TokenType) -> SymbolEntry:
        raw = literal.encode("utf-8")
        return cls(raw, tt, word=bool(raw) and is_letter(raw[0]))

    def matches(self, cursor: Cursor) -> bool:
        if not cursor.startswith(self.literal):
            return False
        if self.word:
            follower = cursor.peek(len(self.literal))
            return follower is None or not is_ident_char(follower)
        return True


class SymbolTable:
    """Ordered first-match table that behaves like longest-match.

    Entries are sorted by descending literal length (ties keep their given
    order), so a literal is always tried before any of its prefixes.
    """

    def __init__(self, entries: Iterable[SymbolEntry]) -> None:
        entries = list(entries)
        for entry in entries:
            if not entry.literal:
                raise ValueError(f"empty literal for {entry.type.name}")
            if entry.type in PAYLOAD_TYPES:
                raise ValueError(f"{entry.type.name} carries a payload and cannot be a symbol")
        seen: dict[bytes, TokenType] = {}
        for entry in entries:
            if entry.literal in seen:
                raise ValueError(
                    f"duplicate literal {entry.literal.decode()!r} "
                    f"({seen[entry.literal].name} and {entry.type.name})"
                )
            seen[entry.literal] = entry.type
        self._entries = tuple(sorted(entries, key=lambda e: -len(e.literal)))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, TokenType]]) -> SymbolTable:
        return cls(SymbolEntry.of(literal, tt) for literal, tt in pairs)

    @staticmethod
    def validate(entries: Iterable[SymbolEntry]) -> None:
        """Check that a hand-ordered sequence is safe for first-match scanning.

        Raises ValueError if a literal is listed after one of its own prefixes.
        """
        ordered = list(entries)
        for i, shorter in enumerate(ordered):
            for longer in ordered[i + 1 :]:
                if longer.literal != shorter.literal and longer.literal.startswith(
                    shorter.literal
                ):
                    raise ValueError(
                        f"{longer.literal.decode()!r} ({longer.type.name}) is shadowed by "
                        f"its prefix {shorter.literal.decode()!r} ({shorter.type.name})"
                    )

    def match(self, cursor: Cursor) -> SymbolEntry | None:
        """Return the first entry matching at the cursor, without consuming it."""
        for entry in self._entries:
            if entry.matches(cursor):
                return entry
        return None

    def __iter__(self) -> Iterator[SymbolEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


DEFAULT_SYMBOLS = SymbolTable.from_pairs(
    [
        ("if", TokenType.KEYWORD_IF),
        ("while", TokenType.KEYWORD_WHILE),
        ("<=", TokenType.LESS_EQUAL),
        (">=", TokenType.GREATER_EQUAL),
        ("==", TokenType.EQUAL),
        ("!=", TokenType.NOT_EQUAL),
        ("&&", TokenType.AND),
        ("||", TokenType.OR),
        ("<", TokenType.LESS),
        (">", TokenType.GREATER),
        ("!", TokenType.NOT),
        ("+", TokenType.PLUS),
        ("-", TokenType.MINUS),
        ("*", TokenType.MULTIPLY),
        ("/", TokenType.DIVIDE),
        ("=", TokenType.ASSIGN),
        ("(", TokenType.LEFT_PAREN),
        (")", TokenType.RIGHT_PAREN),
        (",", TokenType.COMMA),
        (";", TokenType.SEMICOLON),
        ("[", TokenType.LEFT_BRACKET),
        ("]", TokenType.RIGHT_BRACKET),
    ]
)
