"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from scanlab.lexer import LexerConfig, LexFailure, LexSuccess, tokenize
from scanlab.memory import ArenaAllocator, HeapAllocator
from scanlab.tokens import Identifier, NumericLiteral, StringLiteral, Token, TokenType


@pytest.fixture
def heap() -> HeapAllocator:
    return HeapAllocator()


@pytest.fixture
def arena():
    """A 64 KiB arena, closed after the test."""
    with ArenaAllocator(64 * 1024) as allocator:
        yield allocator


@pytest.fixture
def lex(heap):
    """Return a helper that tokenizes source and returns the token list.

    Fails the test if scanning does not succeed.
    """

    def _lex(source: str | bytes, config: LexerConfig | None = None) -> list[Token]:
        result = tokenize(source, heap, config)
        assert isinstance(result, LexSuccess), f"Expected success, got {result}"
        return list(result.tokens)

    return _lex


@pytest.fixture
def lex_fail(heap):
    """Return a helper that tokenizes source and returns the LexFailure."""

    def _lex_fail(source: str | bytes, config: LexerConfig | None = None) -> LexFailure:
        result = tokenize(source, heap, config)
        assert isinstance(result, LexFailure), f"Expected failure, got {result}"
        return result

    return _lex_fail


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def payload(token: Token) -> object:
    """Return a token's payload as a plain Python value (None for symbols)."""
    if isinstance(token, Identifier):
        return token.name.to_bytes().decode()
    if isinstance(token, StringLiteral):
        return token.value.to_bytes().decode()
    if isinstance(token, NumericLiteral):
        return token.value
    return None


def assert_values(tokens: list[Token], expected: list[object]) -> None:
    """Assert that the token payloads match the expected list."""
    actual = [payload(t) for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
