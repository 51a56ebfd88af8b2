"""scanlab: allocators, growable buffers, and a lexer for command-line text tools."""

from __future__ import annotations

from scanlab.buffer import GrowableBuffer
from scanlab.errors import AllocationError, BoundsError, LexError, ScanlabFatalError
from scanlab.lexer import Lexer, LexerConfig, LexFailure, LexResult, LexSuccess, tokenize
from scanlab.memory import Allocator, ArenaAllocator, HeapAllocator, MemoryBlock
from scanlab.text import Text
from scanlab.tokens import Identifier, NumericLiteral, StringLiteral, Symbol, Token, TokenType

__version__ = "0.1.0"

__all__ = [
    "AllocationError",
    "Allocator",
    "ArenaAllocator",
    "BoundsError",
    "GrowableBuffer",
    "HeapAllocator",
    "Identifier",
    "LexError",
    "LexFailure",
    "LexResult",
    "LexSuccess",
    "Lexer",
    "LexerConfig",
    "MemoryBlock",
    "NumericLiteral",
    "ScanlabFatalError",
    "StringLiteral",
    "Symbol",
    "Text",
    "Token",
    "TokenType",
    "tokenize",
]
