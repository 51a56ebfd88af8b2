"""Human-readable token dump."""

from __future__ import annotations

import math
import sys
from collections.abc import Iterable
from typing import TextIO

from scanlab.numeric import format_number
from scanlab.tokens import Identifier, NumericLiteral, StringLiteral, Symbol, Token


def describe_token(token: Token) -> str:
    """One-line description, e.g. `Identifier('x')` or `ASSIGN`."""
    if isinstance(token, Identifier):
        return f"Identifier({str(token.name)!r})"
    if isinstance(token, NumericLiteral):
        if not math.isfinite(token.value):
            return f"NumericLiteral({token.value!r})"
        return f"NumericLiteral({format_number(token.value)})"
    if isinstance(token, StringLiteral):
        return f"StringLiteral({str(token.value)!r})"
    if isinstance(token, Symbol):
        return token.kind.name
    raise TypeError(f"not a token: {token!r}")


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one token per line to *file*, prefixed with its byte offset."""
    for token in tokens:
        file.write(f"{token.offset:>6}  {describe_token(token)}\n")
