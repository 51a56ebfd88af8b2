"""Text <-> number conversion used by numeric literal scanning."""

from __future__ import annotations

_DIGITS = frozenset("0123456789")


def _split_sign(text: str) -> tuple[bool, str] | None:
    """Strip one leading '-'. Returns None if a sign appears anywhere else."""
    negative = text.startswith("-")
    body = text[1:] if negative else text
    if not body or "-" in body:
        return None
    return negative, body


def text_to_float(text: str | bytes) -> float | None:
    """Convert decimal text to a float, or return None if it is malformed.

    Accepts a single leading '-', digits, and at most one '.'. The magnitude
    is accumulated digit by digit using positional decimal weights.
    """
    if isinstance(text, bytes):
        text = text.decode("ascii", errors="replace")
    parts = _split_sign(text)
    if parts is None:
        return None
    negative, body = parts

    if body.count(".") > 1 or body == ".":
        return None
    if any(ch not in _DIGITS and ch != "." for ch in body):
        return None

    whole, _, fraction = body.partition(".")
    result = 0.0
    weight = 1.0
    for ch in reversed(whole):
        # Past 309 places the weight is inf, and 0 * inf is nan
        if ch != "0":
            result += (ord(ch) - 48) * weight
        weight *= 10.0
    weight = 0.1
    for ch in fraction:
        result += (ord(ch) - 48) * weight
        weight *= 0.1
    return -result if negative else result


def text_to_int(text: str | bytes) -> int | None:
    """Convert decimal integer text (optional leading '-') to int, or None."""
    if isinstance(text, bytes):
        text = text.decode("ascii", errors="replace")
    parts = _split_sign(text)
    if parts is None:
        return None
    negative, body = parts
    if any(ch not in _DIGITS for ch in body):
        return None

    result = 0
    weight = 1
    for ch in reversed(body):
        result += (ord(ch) - 48) * weight
        weight *= 10
    return -result if negative else result


def format_number(value: float) -> str:
    """Render a number as literal text without exponent notation.

    Integral values print without a fractional part; others use up to 17
    significant digits so the text scans back to (nearly) the same value.
    """
    if value != value or value in (float("inf"), float("-inf")):
        raise ValueError(f"cannot format non-finite number {value!r}")
    if value == int(value):
        return str(int(value))
    text = format(value, ".17g")
    if "e" in text or "E" in text:
        text = format(value, f".{_fraction_digits(value)}f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _fraction_digits(value: float) -> int:
    exponent = int(format(abs(value), "e").split("e")[1])
    return max(0, 16 - exponent)
