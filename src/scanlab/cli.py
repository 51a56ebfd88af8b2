"""Command-line interface for scanlab: dump the token stream of a file."""

from __future__ import annotations

import argparse
import io
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from scanlab.errors import LexError, ScanlabFatalError
from scanlab.memory import (
    Allocator,
    ArenaAllocator,
    HeapAllocator,
    gigabytes_to_bytes,
    megabytes_to_bytes,
)

_SIZE_SUFFIXES = {"K": 1024, "M": megabytes_to_bytes(1), "G": gigabytes_to_bytes(1)}


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads stdin
    comment_marker: str
    strict_strings: bool
    arena_size: int  # 0 selects the heap allocator
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="scanlab",
        description="Print the token stream of a source file",
    )
    p.add_argument("input", nargs="?", default="-", help="Input file, or - for stdin (default)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover scanlab.toml)",
    )
    p.add_argument(
        "--comment",
        default=None,
        metavar="MARKER",
        help="Line comment marker (default: //)",
    )
    p.add_argument(
        "--strict-strings",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fail on string literals without a closing quote (overrides config)",
    )
    p.add_argument(
        "--arena-size",
        default=None,
        metavar="SIZE",
        help="Scan with an arena of SIZE bytes (suffix K, M or G); 0 uses the heap",
    )
    p.add_argument("--debug", action="store_true", help="Log allocator and lexer activity to stderr")
    return p


def parse_size_arg(s: str | int) -> int:
    """Parse a byte count such as 4096, 64K or 1M."""
    if isinstance(s, int):
        if s < 0:
            raise argparse.ArgumentTypeError(f"invalid size (must be non-negative): {s}")
        return s
    text = s.strip().upper()
    multiplier = 1
    if text and text[-1] in _SIZE_SUFFIXES:
        multiplier = _SIZE_SUFFIXES[text[-1]]
        text = text[:-1]
    if not text.isdigit():
        raise argparse.ArgumentTypeError(f"invalid size (expected BYTES[K|M|G]): {s}")
    return int(text) * multiplier


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "scanlab.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = None if args.input == "-" else Path(args.input)
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    cfg_lexer = config.get("lexer")
    if not isinstance(cfg_lexer, dict):
        cfg_lexer = {}
    cfg_arena = config.get("arena")
    if not isinstance(cfg_arena, dict):
        cfg_arena = {}

    # Comment marker: config < CLI
    comment_marker = "//"
    if isinstance(cfg_lexer.get("comment"), str):
        comment_marker = cfg_lexer["comment"]
    if args.comment is not None:
        comment_marker = args.comment
    if not comment_marker:
        raise argparse.ArgumentTypeError("comment marker must not be empty")

    # Strict strings: config < CLI
    strict_strings = False
    if isinstance(cfg_lexer.get("strict_strings"), bool):
        strict_strings = cfg_lexer["strict_strings"]
    if args.strict_strings is not None:
        strict_strings = args.strict_strings

    # Arena size: config < CLI
    arena_size = 0
    cfg_size = cfg_arena.get("size")
    if isinstance(cfg_size, (int, str)) and not isinstance(cfg_size, bool):
        arena_size = parse_size_arg(cfg_size)
    if args.arena_size is not None:
        arena_size = parse_size_arg(args.arena_size)

    return CliOptions(
        input_file=input_file,
        comment_marker=comment_marker,
        strict_strings=strict_strings,
        arena_size=arena_size,
        debug=args.debug,
    )


def make_allocator(options: CliOptions) -> Allocator:
    if options.arena_size:
        return ArenaAllocator(options.arena_size)
    return HeapAllocator()


def scan_file(options: CliOptions, source: bytes | None = None) -> str:
    """Read and tokenize the input; return the token listing.

    Raises LexError on a lexical failure.
    """
    from scanlab.debug import dump_tokens
    from scanlab.lexer import Lexer, LexerConfig, LexFailure

    if source is None:
        if options.input_file is None:
            source = sys.stdin.buffer.read()
        else:
            source = options.input_file.read_bytes()

    config = LexerConfig(
        comment_marker=options.comment_marker,
        strict_strings=options.strict_strings,
    )
    with make_allocator(options) as allocator:
        result = Lexer(source, allocator, config).tokenize()
        if isinstance(result, LexFailure):
            raise result.to_error(source)
        out = io.StringIO()
        dump_tokens(result.tokens, file=out)
        result.release()
    return out.getvalue()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    filename = str(options.input_file) if options.input_file is not None else "<stdin>"
    try:
        listing = scan_file(options)
    except LexError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 1
    except ScanlabFatalError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"error: cannot read {filename}: {exc.strerror}", file=sys.stderr)
        return 2

    sys.stdout.write(listing)
    return 0
