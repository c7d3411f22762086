"""Typed errors for text-huffman.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The core raises, it never recovers. The CLI maps errors to stable exit codes.
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_UNKNOWN_SYMBOL = 11
EXIT_CORRUPT_STREAM = 12
EXIT_EMPTY_TREE = 13
EXIT_ROUNDTRIP_MISMATCH = 14


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid codec spec, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (unexpected error)"),
    ExitCodeInfo(EXIT_UNKNOWN_SYMBOL, "UNKNOWN_SYMBOL", "Encode met a symbol missing from the code table"),
    ExitCodeInfo(
        EXIT_CORRUPT_STREAM,
        "CORRUPT_STREAM",
        "Bit stream does not decode (truncated, extra bits, invalid bit, unknown code)",
    ),
    ExitCodeInfo(EXIT_EMPTY_TREE, "EMPTY_TREE", "Symbols requested from an empty tree"),
    ExitCodeInfo(EXIT_ROUNDTRIP_MISMATCH, "ROUNDTRIP_MISMATCH", "Decoded output differs from the input"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE, do not edit manually.\n")
    lines.append("> Source of truth: `src/text_huffman/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Codec errors extend `HuffmanError` and carry an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append(
        "- `--json` on `verify` prints a JSON object to stdout (ok) or stderr (error), and returns the same exit code.\n"
    )
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class HuffmanError(Exception):
    """Base error for text-huffman."""

    exit_code: int = EXIT_GENERIC


class UsageError(HuffmanError):
    exit_code = EXIT_USAGE


class UnknownSymbol(HuffmanError):
    """encode() met a symbol that has no code."""

    exit_code = EXIT_UNKNOWN_SYMBOL

    def __init__(self, symbol: object, position: int) -> None:
        super().__init__(f"unknown symbol {symbol!r} at position {position}")
        self.symbol = symbol
        self.position = position


class CorruptStream(HuffmanError):
    exit_code = EXIT_CORRUPT_STREAM


class TruncatedStream(CorruptStream):
    pass


class ExtraBits(CorruptStream):
    pass


class InvalidBit(CorruptStream):
    def __init__(self, char: str, index: int) -> None:
        super().__init__(f"invalid bit {char!r} at index {index} (expected '0' or '1')")
        self.char = char
        self.index = index


class UnknownCode(CorruptStream):
    pass


class EmptyTree(HuffmanError):
    exit_code = EXIT_EMPTY_TREE


class RoundTripMismatch(HuffmanError):
    exit_code = EXIT_ROUNDTRIP_MISMATCH
