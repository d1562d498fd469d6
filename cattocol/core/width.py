"""Visible width of text lines, with optional escape-sequence stripping."""

from __future__ import annotations

import re

from cattocol.core.block import BlockLike, as_block
from cattocol.errors import MeasurementError


# ANSI/VT escape patterns: CSI, OSC and the ECMA-48 two-byte forms (charset
# selection like ESC(B, ESC 7, ESC =, ESC c). A dangling ESC is dropped as well.
ESCAPE_SEQUENCE_RE = re.compile(
    r"""
    \x1B
    (?:
        \[ [0-?]* [ -/]* [@-~]          # CSI (colors, cursor moves, etc.)
      | \] (?: [^\x07\x1B]* \x07 | [^\x1B]* \x1B\\ )  # OSC to BEL or ST
      | [ -/]* [0-~]                  # nF, Fp, Fe and Fs escapes
    )?
    """,
    re.VERBOSE,
)


def strip_escapes(line: str) -> str:
    """Remove terminal formatting escape sequences from ``line``."""
    if "\x1b" not in line:
        return line
    return ESCAPE_SEQUENCE_RE.sub("", line)


def measure(line: str, escape_aware: bool = False) -> int:
    """Return the number of visible code points in ``line``.

    Args:
        line: A single line of text without its terminator.
        escape_aware: Treat escape sequences as zero-width.

    Returns:
        The code-point count of the (optionally stripped) line.

    Raises:
        MeasurementError: ``escape_aware`` is set and the stripped line still
            holds code points that are not valid text, such as lone
            surrogates left behind by ``surrogateescape`` decoding.
    """
    if not escape_aware:
        return len(line)

    stripped = strip_escapes(line)
    try:
        stripped.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise MeasurementError(
            f"line is not valid text after removing escape sequences: {exc.reason} "
            f"at position {exc.start}",
            line=line,
        ) from exc
    return len(stripped)


def max_visible_width(block: BlockLike, escape_aware: bool = False) -> int:
    """Widest line of ``block``, or 0 when it has no lines."""
    return max((measure(line, escape_aware) for line in as_block(block)), default=0)


__all__ = [
    "ESCAPE_SEQUENCE_RE",
    "max_visible_width",
    "measure",
    "strip_escapes",
]
