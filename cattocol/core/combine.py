"""Combine several texts into one, as aligned columns or merged lines.

Every combiner returns a generator of fragments: slices of the input lines,
runs of the fill character, single spaces and ``"\\n"`` terminators.
Concatenating the fragments gives the combined text. Nothing is computed
until the first fragment is requested, and only the current line's state is
held while iterating.

Example::

    >>> config = JoinConfig(fill=" ", repeat=1)
    >>> print(render(config.combine_col("Text cat\\nby line.", "Concat text.\\nTwo line.\\nMax")), end="")
    Text cat Concat text.
    by line. Two line.
             Max
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from itertools import zip_longest
from typing import Iterable, Iterator, Optional, Sequence

from cattocol.core.block import BlockLike, as_block
from cattocol.core.width import max_visible_width, measure
from cattocol.utils.log import get_logger

logger = get_logger()

Fragments = Iterator[str]

SPACE = " "
NEWLINE = "\n"


@dataclass(frozen=True)
class JoinConfig:
    """Fill character and repeat count used by the column join.

    ``repeat`` fill characters always separate the widest left-hand line from
    the right-hand column; shorter lines get extra fill to reach the same
    column.
    """

    fill: str = SPACE
    repeat: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.fill, str) or len(self.fill) != 1:
            raise ValueError(f"fill must be a single character, got {self.fill!r}")
        if isinstance(self.repeat, bool) or not isinstance(self.repeat, int):
            raise ValueError(f"repeat must be an integer, got {self.repeat!r}")
        if self.repeat < 0:
            raise ValueError(f"repeat must not be negative, got {self.repeat}")

    def with_fill(self, fill: str) -> "JoinConfig":
        """Return a copy using ``fill`` as the padding character."""
        return replace(self, fill=fill)

    def with_repeat(self, repeat: int) -> "JoinConfig":
        """Return a copy separating columns by ``repeat`` fill characters."""
        return replace(self, repeat=repeat)

    def combine_col(self, block_one: BlockLike, block_two: BlockLike) -> Fragments:
        """Column join measuring every code point."""
        return combine_column(block_one, block_two, self.fill, self.repeat)

    def combine_col_esc(self, block_one: BlockLike, block_two: BlockLike) -> Fragments:
        """Column join where escape sequences take no width."""
        return combine_column(block_one, block_two, self.fill, self.repeat, escape_aware=True)


class JoinMode(str, Enum):
    """How lines of the combined texts are joined."""

    COLUMN = "column"
    SIMPLE = "simple"
    BY_FIRST = "by-first"
    PAIRS = "pairs"

    @classmethod
    def _aliases(cls) -> dict[str, "JoinMode"]:
        return {
            "col": cls.COLUMN,
            "columns": cls.COLUMN,
            "combine_col": cls.COLUMN,
            "cat": cls.SIMPLE,
            "cat_to_col": cls.SIMPLE,
            "lines": cls.BY_FIRST,
            "by_first": cls.BY_FIRST,
            "by_lines": cls.BY_FIRST,
            "by_pairs": cls.PAIRS,
            "strict": cls.PAIRS,
        }

    @classmethod
    def _missing_(cls, value: object) -> Optional["JoinMode"]:
        if isinstance(value, str):
            return cls._aliases().get(value.strip().lower())
        return None

    @property
    def max_blocks(self) -> Optional[int]:
        """Largest number of texts the mode accepts, ``None`` for no limit."""
        return None if self is JoinMode.BY_FIRST else 2


def combine_column(
    block_one: BlockLike,
    block_two: BlockLike,
    fill: str = SPACE,
    repeat: int = 0,
    escape_aware: bool = False,
) -> Fragments:
    """Put ``block_two`` in a column to the right of ``block_one``.

    The column starts ``repeat`` fill characters after the widest line of the
    whole of ``block_one``. Lines of ``block_one`` left over after
    ``block_two`` ends are emitted as they are; lines of ``block_two`` left
    over are indented to the column. Fill runs of equal length are the same
    string object.

    Raises:
        MeasurementError: ``escape_aware`` is set and a line of ``block_one``
            is not valid text once escape sequences are removed. The error
            surfaces while iterating.
    """
    first = as_block(block_one)
    second = as_block(block_two)
    width = max_visible_width(first, escape_aware)
    column = width + repeat
    runs: dict[int, str] = {}

    def fill_run(length: int) -> str:
        run = runs.get(length)
        if run is None:
            run = runs[length] = fill * length
        return run

    logger.debug(
        "[combine] Column layout computed",
        extra={"left_width": width, "column": column, "escape_aware": escape_aware},
    )
    for line_one, line_two in zip_longest(first, second):
        if line_two is None:
            if line_one:
                yield line_one
        elif line_one is None:
            if column:
                yield fill_run(column)
            if line_two:
                yield line_two
        else:
            if line_one:
                yield line_one
            padding = column - measure(line_one, escape_aware)
            if padding:
                yield fill_run(padding)
            if line_two:
                yield line_two
        yield NEWLINE


def combine_simple(block_one: BlockLike, block_two: BlockLike) -> Fragments:
    """Join paired lines with one space; leftover lines pass through bare."""
    first = as_block(block_one)
    second = as_block(block_two)
    for line_one, line_two in zip_longest(first, second):
        if line_one is None:
            if line_two:
                yield line_two
        elif line_two is None:
            if line_one:
                yield line_one
        else:
            if line_one:
                yield line_one
            yield SPACE
            if line_two:
                yield line_two
        yield NEWLINE


def combine_by_first_n(blocks: Iterable[BlockLike]) -> Fragments:
    """Append the matching lines of later texts to each line of the first.

    Exactly one output line is produced per line of the first text; lines of
    other texts past that count are dropped. A single space is put before an
    appended line only when the output line so far is non-empty and the
    appended line is non-empty, so blank lines never add stray spaces.
    """
    texts = [as_block(block) for block in blocks]
    if not texts:
        return
    others = [iter(block) for block in texts[1:]]
    for line in texts[0]:
        filled = bool(line)
        if filled:
            yield line
        for lines in others:
            extra = next(lines, None)
            if not extra:
                continue
            if filled:
                yield SPACE
            yield extra
            filled = True
        yield NEWLINE


def combine_by_first(block_one: BlockLike, block_two: BlockLike) -> Fragments:
    """Two-text form of :func:`combine_by_first_n`."""
    return combine_by_first_n((block_one, block_two))


def by_three_lines(one: BlockLike, two: BlockLike, three: BlockLike) -> Fragments:
    return combine_by_first_n((one, two, three))


def by_four_lines(one: BlockLike, two: BlockLike, three: BlockLike, four: BlockLike) -> Fragments:
    return combine_by_first_n((one, two, three, four))


def combine_pairs_strict(block_one: BlockLike, block_two: BlockLike) -> Fragments:
    """Join only the positions where both texts have a non-empty line.

    Any other position, including one where a single side is blank, is left
    out of the output entirely.
    """
    first = as_block(block_one)
    second = as_block(block_two)
    for line_one, line_two in zip(first, second):
        if line_one and line_two:
            yield line_one
            yield SPACE
            yield line_two
            yield NEWLINE


def combine(
    mode: JoinMode | str,
    blocks: Sequence[BlockLike],
    config: Optional[JoinConfig] = None,
    escape_aware: bool = False,
) -> Fragments:
    """Combine ``blocks`` with the join selected by ``mode``.

    ``config`` and ``escape_aware`` only affect :attr:`JoinMode.COLUMN`.

    Raises:
        ValueError: ``mode`` is unknown or the number of blocks does not fit it.
    """
    join_mode = JoinMode(mode)
    count = len(blocks)
    limit = join_mode.max_blocks
    if count < 1 or (limit is not None and count != limit):
        expected = "one or more" if limit is None else str(limit)
        raise ValueError(f"{join_mode.value} join needs {expected} texts, got {count}")

    logger.debug(
        "[combine] Combining texts",
        extra={"mode": join_mode.value, "blocks": count, "escape_aware": escape_aware},
    )

    if join_mode is JoinMode.COLUMN:
        join = config or JoinConfig()
        return combine_column(
            blocks[0], blocks[1], join.fill, join.repeat, escape_aware=escape_aware
        )
    if join_mode is JoinMode.SIMPLE:
        return combine_simple(blocks[0], blocks[1])
    if join_mode is JoinMode.PAIRS:
        return combine_pairs_strict(blocks[0], blocks[1])
    return combine_by_first_n(blocks)


def render(fragments: Iterable[str]) -> str:
    """Concatenate a fragment sequence into the combined text."""
    return "".join(fragments)


# Short names, one per join mode.
cat_to_col = combine_simple
by_lines = combine_by_first
by_pairs = combine_pairs_strict


__all__ = [
    "Fragments",
    "JoinConfig",
    "JoinMode",
    "by_four_lines",
    "by_lines",
    "by_pairs",
    "by_three_lines",
    "cat_to_col",
    "combine",
    "combine_by_first",
    "combine_by_first_n",
    "combine_column",
    "combine_pairs_strict",
    "combine_simple",
    "render",
]
