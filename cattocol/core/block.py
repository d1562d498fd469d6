"""Read-only line views over caller-supplied text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Union

BlockLike = Union[str, Sequence[str], "TextBlock"]


def iter_lines(text: str) -> Iterator[str]:
    """Yield the lines of ``text`` one at a time.

    Lines end at ``\\n``; a ``\\r`` directly before it belongs to the
    terminator. A trailing line feed does not start another (empty) line, so
    ``""`` has no lines and ``"\\n"`` has a single empty one.
    """
    start = 0
    length = len(text)
    while start < length:
        end = text.find("\n", start)
        if end == -1:
            yield text[start:]
            return
        stop = end - 1 if end > start and text[end - 1] == "\r" else end
        yield text[start:stop]
        start = end + 1


@dataclass(frozen=True)
class TextBlock:
    """A text viewed as an ordered sequence of lines.

    ``source`` is either raw text, split with :func:`iter_lines`, or a
    sequence of lines that are used as given. The block never copies the
    source; every iteration walks it again from the start.
    """

    source: Union[str, Sequence[str]]

    def __iter__(self) -> Iterator[str]:
        if isinstance(self.source, str):
            return iter_lines(self.source)
        return iter(self.source)


def as_block(value: BlockLike) -> TextBlock:
    """Wrap ``value`` in a :class:`TextBlock` unless it already is one."""
    if isinstance(value, TextBlock):
        return value
    return TextBlock(value)


__all__ = ["BlockLike", "TextBlock", "as_block", "iter_lines"]
