"""
cattocol - combine texts as columns or by lines

Joins the corresponding lines of two or more texts, either padded into
aligned columns or merged with single spaces. Terminal escape sequences can be
treated as zero-width so coloured text lines up like plain text.

Quick Start:
    >>> from cattocol import JoinConfig, render
    >>> config = JoinConfig(fill=" ", repeat=1)
    >>> render(config.combine_col("one\\ntwo", "left\\nright"))
    'one left\\ntwo right\\n'
"""

__version__ = "0.3.0"

from cattocol.core.block import TextBlock, iter_lines
from cattocol.core.combine import (
    JoinConfig,
    JoinMode,
    by_four_lines,
    by_lines,
    by_pairs,
    by_three_lines,
    cat_to_col,
    combine,
    combine_by_first,
    combine_by_first_n,
    combine_column,
    combine_pairs_strict,
    combine_simple,
    render,
)
from cattocol.core.width import max_visible_width, measure, strip_escapes
from cattocol.errors import CattocolError, MeasurementError

__all__ = [
    "__version__",
    "CattocolError",
    "JoinConfig",
    "JoinMode",
    "MeasurementError",
    "TextBlock",
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
    "iter_lines",
    "max_visible_width",
    "measure",
    "render",
    "strip_escapes",
]
