"""Print every join mode side by side for two small texts.

Run with ``python examples/join_examples.py``.
"""

from cattocol import (
    JoinConfig,
    by_three_lines,
    combine_by_first,
    combine_pairs_strict,
    combine_simple,
    render,
)

LEFT = "Combine two texts\ninto one text\nfrom two columns."
RIGHT = "Returns an iterator\nfrom one\ntext of two\nmerged columns.\nCollect to String."
COLORED = "\x1b[33mCombine\x1b[0m \x1b[36mtwo\x1b[0m texts\ninto one text\nfrom two columns."


def main() -> None:
    config = JoinConfig(fill=" ", repeat=1)
    sections = [
        ("column", config.combine_col(LEFT, RIGHT)),
        ("column, dotted", config.with_fill(".").with_repeat(4).combine_col(LEFT, RIGHT)),
        ("column, colored", config.combine_col_esc(COLORED, RIGHT)),
        ("simple", combine_simple(LEFT, RIGHT)),
        ("by first", combine_by_first("one\ntwo\nthree", "first\n\nthird\nfourth")),
        ("pairs", combine_pairs_strict("one\ntwo\nthree", "first\n\nthird")),
        ("three texts", by_three_lines("one\ntwo", "\n", "primary\nsecondary")),
    ]
    for title, fragments in sections:
        print(f"== {title}")
        print(render(fragments), end="")
        print()


if __name__ == "__main__":
    main()
