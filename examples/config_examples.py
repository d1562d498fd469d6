"""Example configuration for cattocol.

Save one of these as ``~/.cattocol.json`` (global) or
``.cattocol/config.json`` (per project, only the keys you want to change).
"""

# Example 1: Defaults
DEFAULTS = {
    "fill": " ",
    "repeat": 1,
    "escape_aware": False,
    "encoding": "utf-8",
}

# Example 2: Dotted leaders between columns
DOTTED_LEADERS = {
    "fill": ".",
    "repeat": 3,
}

# Example 3: Coloured terminal output (ls --color, git diff --color, ...)
COLORED_INPUT = {
    "escape_aware": True,
    "repeat": 2,
}

# Example 4: Legacy single-byte inputs
LATIN1_PROJECT = {
    "encoding": "latin-1",
}
