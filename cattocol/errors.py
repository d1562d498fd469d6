"""Error types for cattocol."""


class CattocolError(Exception):
    """Base exception for all cattocol errors."""

    def __str__(self) -> str:
        return self.args[0] if self.args else "An error occurred in cattocol"


class MeasurementError(CattocolError):
    """Raised when an escape-stripped line is not valid text.

    The width of such a line is unknown, so any combination depending on it
    must be abandoned rather than padded with a guessed value.
    """

    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.line = line


__all__ = [
    "CattocolError",
    "MeasurementError",
]
