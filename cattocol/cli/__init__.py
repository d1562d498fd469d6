"""Command-line interface for cattocol."""
