"""Shared helpers for cattocol."""
