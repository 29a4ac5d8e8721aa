"""
tagstring exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class TagstringError(Exception):
    """Exit code 1 — unknown category/tag, invalid input, bad arguments."""

    exit_code = 1


class CatalogError(TagstringError):
    """Exit code 2 — catalog file missing, unreadable, or malformed."""

    exit_code = 2
