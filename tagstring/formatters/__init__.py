"""Output formatting package for tagstring.

Re-exports all public names so consumers can do:
    from tagstring.formatters import format_state_table
"""

from tagstring.formatters._catalog import format_catalog_table
from tagstring.formatters._core import output, pretty_print, state_warnings, warn
from tagstring.formatters._state import (
    format_buttons_table,
    format_click_table,
    format_state_table,
)
from tagstring.formatters._table import (
    _CONTROL_RE,
    _sanitize_str,
    _table,
    _trunc,
)

__all__ = [
    "_CONTROL_RE",
    "_sanitize_str",
    "_table",
    "_trunc",
    "format_buttons_table",
    "format_catalog_table",
    "format_click_table",
    "format_state_table",
    "output",
    "pretty_print",
    "state_warnings",
    "warn",
]
