"""Plain-text table rendering for tag listings."""

import re

# ANSI escapes and C0 controls except \t and \n.
_CONTROL_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]|[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def _sanitize_str(s):
    """Drop terminal escapes from catalog-supplied text. Newlines and tabs survive."""
    if not s:
        return s
    return _CONTROL_RE.sub("", str(s))


def _trunc(s, maxlen):
    if not s:
        return ""
    if len(s) <= maxlen:
        return s
    return s[: maxlen - 1] + "…"


def _table(columns, rows, footer=None):
    """Render *rows* under a header built from *columns*.

    columns: (name, max_width) pairs. A column is as wide as its widest cell,
    capped at max_width; 0 means uncapped. The last column is never padded.
    """
    cells = [[_sanitize_str(v) if isinstance(v, str) else str(v) for v in row] for row in rows]
    widths = []
    for i, (name, max_width) in enumerate(columns):
        widest = max([len(name)] + [len(row[i]) for row in cells])
        widths.append(min(widest, max_width) if max_width else widest)

    def _line(values):
        padded = [f"{value:<{width}}" for value, width in zip(values[:-1], widths)]
        return " ".join(padded + [values[-1]])

    header = _line([name for name, _ in columns])
    lines = [header, "-" * len(header)]
    lines.extend(_line(row) for row in cells)
    if footer:
        lines.extend(["", footer])
    return "\n".join(lines)
