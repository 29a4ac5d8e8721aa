"""Formatters for selection state, click results, and button states."""

from tagstring.formatters._table import _sanitize_str, _table, _trunc


def format_state_table(state):
    """Format an engine state dict as readable text.

    Accepts the dict returned by TagsEngine.state() / parse_text().
    """
    lines = [f"Tags:        {_sanitize_str(state['canonical']) or '-'}"]
    if state["text"] != state["canonical"]:
        lines.append(f"Input:       {_sanitize_str(state['text'])}")
    if state["alternative_visible"]:
        lines.append(f"Alternative: {_sanitize_str(state['alternative'])}")
    lines.append(f"Length:      {state['limit']['display']}")
    lines.append("")

    selected_rows = [row for row in state["selection"] if row["selected"]]
    if selected_rows:
        lines.append("Selection:")
        for row in selected_rows:
            lines.append(f"  {row['category']:<20} {', '.join(row['selected'])}")
    else:
        lines.append("Selection: none")

    if state["unrecognized"]:
        lines.append("")
        lines.append(f"Unrecognized ({len(state['unrecognized'])}):")
        for token in state["unrecognized"]:
            lines.append(f"  - {_sanitize_str(token)}")

    unmet = [req for req in state["requirements"] if req["unmet"]]
    if unmet:
        lines.append("")
        lines.append("Requirements:")
        for req in unmet:
            lines.append(f"  ! {req['category']}: {req['message']}")
    return "\n".join(lines)


def format_click_table(result):
    """Format the outcome of one or more clicks."""
    lines = []
    for click in result["clicks"]:
        if not click["accepted"]:
            verdict = f"rejected ({click['pulse']})"
        elif click["selected"]:
            verdict = "selected"
        else:
            verdict = "deselected"
        lines.append(f"{click['category']} / {click['tag']}: {verdict}")
    lines.append("")
    lines.append(format_state_table(result["state"]))
    return "\n".join(lines)


def format_buttons_table(buttons):
    """Format TagsEngine.button_states() rows."""
    if not buttons:
        return "No tags found."
    cols = [("Category", 20), ("Tag", 30), ("Main", 6), ("Selected", 9), ("Order", 0)]
    rows = []
    for b in buttons:
        rows.append(
            (
                _trunc(b["category"], 20),
                _trunc(("  " if b["is_variant"] else "") + b["name"], 30),
                "yes" if b["is_main_tag"] else "",
                "x" if b["selected"] else "",
                str(b["order"]) if b["order"] else "",
            )
        )
    selected = sum(1 for b in buttons if b["selected"])
    return _table(cols, rows, f"Selected: {selected} of {len(buttons)} names")
