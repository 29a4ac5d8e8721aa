"""Formatter for the catalog listing."""

from tagstring.formatters._table import _sanitize_str


def _tag_line(tag):
    head = " | ".join(tag["names"])
    if tag.get("main"):
        head = f"* {head}"
    extras = []
    if tag.get("alternative"):
        extras.append(f"alt: {tag['alternative']}")
    if tag.get("known_as"):
        extras.append(f"aka: {', '.join(tag['known_as'])}")
    if tag.get("required"):
        extras.append(f"needs: {', '.join(tag['required'])}")
    suffix = f"  ({'; '.join(extras)})" if extras else ""
    return _sanitize_str(f"{head}{suffix}")


def format_catalog_table(catalog):
    """Format TagsEngine.catalog_summary() as an indented listing."""
    if not catalog["categories"]:
        return "No categories found."
    limit = catalog["character_limit"]
    lines = [
        f"Separator: {catalog['separator']!r}   "
        f"Alternative separator: {catalog['alternative_separator']!r}   "
        f"Limit: {limit if limit else 'off'}",
        "",
    ]
    if catalog.get("reference"):
        lines.extend([_sanitize_str(catalog["reference"]), ""])
    for cat in catalog["categories"]:
        header = f"{cat['name']} [{cat['type']}]"
        if cat["requirement"] != "none":
            header += f" requires {cat['requirement']}"
        lines.append(header)
        if cat["description"]:
            lines.append(f"  {_sanitize_str(cat['description'])}")
        for subgroup in cat["subgroups"]:
            indent = "  "
            if subgroup["name"] and not subgroup["hidden"]:
                lines.append(f"  {_sanitize_str(subgroup['name'])}:")
                indent = "    "
            for tag in subgroup["tags"]:
                lines.append(f"{indent}- {_tag_line(tag)}")
        lines.append("")
    lines.append("* = main tag")
    return "\n".join(lines)
