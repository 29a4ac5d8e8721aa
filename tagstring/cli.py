"""
tagstring — build delimited tag strings from a declarative tag catalog
"""

import argparse
import json
import sys

from tagstring import config
from tagstring.commands import (
    cmd_alt,
    cmd_catalog,
    cmd_clear,
    cmd_click,
    cmd_parse,
    cmd_state,
)
from tagstring.exceptions import TagstringError

HELP_TEXT = """\
Usage: tagstring <command> [args...]

Global flags:
  --format table          Output as readable text instead of JSON (default: json)
  --catalog <path>        Catalog file (default: tags.json; "dark" means dark.json)
  --no-limit              Do not enforce the catalog's character limit on clicks
  --dedup                 De-duplicate the alternative string
  --quiet, -q             Suppress warnings
  --verbose, -v           Enable engine event logging
  --version               Show version number

Commands:
  catalog                 - List categories and tags of the catalog
  parse <text>            - Rebuild the selection from free text ("-" reads stdin)
    --reformat              Print the canonical string as the input text
    --save                  Persist the result as the saved selection
  click <category> <tag> [tag...]
                          - Toggle tags in one category, in order
    --text <text>           Start from this text instead of the saved selection
    --save                  Persist the result as the saved selection
  alt <text>              - Print only the alternative string for free text
  state                   - Show the saved selection
    --buttons               Show per-tag selected/order flags instead
    --category <name>       Limit --buttons to one category
  clear                   - Forget the saved selection
"""


# ---------------------------------------------------------------------------
# Global flag extraction (before argparse, so --format works after subcommand)
# ---------------------------------------------------------------------------


def _extract_global_flags(argv):
    """Extract global flags from argv regardless of position.

    Returns (format_str, catalog, limit_enabled, dedup, quiet, verbose, remaining_argv).
    Handles --version directly.
    """
    fmt = "json"
    catalog = None
    limit_enabled = None
    dedup = None
    quiet = False
    verbose = False
    remaining = []
    i = 0
    while i < len(argv):
        if argv[i] == "--version":
            print(f"tagstring {config.VERSION}")
            sys.exit(0)
        elif argv[i] == "--no-limit":
            limit_enabled = False
            i += 1
            continue
        elif argv[i] == "--dedup":
            dedup = True
            i += 1
            continue
        elif argv[i] in ("--quiet", "-q"):
            quiet = True
            i += 1
            continue
        elif argv[i] in ("--verbose", "-v"):
            verbose = True
            i += 1
            continue
        elif argv[i] == "--catalog" and i + 1 < len(argv):
            catalog = argv[i + 1]
            i += 2
            continue
        elif argv[i] == "--format" and i + 1 < len(argv):
            fmt = argv[i + 1]
            if fmt not in ("json", "table"):
                raise TagstringError(f"[ERROR] Invalid format '{fmt}'. Use: json, table")
            i += 2
            continue
        else:
            remaining.append(argv[i])
        i += 1
    if quiet and verbose:
        raise TagstringError("[ERROR] --quiet and --verbose are mutually exclusive.")
    return fmt, catalog, limit_enabled, dedup, quiet, verbose, remaining


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _SubcommandParser(argparse.ArgumentParser):
    """Subparser that raises TagstringError instead of printing full help text."""

    def error(self, message):
        raise TagstringError(f"[ERROR] {message}")


def build_parser():
    parser = _SubcommandParser(
        prog="tagstring",
        description="Build delimited tag strings from a declarative tag catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("--help", "-h", action="store_true", dest="show_help")
    sub = parser.add_subparsers(dest="command", parser_class=_SubcommandParser)

    sub.add_parser("catalog").set_defaults(func=cmd_catalog)

    # --- parse ---
    p = sub.add_parser("parse")
    p.add_argument("text")
    p.add_argument("--reformat", action="store_true")
    p.add_argument("--save", action="store_true")
    p.set_defaults(func=cmd_parse)

    # --- click ---
    p = sub.add_parser("click")
    p.add_argument("category")
    p.add_argument("tags", nargs="+")
    p.add_argument("--text")
    p.add_argument("--save", action="store_true")
    p.set_defaults(func=cmd_click)

    # --- alt ---
    p = sub.add_parser("alt")
    p.add_argument("text")
    p.set_defaults(func=cmd_alt)

    # --- state ---
    p = sub.add_parser("state")
    p.add_argument("--buttons", action="store_true")
    p.add_argument("--category")
    p.set_defaults(func=cmd_state)

    sub.add_parser("clear").set_defaults(func=cmd_clear)

    # --- version (bare word) ---
    sub.add_parser("version").set_defaults(func=None)

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------


def _emit_cli_error(err, fmt):
    msg = str(err)
    if fmt == "json":
        payload = {
            "ok": False,
            "schema_version": config.CONTRACT_SCHEMA_VERSION,
            "error": {
                "type": type(err).__name__,
                "message": msg,
                "exit_code": getattr(err, "exit_code", 1),
            },
        }
        print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)
        return
    print(msg, file=sys.stderr)


def main(argv=None):
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(HELP_TEXT)
        sys.exit(0)

    fmt = "json"
    try:
        fmt, catalog, limit_enabled, dedup, quiet, verbose, remaining_argv = (
            _extract_global_flags(argv)
        )
        config.RUNTIME_QUIET = quiet
        config.RUNTIME_VERBOSE = verbose
        if verbose:
            config.ENGINE_LOG_ENABLED = True

        if not remaining_argv:
            print(HELP_TEXT)
            sys.exit(0)

        parser = build_parser()
        ns = parser.parse_args(remaining_argv)
        ns.format = fmt
        ns.catalog = catalog
        ns.limit_enabled = limit_enabled
        ns.dedup = dedup

        if ns.show_help or not ns.command:
            print(HELP_TEXT)
            sys.exit(0)

        if ns.command == "version":
            print(f"tagstring {config.VERSION}")
            sys.exit(0)

        handler = getattr(ns, "func", None)
        if handler:
            handler(ns)
        else:
            raise TagstringError(f"[ERROR] Unknown command: {ns.command}")

    except TagstringError as e:
        _emit_cli_error(e, fmt)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
