"""Free text -> selection state.

Tokens are resolved against the name, alias and slash-expansion tables, in
that order. Candidate positions are picked by ring search: the first
position after the previous match, wrapping around to the smallest one.
Repeated ambiguous names therefore walk through successive catalog entries
instead of collapsing onto the first.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tagstring._utils import _log_engine_event
from tagstring.catalog import CatalogIndex
from tagstring.selection import SelectionStore
from tagstring.state_machine import CategoryStateMachine


@dataclass(frozen=True)
class ResolvedToken:
    token: str
    position: int
    source: str  # "name", "alias" or "alt_name"


@dataclass
class ParseResult:
    tokens: list[str] = field(default_factory=list)
    resolved: list[ResolvedToken] = field(default_factory=list)
    unrecognized: list[str] = field(default_factory=list)

    @property
    def positions(self) -> list[int]:
        return [r.position for r in self.resolved]


def split_tokens(text: str, separator: str) -> list[str]:
    """Split on *separator*, trim, and drop empty pieces (casing kept)."""
    pieces = (piece.strip() for piece in text.split(separator))
    return [piece for piece in pieces if piece]


def ring_search(positions, last_idx: int) -> int | None:
    """Return the smallest position > *last_idx*, else the smallest overall."""
    ordered = sorted(positions)
    if not ordered:
        return None
    for position in ordered:
        if position > last_idx:
            return position
    return ordered[0]


class TextParser:
    def __init__(self, index: CatalogIndex, store: SelectionStore, machine: CategoryStateMachine):
        self.index = index
        self.store = store
        self.machine = machine

    def resolve(self, token: str, last_idx: int) -> ResolvedToken | None:
        key = token.lower()
        for source, table in self.index.lookup_tables():
            if key in table:
                position = ring_search(table[key], last_idx)
                if position is not None:
                    return ResolvedToken(token, position, source)
        return None

    def parse(self, text: str) -> ParseResult:
        """Reset the store and rebuild it from *text*."""
        self.store.clear_all()
        result = ParseResult(tokens=split_tokens(text, self.index.separator))

        last_idx = -1
        for token in result.tokens:
            resolved = self.resolve(token, last_idx)
            if resolved is None:
                result.unrecognized.append(token)
                continue
            entry = self.index.entry(resolved.position)
            self.machine.apply_resolved(entry.category, entry.name, entry.spec)
            last_idx = resolved.position
            result.resolved.append(resolved)

        _log_engine_event(
            event="parse",
            tokens=len(result.tokens),
            resolved=len(result.resolved),
            unrecognized=len(result.unrecognized),
        )
        return result
