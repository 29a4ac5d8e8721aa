"""Character-limit enforcement around click-driven mutations.

A click is applied, the canonical string is measured, and the whole store is
rolled back to its pre-click snapshot when the configured limit is exceeded.
Free-text edits never pass through here; for them the limit is only an
indicator (see limit_status).
"""

from __future__ import annotations

from dataclasses import dataclass

from tagstring._utils import _log_engine_event
from tagstring.catalog import CatalogIndex
from tagstring.selection import SelectionStore
from tagstring.serializer import to_canonical_string
from tagstring.state_machine import CategoryStateMachine


@dataclass(frozen=True)
class ClickOutcome:
    accepted: bool
    selected: bool
    canonical: str
    limit_exceeded: bool

    @property
    def length(self) -> int:
        return len(self.canonical)


@dataclass(frozen=True)
class LimitStatus:
    length: int
    limit: int | float | None
    enabled: bool
    exceeded: bool

    @property
    def display(self) -> str:
        if self.limit is None:
            return str(self.length)
        return f"{self.length}/{self.limit}"


class ConstraintEnforcer:
    def __init__(
        self,
        index: CatalogIndex,
        store: SelectionStore,
        machine: CategoryStateMachine,
        limit_enabled: bool = True,
    ):
        self.index = index
        self.store = store
        self.machine = machine
        self.limit_enabled = limit_enabled

    @property
    def active(self) -> bool:
        """True when a limit is configured in the catalog and enforcement is on."""
        return self.limit_enabled and self.index.limit_configured

    def exceeds(self, length: int) -> bool:
        return self.active and length > (self.index.character_limit or 0)

    def guarded_toggle(self, category_name: str, clicked_name: str) -> ClickOutcome:
        """Apply a click, rolling it back if the canonical string outgrows the limit."""
        snapshot = self.store.snapshot()
        selected = self.machine.on_toggle(category_name, clicked_name)
        canonical = to_canonical_string(self.index, self.store)

        if self.exceeds(len(canonical)):
            self.store.restore(snapshot)
            _log_engine_event(
                event="click_rejected",
                category=category_name,
                tag=clicked_name,
                length=len(canonical),
                limit=self.index.character_limit,
            )
            return ClickOutcome(
                accepted=False,
                selected=False,
                canonical=to_canonical_string(self.index, self.store),
                limit_exceeded=True,
            )
        return ClickOutcome(
            accepted=True, selected=selected, canonical=canonical, limit_exceeded=False
        )

    def limit_status(self, length: int) -> LimitStatus:
        return LimitStatus(
            length=length,
            limit=self.index.character_limit,
            enabled=self.limit_enabled,
            exceeded=self.exceeds(length),
        )
