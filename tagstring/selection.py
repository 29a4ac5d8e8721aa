"""Selection store — per-category selection state plus the global owner index.

Every mutation goes through SelectionStore so that ``owner_category`` stays
consistent: a main name is a key there iff exactly one category has it in
``selected_mains``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tagstring._utils import _log_engine_event
from tagstring.exceptions import TagstringError


@dataclass
class CategorySelection:
    """Mutable selection fields of one category."""

    selected_mains: set[str] = field(default_factory=set)
    selected_variant: dict[str, str] = field(default_factory=dict)
    ordered_mains: list[str] = field(default_factory=list)

    def copy(self) -> CategorySelection:
        return CategorySelection(
            set(self.selected_mains), dict(self.selected_variant), list(self.ordered_mains)
        )


@dataclass(frozen=True)
class StoreSnapshot:
    """Point-in-time copy of a whole store, restorable with SelectionStore.restore()."""

    categories: dict[str, CategorySelection]
    owner_category: dict[str, str]


class SelectionStore:
    def __init__(self, category_names):
        self._categories: dict[str, CategorySelection] = {
            name: CategorySelection() for name in category_names
        }
        self._owner: dict[str, str] = {}

    def _get(self, category: str) -> CategorySelection:
        try:
            return self._categories[category]
        except KeyError:
            raise TagstringError(f"[ERROR] Unknown category '{category}'.") from None

    # --- mutators ---

    def select(self, category: str, main_name: str, variant_name: str) -> None:
        """Select *main_name* in *category* with *variant_name* as its representative."""
        owner = self._owner.get(main_name)
        if owner is not None and owner != category:
            # Categories partition the namespace by main name.
            _log_engine_event(event="evict", main=main_name, from_category=owner, to=category)
            self.deselect(owner, main_name)
        sel = self._get(category)
        sel.selected_mains.add(main_name)
        sel.selected_variant[main_name] = variant_name
        self._owner[main_name] = category

    def deselect(self, category: str, main_name: str) -> None:
        sel = self._get(category)
        sel.selected_mains.discard(main_name)
        sel.selected_variant.pop(main_name, None)
        if main_name in sel.ordered_mains:
            sel.ordered_mains.remove(main_name)
        if self._owner.get(main_name) == category:
            del self._owner[main_name]

    def append_ordered(self, category: str, main_name: str) -> None:
        sel = self._get(category)
        if main_name not in sel.ordered_mains:
            sel.ordered_mains.append(main_name)

    def reorder(self, category: str, key) -> None:
        """Stable-sort the category's ordered mains by *key*."""
        sel = self._get(category)
        sel.ordered_mains.sort(key=key)

    def clear_category(self, category: str) -> None:
        sel = self._get(category)
        for main_name in sel.selected_mains:
            if self._owner.get(main_name) == category:
                del self._owner[main_name]
        sel.selected_mains.clear()
        sel.selected_variant.clear()
        sel.ordered_mains.clear()

    def clear_all(self) -> None:
        for sel in self._categories.values():
            sel.selected_mains.clear()
            sel.selected_variant.clear()
            sel.ordered_mains.clear()
        self._owner.clear()

    # --- snapshot / rollback ---

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            categories={name: sel.copy() for name, sel in self._categories.items()},
            owner_category=dict(self._owner),
        )

    def restore(self, snapshot: StoreSnapshot) -> None:
        self._categories = {name: sel.copy() for name, sel in snapshot.categories.items()}
        self._owner = dict(snapshot.owner_category)

    # --- read accessors ---

    def is_selected(self, category: str, main_name: str) -> bool:
        return main_name in self._get(category).selected_mains

    def variant_of(self, category: str, main_name: str) -> str | None:
        return self._get(category).selected_variant.get(main_name)

    def selected_mains(self, category: str) -> frozenset[str]:
        return frozenset(self._get(category).selected_mains)

    def ordered_mains(self, category: str) -> tuple[str, ...]:
        return tuple(self._get(category).ordered_mains)

    def sole_selection(self, category: str) -> str | None:
        """Return the first selected main (the only one in single categories)."""
        variants = self._get(category).selected_variant
        return next(iter(variants), None)

    def owner_of(self, main_name: str) -> str | None:
        return self._owner.get(main_name)

    def owner_category(self) -> dict[str, str]:
        return dict(self._owner)

    def is_empty(self) -> bool:
        return not self._owner

    def as_dict(self) -> dict:
        """Plain-data view of the full state (stable key order for comparisons)."""
        return {
            "categories": {
                name: {
                    "selected_mains": sorted(sel.selected_mains),
                    "selected_variant": dict(sorted(sel.selected_variant.items())),
                    "ordered_mains": list(sel.ordered_mains),
                }
                for name, sel in self._categories.items()
            },
            "owner_category": dict(sorted(self._owner.items())),
        }
