"""Category state machine — the three selection disciplines.

  standard  any number of mains; clicking the active variant toggles it off,
            clicking another variant of the same group switches to it
  single    at most one main; clicking the active main toggles it off
  ordered   any number of mains kept in an explicit list, main tags first

Clicks go through on_toggle(); the text parser uses apply_resolved(), which
only ever selects and never cascades required companions.
"""

from __future__ import annotations

from tagstring._utils import _log_engine_event
from tagstring.catalog import Category, CatalogIndex, TagInfo, TagSpec
from tagstring.selection import SelectionStore


class CategoryStateMachine:
    def __init__(self, index: CatalogIndex, store: SelectionStore):
        self.index = index
        self.store = store

    def on_toggle(self, category_name: str, clicked_name: str) -> bool:
        """Apply a click on *clicked_name*. Returns True if it made a selection.

        Raises TagstringError for an unknown category or a name the
        category does not declare.
        """
        category = self.index.category(category_name)
        info = category.tag(clicked_name)

        if category.type == "standard":
            selected = self._toggle_standard(category, info)
        elif category.type == "single":
            selected = self._toggle_single(category, info)
        elif category.type == "ordered":
            selected = self._toggle_ordered(category, info)
        else:
            _log_engine_event(event="toggle_ignored", category=category.name, type=category.type)
            return False

        if selected:
            self._cascade_required(category, info)
        return selected

    def apply_resolved(
        self, category_name: str, concrete_name: str, spec: TagSpec | None = None
    ) -> None:
        """Select *concrete_name* without toggling (free-text path).

        *spec* pins the declaration a resolved position belongs to, for names
        declared more than once in the category.
        """
        category = self.index.category(category_name)
        info = TagInfo(concrete_name, spec) if spec is not None else category.tag(concrete_name)
        main = info.main_name

        if category.type == "single":
            self.store.clear_category(category.name)
            self.store.select(category.name, main, info.name)
        elif category.type == "standard":
            self.store.select(category.name, main, info.name)
        elif category.type == "ordered":
            self.store.select(category.name, main, info.name)
            self.store.append_ordered(category.name, main)
            self._sort_ordered(category)
        else:
            _log_engine_event(event="select_ignored", category=category.name, type=category.type)

    # --- disciplines ---

    def _toggle_standard(self, category: Category, info: TagInfo) -> bool:
        main = info.main_name
        if self.store.variant_of(category.name, main) == info.name:
            self.store.deselect(category.name, main)
            return False
        self.store.select(category.name, main, info.name)
        return True

    def _toggle_single(self, category: Category, info: TagInfo) -> bool:
        main = info.main_name
        if self.store.is_selected(category.name, main):
            self.store.clear_category(category.name)
            return False
        self.store.clear_category(category.name)
        self.store.select(category.name, main, info.name)
        return True

    def _toggle_ordered(self, category: Category, info: TagInfo) -> bool:
        main = info.main_name
        if self.store.is_selected(category.name, main):
            self.store.deselect(category.name, main)
            selected = False
        else:
            self.store.select(category.name, main, info.name)
            self.store.append_ordered(category.name, main)
            selected = True
        self._sort_ordered(category)
        return selected

    def _sort_ordered(self, category: Category) -> None:
        self.store.reorder(category.name, key=lambda m: not category.is_main_tag(m))

    # --- required companions ---

    def _cascade_required(self, category: Category, info: TagInfo) -> None:
        """Select the clicked tag's companions that live in the same category."""
        companions = info.spec.required_tags
        if not companions:
            return
        if category.type == "single":
            # A companion would break single-selection exclusivity.
            _log_engine_event(event="cascade_skipped", category=category.name, tag=info.name)
            return

        added = False
        for companion_name in companions:
            companion = category.by_name.get(companion_name)
            if companion is None:
                _log_engine_event(
                    event="companion_not_found",
                    category=category.name,
                    tag=info.name,
                    companion=companion_name,
                )
                continue
            if self.store.is_selected(category.name, companion.main_name):
                continue
            self.store.select(category.name, companion.main_name, companion.name)
            if category.type == "ordered":
                self.store.append_ordered(category.name, companion.main_name)
            added = True

        if added and category.type == "ordered":
            self._sort_ordered(category)
