"""Selection state -> output strings. Read-only projections of the store."""

from __future__ import annotations

from collections.abc import Iterator

from tagstring._utils import _dedupe_preserve_order, collapse_whitespace
from tagstring.catalog import CatalogIndex, TagInfo
from tagstring.selection import SelectionStore


def iter_selected(index: CatalogIndex, store: SelectionStore) -> Iterator[TagInfo]:
    """Yield the active variant of every selected tag, in output order.

    Categories come in declaration order. Ordered categories follow their
    explicit order, standard categories follow tag declaration order.
    """
    for category in index.categories.values():
        if category.type == "ordered":
            mains: list[str] | tuple[str, ...] = store.ordered_mains(category.name)
        elif category.type == "single":
            sole = store.sole_selection(category.name)
            mains = [sole] if sole is not None else []
        elif category.type == "standard":
            selected = store.selected_mains(category.name)
            mains = _dedupe_preserve_order(
                spec.main_name for spec in category.tags if spec.main_name in selected
            )
        else:
            continue

        for main in mains:
            spec = category.by_main.get(main)
            if spec is not None:
                yield TagInfo(store.variant_of(category.name, main) or main, spec)


def to_canonical_string(index: CatalogIndex, store: SelectionStore) -> str:
    return index.separator.join(info.name for info in iter_selected(index, store))


def normalize_alternative(text: str) -> str:
    return collapse_whitespace(text)


def alternatives(index: CatalogIndex, store: SelectionStore, dedup: bool) -> list[str]:
    """Non-empty ``alternative`` values of the selection, optionally de-duplicated."""
    result: list[str] = []
    seen: set[str] = set()
    for info in iter_selected(index, store):
        alt = info.spec.alternative
        if not alt:
            continue
        if dedup:
            norm = normalize_alternative(alt)
            if norm in seen:
                continue
            seen.add(norm)
        result.append(alt)
    return result


def to_alternative_string(index: CatalogIndex, store: SelectionStore, dedup: bool = False) -> str:
    return index.alternative_separator.join(alternatives(index, store, dedup))
