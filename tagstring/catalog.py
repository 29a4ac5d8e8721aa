"""Catalog index — the immutable category/tag graph plus its lookup tables.

Built once from a parsed catalog configuration by build_index(). Nothing
here mutates after construction; selection state lives in selection.py.

Lookup tables map a lower-cased key to positions in ``all_tags_in_order``,
appended in declaration order and never re-sorted:

  name_index      every concrete tag name (main names and variants)
  alias_index     every ``knownAs`` entry
  alt_name_index  slash expansions of single-name tags ("A/B C" -> "A C", "B C")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import product

from tagstring import config
from tagstring._utils import _dedupe_preserve_order, _log_engine_event
from tagstring.exceptions import CatalogError, TagstringError


@dataclass(frozen=True)
class TagSpec:
    """One declared tag: a main name plus optional variants of the same choice."""

    names: tuple[str, ...]
    alternative: str = ""
    subgroup: str = ""
    description: str = ""
    is_main_tag: bool = False
    known_as: tuple[str, ...] = ()
    required_tags: tuple[str, ...] = ()

    @property
    def main_name(self) -> str:
        return self.names[0]

    @property
    def variants(self) -> tuple[str, ...]:
        return self.names[1:]

    @property
    def has_variants(self) -> bool:
        return len(self.names) > 1


@dataclass(frozen=True)
class TagInfo:
    """A concrete, clickable name and the TagSpec it belongs to."""

    name: str
    spec: TagSpec

    @property
    def main_name(self) -> str:
        return self.spec.main_name

    @property
    def is_variant(self) -> bool:
        return self.name != self.spec.main_name


@dataclass(frozen=True)
class Category:
    name: str
    type: str
    requirement: str
    override_requirement_text: str
    description: str
    tags: tuple[TagSpec, ...]
    by_name: dict[str, TagInfo] = field(default_factory=dict, repr=False, compare=False)
    by_main: dict[str, TagSpec] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_known_type(self) -> bool:
        return self.type in config.VALID_CATEGORY_TYPES

    def tag(self, name: str) -> TagInfo:
        """Return the concrete tag *name*. Raises TagstringError if absent."""
        try:
            return self.by_name[name]
        except KeyError:
            raise TagstringError(
                f"[ERROR] Tag '{name}' not found in category '{self.name}'."
            ) from None

    def spec_for(self, main_name: str) -> TagSpec:
        try:
            return self.by_main[main_name]
        except KeyError:
            raise TagstringError(
                f"[ERROR] Tag '{main_name}' not found in category '{self.name}'."
            ) from None

    def is_main_tag(self, main_name: str) -> bool:
        spec = self.by_main.get(main_name)
        return bool(spec and spec.is_main_tag)

    def subgroups(self) -> list[tuple[str, list[TagSpec]]]:
        """Group tags by subgroup, in first-seen order. Variant groups stay whole."""
        groups: dict[str, list[TagSpec]] = {}
        for spec in self.tags:
            groups.setdefault(spec.subgroup, []).append(spec)
        return list(groups.items())


@dataclass(frozen=True)
class IndexEntry:
    """One concrete name at its position on the global declaration axis."""

    position: int
    name: str
    main_name: str
    category: str
    spec: TagSpec = field(repr=False, compare=False)


@dataclass
class CatalogIndex:
    separator: str
    alternative_separator: str
    character_limit: int | float | None
    categories: dict[str, Category]
    all_tags_in_order: list[IndexEntry]
    name_index: dict[str, list[int]]
    alias_index: dict[str, list[int]]
    alt_name_index: dict[str, list[int]]
    reference: str = ""

    @property
    def limit_configured(self) -> bool:
        return bool(self.character_limit)

    def category(self, name: str) -> Category:
        """Return a category by name. Raises TagstringError if unknown."""
        try:
            return self.categories[name]
        except KeyError:
            available = ", ".join(self.categories)
            raise TagstringError(
                f"[ERROR] Unknown category '{name}'. Available: {available}"
            ) from None

    def lookup_tables(self) -> tuple[tuple[str, dict[str, list[int]]], ...]:
        """Lookup tables in resolution priority order: name, alias, slash expansion."""
        return (
            ("name", self.name_index),
            ("alias", self.alias_index),
            ("alt_name", self.alt_name_index),
        )

    def entry(self, position: int) -> IndexEntry:
        return self.all_tags_in_order[position]


# ---------------------------------------------------------------------------
# Slash expansion
# ---------------------------------------------------------------------------


def generate_alt_names(name: str) -> list[str]:
    """Expand slash groups combinatorially.

    >>> generate_alt_names("A/B C/D")
    ['A C', 'A D', 'B C', 'B D']
    """
    parts = [[p for p in word.split("/") if p] for word in name.split()]
    parts = [p for p in parts if p]
    if not parts:
        return []
    combos = (" ".join(combo).strip() for combo in product(*parts))
    return _dedupe_preserve_order(c for c in combos if c)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _require_str(value, what, *, allow_empty=True):
    if not isinstance(value, str):
        raise CatalogError(f"[ERROR] Invalid catalog: {what} must be a string.")
    if not allow_empty and not value:
        raise CatalogError(f"[ERROR] Invalid catalog: {what} must not be empty.")
    return value


def _optional_str(raw: dict, key: str, where: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise CatalogError(f"[ERROR] Invalid catalog: {where}.{key} must be a string.")
    return value


def _string_list(value, what) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(n, str) for n in value):
        return list(value)
    raise CatalogError(f"[ERROR] Invalid catalog: {what} must be a string or list of strings.")


def _parse_tag(raw, where: str) -> TagSpec:
    if not isinstance(raw, dict):
        raise CatalogError(f"[ERROR] Invalid catalog: {where} must be an object.")
    names = _string_list(raw.get("name"), f"{where}.name")
    if not names or not all(n.strip() for n in names):
        raise CatalogError(f"[ERROR] Invalid catalog: {where}.name must not be empty.")
    return TagSpec(
        names=tuple(names),
        alternative=_optional_str(raw, "alternative", where),
        subgroup=_optional_str(raw, "subgroup", where),
        description=_optional_str(raw, "description", where),
        is_main_tag=bool(raw.get("main", False)),
        known_as=tuple(_string_list(raw.get("knownAs"), f"{where}.knownAs")),
        required_tags=tuple(_string_list(raw.get("requiredTag"), f"{where}.requiredTag")),
    )


def _parse_category(raw, where: str) -> Category:
    if not isinstance(raw, dict):
        raise CatalogError(f"[ERROR] Invalid catalog: {where} must be an object.")
    name = _require_str(raw.get("name"), f"{where}.name", allow_empty=False)
    tags_raw = raw.get("tags")
    if not isinstance(tags_raw, list):
        raise CatalogError(f"[ERROR] Invalid catalog: category '{name}' must contain a tags array.")

    cat_type = raw.get("type") or "standard"
    if not isinstance(cat_type, str):
        raise CatalogError(f"[ERROR] Invalid catalog: category '{name}' type must be a string.")
    if cat_type not in config.VALID_CATEGORY_TYPES:
        _log_engine_event(event="unknown_category_type", category=name, type=cat_type)

    requirement = raw.get("requirement") or "none"
    if requirement not in config.VALID_REQUIREMENTS:
        _log_engine_event(event="unknown_requirement", category=name, requirement=requirement)
        requirement = "none"

    specs = tuple(_parse_tag(t, f"category '{name}' tags[{i}]") for i, t in enumerate(tags_raw))
    # Repeated names stay indexed by position; the last declaration wins here.
    by_name: dict[str, TagInfo] = {}
    by_main: dict[str, TagSpec] = {}
    for spec in specs:
        by_main[spec.main_name] = spec
        for tag_name in spec.names:
            by_name[tag_name] = TagInfo(name=tag_name, spec=spec)

    return Category(
        name=name,
        type=cat_type,
        requirement=requirement,
        override_requirement_text=_optional_str(raw, "overrideRequirementText", where),
        description=_optional_str(raw, "description", where),
        tags=specs,
        by_name=by_name,
        by_main=by_main,
    )


def _parse_limit(value) -> int | float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise CatalogError(
            "[ERROR] Invalid catalog: characterLimit must be a non-negative number."
        )
    return value or None


# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------


def _register(index: dict[str, list[int]], key: str, position: int) -> None:
    index.setdefault(key.lower(), []).append(position)


def build_index(data) -> CatalogIndex:
    """Validate a parsed catalog configuration and build its lookup tables.

    The whole catalog is validated before any index is populated, so a
    malformed catalog never yields a partial index. Raises CatalogError.
    """
    if not isinstance(data, dict):
        raise CatalogError("[ERROR] Invalid catalog: top level must be an object.")
    categories_raw = data.get("categories")
    if not isinstance(categories_raw, list):
        raise CatalogError("[ERROR] Invalid catalog: a categories array is required.")

    separator = data.get("separator", config.DEFAULT_SEPARATOR)
    _require_str(separator, "separator", allow_empty=False)
    alt_separator = data.get("alternativeSeparator", config.DEFAULT_SEPARATOR)
    _require_str(alt_separator, "alternativeSeparator")
    reference = data.get("reference") or ""
    if not isinstance(reference, str):
        raise CatalogError("[ERROR] Invalid catalog: reference must be a string.")
    limit = _parse_limit(data.get("characterLimit"))

    categories: dict[str, Category] = {}
    for i, raw in enumerate(categories_raw):
        category = _parse_category(raw, f"categories[{i}]")
        if category.name in categories:
            raise CatalogError(
                f"[ERROR] Invalid catalog: category '{category.name}' declared twice."
            )
        categories[category.name] = category

    index = CatalogIndex(
        separator=separator,
        alternative_separator=alt_separator,
        character_limit=limit,
        categories=categories,
        all_tags_in_order=[],
        name_index={},
        alias_index={},
        alt_name_index={},
        reference=reference,
    )

    for category in categories.values():
        for spec in category.tags:
            for tag_name in spec.names:
                position = len(index.all_tags_in_order)
                index.all_tags_in_order.append(
                    IndexEntry(position, tag_name, spec.main_name, category.name, spec)
                )
                _register(index.name_index, tag_name, position)
                for alias in spec.known_as:
                    if alias.strip():
                        _register(index.alias_index, alias.strip(), position)
                if not spec.has_variants and "/" in tag_name:
                    for alt_name in generate_alt_names(tag_name):
                        _register(index.alt_name_index, alt_name, position)

    _log_engine_event(
        event="catalog_built",
        categories=len(categories),
        names=len(index.all_tags_in_order),
        aliases=len(index.alias_index),
        alt_names=len(index.alt_name_index),
        character_limit=limit,
    )
    return index
