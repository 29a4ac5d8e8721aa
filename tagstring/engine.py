"""
TagsEngine — public Python API for building tag strings.

Wires the catalog index, selection store, state machine, text parser,
serializer and limit enforcer behind one object. All query methods return
flat dicts suitable for JSON serialization (shapes in tagstring.types).
"""

from __future__ import annotations

from typing import Any

from tagstring import config
from tagstring._utils import _dedupe_preserve_order
from tagstring.catalog import CatalogIndex, build_index
from tagstring.limits import ConstraintEnforcer
from tagstring.loader import load_catalog
from tagstring.parser import ParseResult, TextParser
from tagstring.selection import SelectionStore
from tagstring.serializer import to_alternative_string, to_canonical_string
from tagstring.state_machine import CategoryStateMachine


class TagsEngine:
    """Selection engine for one loaded catalog.

    Args:
        catalog: Parsed catalog configuration dict, or a prebuilt CatalogIndex.
        limit_enabled: Enforce the catalog's characterLimit on clicks.
            Defaults to config.LIMIT_ENABLED.
        dedup_alternatives: De-duplicate the alternative string.
            Defaults to config.DEDUP_ALTERNATIVES.
        initial_text: Text to hydrate from (autosave or a page's initial value).
        catalog_digest: Digest of the catalog file, used to tag autosaves.
    """

    def __init__(
        self,
        catalog: dict | CatalogIndex,
        *,
        limit_enabled: bool | None = None,
        dedup_alternatives: bool | None = None,
        initial_text: str | None = None,
        catalog_digest: str | None = None,
    ):
        self.index = catalog if isinstance(catalog, CatalogIndex) else build_index(catalog)
        self.catalog_digest = catalog_digest
        self.store = SelectionStore(self.index.categories)
        self.machine = CategoryStateMachine(self.index, self.store)
        self.parser = TextParser(self.index, self.store, self.machine)
        self.enforcer = ConstraintEnforcer(
            self.index,
            self.store,
            self.machine,
            limit_enabled=config.LIMIT_ENABLED if limit_enabled is None else limit_enabled,
        )
        self.dedup_alternatives = (
            config.DEDUP_ALTERNATIVES if dedup_alternatives is None else dedup_alternatives
        )
        self.text = ""
        self.unrecognized: list[str] = []
        if initial_text:
            self.hydrate(initial_text)

    @classmethod
    def from_file(cls, conf: str | None = None, **kwargs: Any) -> TagsEngine:
        """Load a catalog file (with default-catalog fallback) and build an engine."""
        loaded = load_catalog(conf)
        return cls(loaded.data, catalog_digest=loaded.digest, **kwargs)

    # -------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------

    @property
    def limit_enabled(self) -> bool:
        return self.enforcer.limit_enabled

    @limit_enabled.setter
    def limit_enabled(self, value: bool) -> None:
        self.enforcer.limit_enabled = bool(value)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------

    def _parse(self, text: str) -> ParseResult:
        result = self.parser.parse(text)
        self.unrecognized = list(result.unrecognized)
        return result

    def hydrate(self, text: str) -> dict[str, Any]:
        """Parse *text* and publish its canonical form."""
        self._parse(text)
        self.text = self.canonical_string()
        return self.state()

    def parse_text(self, text: str, reformat: bool = False) -> dict[str, Any]:
        """Free-text edit: rebuild the selection from *text*, never blocked by the limit.

        The published text stays as typed unless *reformat* is set.
        """
        self._parse(text)
        self.text = self.canonical_string() if reformat else text
        return self.state()

    def click(self, category: str, tag: str) -> dict[str, Any]:
        """Discrete click on *tag* in *category*, rolled back if over the limit."""
        outcome = self.enforcer.guarded_toggle(category, tag)
        if outcome.accepted:
            self.text = outcome.canonical
            self.unrecognized = []
        return {
            "category": category,
            "tag": tag,
            "accepted": outcome.accepted,
            "selected": outcome.selected,
            "limit_exceeded": outcome.limit_exceeded,
            "pulse": config.LIMIT_FLASH_TEXT if outcome.limit_exceeded else None,
            "state": self.state(),
        }

    def clear(self) -> dict[str, Any]:
        self.store.clear_all()
        self.text = ""
        self.unrecognized = []
        return self.state()

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------

    def canonical_string(self) -> str:
        return to_canonical_string(self.index, self.store)

    def alternative_string(self, dedup: bool | None = None) -> str:
        if dedup is None:
            dedup = self.dedup_alternatives
        return to_alternative_string(self.index, self.store, dedup)

    def selection(self) -> list[dict[str, Any]]:
        rows = []
        for category in self.index.categories.values():
            if category.type == "ordered":
                mains: Any = self.store.ordered_mains(category.name)
            else:
                picked = self.store.selected_mains(category.name)
                mains = _dedupe_preserve_order(
                    s.main_name for s in category.tags if s.main_name in picked
                )
            rows.append(
                {
                    "category": category.name,
                    "type": category.type,
                    "selected": [self.store.variant_of(category.name, m) or m for m in mains],
                }
            )
        return rows

    def requirement_warnings(self, unmet_only: bool = False) -> list[dict[str, Any]]:
        """Requirement status of every category that declares one."""
        rows = []
        for category in self.index.categories.values():
            if category.requirement == "none":
                continue
            picked = self.store.selected_mains(category.name)
            if category.requirement == "atLeastOne":
                unmet = not picked
            else:
                unmet = not any(category.is_main_tag(m) for m in picked)
            if unmet_only and not unmet:
                continue
            rows.append(
                {
                    "category": category.name,
                    "requirement": category.requirement,
                    "unmet": unmet,
                    "message": category.override_requirement_text
                    or config.REQUIREMENT_TEXTS[category.requirement],
                }
            )
        return rows

    def button_states(self, category: str | None = None) -> list[dict[str, Any]]:
        """Selected / ordered-position flags for every concrete tag name."""
        categories = (
            [self.index.category(category)] if category else list(self.index.categories.values())
        )
        rows = []
        for cat in categories:
            ordered = self.store.ordered_mains(cat.name)
            for spec in cat.tags:
                active = self.store.variant_of(cat.name, spec.main_name)
                for name in spec.names:
                    selected = active == name
                    order = None
                    if cat.type == "ordered" and selected:
                        order = ordered.index(spec.main_name) + 1
                    rows.append(
                        {
                            "category": cat.name,
                            "name": name,
                            "main_name": spec.main_name,
                            "is_variant": name != spec.main_name,
                            "is_main_tag": spec.is_main_tag,
                            "selected": selected,
                            "order": order,
                        }
                    )
        return rows

    def limit_status(self) -> dict[str, Any]:
        status = self.enforcer.limit_status(len(self.text))
        return {
            "length": status.length,
            "limit": status.limit,
            "enabled": status.enabled,
            "exceeded": status.exceeded,
            "display": status.display,
        }

    def state(self) -> dict[str, Any]:
        alternative = self.alternative_string()
        return {
            "text": self.text,
            "canonical": self.canonical_string(),
            "alternative": alternative,
            "alternative_visible": bool(alternative),
            "unrecognized": list(self.unrecognized),
            "selection": self.selection(),
            "requirements": self.requirement_warnings(),
            "limit": self.limit_status(),
        }

    def catalog_summary(self) -> dict[str, Any]:
        categories = []
        for cat in self.index.categories.values():
            subgroups = []
            for subgroup, specs in cat.subgroups():
                subgroups.append(
                    {
                        "name": subgroup,
                        "hidden": subgroup.startswith("!"),
                        "tags": [_tag_row(spec) for spec in specs],
                    }
                )
            categories.append(
                {
                    "name": cat.name,
                    "type": cat.type,
                    "requirement": cat.requirement,
                    "description": cat.description,
                    "subgroups": subgroups,
                }
            )
        return {
            "separator": self.index.separator,
            "alternative_separator": self.index.alternative_separator,
            "character_limit": self.index.character_limit,
            "reference": self.index.reference,
            "categories": categories,
        }


def _tag_row(spec) -> dict[str, Any]:
    row: dict[str, Any] = {"names": list(spec.names), "main": spec.is_main_tag}
    if spec.alternative:
        row["alternative"] = spec.alternative
    if spec.description:
        row["description"] = spec.description
    if spec.known_as:
        row["known_as"] = list(spec.known_as)
    if spec.required_tags:
        row["required"] = list(spec.required_tags)
    return row
