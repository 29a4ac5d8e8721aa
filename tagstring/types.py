"""Typed response definitions for TagsEngine methods.

These TypedDicts document the shape of dicts returned by public engine
methods. They are optional — runtime behavior is unchanged (plain dicts).
"""

from __future__ import annotations

from typing import TypedDict

# ---------------------------------------------------------------------------
# Per-category views
# ---------------------------------------------------------------------------


class ButtonState(TypedDict):
    """Display state of one concrete tag name."""

    category: str
    name: str
    main_name: str
    is_variant: bool
    is_main_tag: bool
    selected: bool
    order: int | None


class RequirementStatus(TypedDict):
    category: str
    requirement: str
    unmet: bool
    message: str


class CategorySelectionRow(TypedDict):
    category: str
    type: str
    selected: list[str]


class LimitResult(TypedDict):
    length: int
    limit: int | float | None
    enabled: bool
    exceeded: bool
    display: str


# ---------------------------------------------------------------------------
# Engine results
# ---------------------------------------------------------------------------


class StateResult(TypedDict):
    """Return type of TagsEngine.state() / parse_text()."""

    text: str
    canonical: str
    alternative: str
    alternative_visible: bool
    unrecognized: list[str]
    selection: list[CategorySelectionRow]
    requirements: list[RequirementStatus]
    limit: LimitResult


class ClickResult(TypedDict):
    """Return type of TagsEngine.click()."""

    category: str
    tag: str
    accepted: bool
    selected: bool
    limit_exceeded: bool
    pulse: str | None
    state: StateResult


class TagRow(TypedDict, total=False):
    names: list[str]
    main: bool
    alternative: str
    description: str
    known_as: list[str]
    required: list[str]


class SubgroupRow(TypedDict):
    name: str
    hidden: bool
    tags: list[TagRow]


class CategoryRow(TypedDict):
    name: str
    type: str
    requirement: str
    description: str
    subgroups: list[SubgroupRow]


class CatalogSummary(TypedDict):
    """Return type of TagsEngine.catalog_summary()."""

    separator: str
    alternative_separator: str
    character_limit: int | float | None
    reference: str
    categories: list[CategoryRow]
