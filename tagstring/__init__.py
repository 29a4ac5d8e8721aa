"""tagstring — build delimited tag strings from a declarative tag catalog."""

from tagstring.catalog import CatalogIndex, build_index
from tagstring.config import VERSION
from tagstring.engine import TagsEngine
from tagstring.exceptions import CatalogError, TagstringError
from tagstring.types import (
    ButtonState,
    CatalogSummary,
    ClickResult,
    LimitResult,
    RequirementStatus,
    StateResult,
)

__all__ = [
    "VERSION",
    "CatalogError",
    "CatalogIndex",
    "TagsEngine",
    "TagstringError",
    "build_index",
    "ButtonState",
    "CatalogSummary",
    "ClickResult",
    "LimitResult",
    "RequirementStatus",
    "StateResult",
]
