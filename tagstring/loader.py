"""Catalog file loading and autosave persistence.

Loading tolerates a missing custom catalog by falling back to the default
``tags.json``; if the fallback fails too, the original error is reported.
The autosave is a small JSON document holding the last canonical string and
a digest of the catalog it was produced with.
"""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone

from tagstring import config
from tagstring._utils import _log_engine_event
from tagstring.exceptions import CatalogError


@dataclass(frozen=True)
class LoadedCatalog:
    path: str
    data: dict
    digest: str


@dataclass(frozen=True)
class Autosave:
    text: str
    updated_at: str | None
    catalog_digest: str | None
    stale: bool


def resolve_catalog_name(conf: str | None) -> str:
    """Map a ``conf`` value to a file name: ``dark`` -> ``dark.json``."""
    if not conf:
        return config.DEFAULT_CATALOG_NAME
    return conf if conf.endswith(".json") else f"{conf}.json"


def _read_catalog_file(path: str) -> LoadedCatalog:
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise CatalogError(f"[ERROR] Catalog file '{path}' not found or unreadable.") from e
    try:
        data = json.loads(raw.decode("utf-8-sig"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CatalogError(f"[ERROR] Catalog file '{path}' has a JSON format error: {e}") from e
    if not isinstance(data, dict):
        raise CatalogError(f"[ERROR] Catalog file '{path}' must contain a JSON object.")
    return LoadedCatalog(path=path, data=data, digest=hashlib.sha256(raw).hexdigest())


def load_catalog(conf: str | None = None) -> LoadedCatalog:
    """Read a catalog file, falling back to the default catalog next to it."""
    path = resolve_catalog_name(conf or config.CATALOG_PATH)
    try:
        return _read_catalog_file(path)
    except CatalogError as original:
        fallback = os.path.join(os.path.dirname(path), config.DEFAULT_CATALOG_NAME)
        if os.path.basename(path) == config.DEFAULT_CATALOG_NAME:
            raise
        _log_engine_event(event="catalog_fallback", requested=path, fallback=fallback)
        try:
            return _read_catalog_file(fallback)
        except CatalogError:
            raise original from None


# ---------------------------------------------------------------------------
# Autosave
# ---------------------------------------------------------------------------


def load_autosave(catalog_digest: str | None = None, path: str | None = None) -> Autosave | None:
    """Return the saved selection, or None when nothing usable is stored."""
    path = path or config.AUTOSAVE_PATH
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except (json.JSONDecodeError, OSError) as e:
        _log_engine_event(event="autosave_unreadable", path=path, error=str(e))
        return None
    if not isinstance(data, dict) or not isinstance(data.get("text"), str):
        return None
    saved_digest = data.get("catalog_digest")
    stale = bool(catalog_digest and saved_digest and saved_digest != catalog_digest)
    return Autosave(
        text=data["text"],
        updated_at=data.get("updated_at"),
        catalog_digest=saved_digest,
        stale=stale,
    )


def save_autosave(text: str, catalog_digest: str | None = None, path: str | None = None) -> None:
    """Persist *text* atomically (write temp file, then rename)."""
    path = path or config.AUTOSAVE_PATH
    data = {
        "text": text,
        "catalog_digest": catalog_digest,
        "updated_at": datetime.now(timezone.utc).isoformat(),
    }
    fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(path) or ".", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise


def clear_autosave(path: str | None = None) -> bool:
    """Delete the autosave file. Returns True if one existed."""
    path = path or config.AUTOSAVE_PATH
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    return True
