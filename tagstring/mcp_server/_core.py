"""Core helpers: engine caching, _call dispatcher, response contract, input validation."""

from __future__ import annotations

from tagstring import config
from tagstring.config import CONTRACT_SCHEMA_VERSION
from tagstring.engine import TagsEngine
from tagstring.exceptions import CatalogError, TagstringError

_engine: TagsEngine | None = None


def _get_engine() -> TagsEngine:
    """Return the cached TagsEngine, loading the configured catalog on first use."""
    global _engine
    if _engine is None:
        _engine = TagsEngine.from_file()
    return _engine


def _load_engine(conf: str | None = None) -> TagsEngine:
    """Replace the cached engine with one built from *conf*."""
    global _engine
    _engine = TagsEngine.from_file(conf)
    return _engine


def _contract_error(message: str, error_type: str = "error") -> dict:
    """Return a stable MCP error envelope."""
    return {
        "ok": False,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        "error": message,
        "error_detail": {
            "type": error_type,
            "message": message,
        },
    }


def _finalize_tool_result(result):
    """Finalize tool response based on configured MCP response mode.

    Modes:
        - legacy (default): dicts gain contract metadata (ok/schema_version).
        - envelope: always return {"ok", "schema_version", "data"} for success.
    """
    if isinstance(result, dict):
        if result.get("ok") is False:
            return result
        if config.MCP_RESPONSE_MODE == "envelope":
            return {"ok": True, "schema_version": CONTRACT_SCHEMA_VERSION, "data": result}
        out = dict(result)
        out.setdefault("ok", True)
        out.setdefault("schema_version", CONTRACT_SCHEMA_VERSION)
        return out
    if config.MCP_RESPONSE_MODE == "envelope":
        return {"ok": True, "schema_version": CONTRACT_SCHEMA_VERSION, "data": result}
    return result


_ALLOWED_METHODS = {
    "catalog_summary",
    "state",
    "alternative_string",
    "button_states",
    "requirement_warnings",
    "parse_text",
    "click",
    "clear",
}


def _validate_text(value: str, field: str = "text") -> str:
    """Reject non-strings and oversized input. Raises TagstringError."""
    if not isinstance(value, str):
        raise TagstringError(f"[ERROR] {field} must be a string.")
    if len(value) > config.MAX_INPUT_CHARS:
        raise TagstringError(
            f"[ERROR] {field} is {len(value)} chars; the maximum is {config.MAX_INPUT_CHARS}."
        )
    return value


def _call(method_name: str, **kwargs):
    """Call a TagsEngine method, converting exceptions to error dicts."""
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}", "error")
    try:
        engine = _get_engine()
        return getattr(engine, method_name)(**kwargs)
    except CatalogError as e:
        return _contract_error(str(e), "catalog")
    except TagstringError as e:
        return _contract_error(str(e), "error")
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}", "error")
