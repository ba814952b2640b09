"""Tolerant field access over a raw Lighthouse Result (LHR) dict."""

import math
from typing import Any, Optional


def _safe_float(value: Any) -> Optional[float]:
    """Safely convert value to float or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def round_half_up(value: float) -> int:
    """Round like JavaScript's Math.round (halves go up)."""
    return int(math.floor(value + 0.5))


def format_number(value: float) -> str:
    """Render a number without a trailing `.0` for whole values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def get_categories(lhr: dict[str, Any]) -> dict[str, Any]:
    categories = lhr.get("categories")
    return categories if isinstance(categories, dict) else {}


def get_audits(lhr: dict[str, Any]) -> dict[str, Any]:
    audits = lhr.get("audits")
    return audits if isinstance(audits, dict) else {}


def get_audit(lhr: dict[str, Any], audit_id: str) -> Optional[dict[str, Any]]:
    audit = get_audits(lhr).get(audit_id)
    return audit if isinstance(audit, dict) else None


def get_audit_refs(lhr: dict[str, Any], category_id: str) -> list[str]:
    """Audit IDs referenced by a category, in report order."""
    category = get_categories(lhr).get(category_id)
    if not isinstance(category, dict):
        return []
    refs = category.get("auditRefs") or []
    return [ref["id"] for ref in refs if isinstance(ref, dict) and isinstance(ref.get("id"), str)]


def get_score(audit: dict[str, Any]) -> Optional[float]:
    return _safe_float(audit.get("score"))


def get_numeric_value(audit: dict[str, Any]) -> Optional[float]:
    return _safe_float(audit.get("numericValue"))


def get_details(audit: dict[str, Any]) -> dict[str, Any]:
    details = audit.get("details")
    return details if isinstance(details, dict) else {}


def get_items(details: dict[str, Any]) -> list[dict[str, Any]]:
    """Items of a details block, skipping anything that is not a record."""
    items = details.get("items")
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def get_number(data: dict[str, Any], key: str) -> float:
    """Numeric field or 0 when absent."""
    return _safe_float(data.get(key)) or 0


def get_text(data: dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    return value if isinstance(value, str) else default


def get_node_label(item: dict[str, Any]) -> Optional[str]:
    """nodeLabel of a table item's DOM node, if any."""
    node = item.get("node")
    if isinstance(node, dict) and isinstance(node.get("nodeLabel"), str):
        return node["nodeLabel"]
    return None


def basename(url: str) -> str:
    """Last path segment of a URL."""
    return url.rstrip("/").split("/")[-1] if url else url
