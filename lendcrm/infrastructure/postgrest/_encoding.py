"""Encode Python values to PostgREST query-string filters and JSON row bodies."""

from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

from lendcrm.application.interfaces.repositories import Filter


def _encode_scalar(v: Any) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, Enum):
        return str(v.value)
    if isinstance(v, (datetime, date)):
        return v.isoformat()
    return str(v)


def _quote(v: str) -> str:
    """Double-quote a value inside an or=(...) list (commas, dots, parens are reserved)."""
    escaped = v.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def encode_filter(f: Filter) -> tuple[str, str]:
    """Return the (param, value) pair for one filter.

    Filter.eq(col, None) becomes col=is.null; ilike_any becomes
    or=(a.ilike."*term*",b.ilike."*term*").
    """
    if f.op == "ilike_any":
        columns = (f.column,) if isinstance(f.column, str) else f.column
        term = _quote(f"*{f.value}*")
        return "or", "(" + ",".join(f"{c}.ilike.{term}" for c in columns) + ")"
    if not isinstance(f.column, str):
        raise TypeError(f"Filter op {f.op!r} takes a single column, got {f.column!r}")
    if f.op == "eq" and f.value is None:
        return f.column, "is.null"
    if f.op in ("eq", "gte", "lte"):
        return f.column, f"{f.op}.{_encode_scalar(f.value)}"
    raise ValueError(f"Unsupported filter op: {f.op!r}")


def _encode_json_value(v: Any) -> Any:
    if isinstance(v, Enum):
        return v.value
    if isinstance(v, (datetime, date)):
        return v.isoformat()
    if isinstance(v, Mapping):
        return encode_row(v)
    if isinstance(v, (list, tuple)):
        return [_encode_json_value(x) for x in v]
    return v


def encode_row(row: Mapping[str, Any]) -> dict[str, Any]:
    """Convert a row mapping to a JSON-serializable dict (enums, datetimes)."""
    return {k: _encode_json_value(v) for k, v in row.items()}
