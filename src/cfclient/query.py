"""List options and their query-string encoding."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any
from urllib.parse import quote, urlencode

from pydantic import BaseModel, ConfigDict, Field


def _encode_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def encode_value(value: Any) -> str | None:
    """Encode one option value for the query string.

    Returns None for values that must be left out: ``None``, empty strings and
    empty collections. ``False`` and ``0`` are real values and are kept.
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(value, key=_encode_scalar) if isinstance(value, (set, frozenset)) else value
        encoded = [_encode_scalar(v) for v in items if v is not None and v != ""]
        return ",".join(encoded) if encoded else None
    if isinstance(value, str) and value == "":
        return None
    return _encode_scalar(value)


class ListOptions(BaseModel):
    """Paging controls shared by every list call.

    Subclasses add the resource's filter fields. The query string follows the
    declared field order (these paging fields first), so the same options
    always produce the same request.

    Options are mutated in place by ``Pager.next_page`` while a list loop
    runs; do not share one instance between concurrent loops.
    """

    model_config = ConfigDict(populate_by_name=True)

    page: int | None = Field(None, ge=1, description="Page to fetch, 1-based")
    per_page: int | None = Field(None, ge=1, le=5000, description="Results per page")
    order_by: str | None = Field(None, description="Sort field, '-' prefix for descending")
    label_selector: str | None = Field(None, description="Label selector expression")

    def to_query_params(self) -> list[tuple[str, str]]:
        """Return the set options as ordered ``(wire_name, value)`` pairs."""
        params: list[tuple[str, str]] = []
        for name, field in type(self).model_fields.items():
            encoded = encode_value(getattr(self, name))
            if encoded is None:
                continue
            params.append((field.serialization_alias or name, encoded))
        return params

    def to_query_string(self) -> str:
        """Encode the options as ``key=value&...`` with commas kept literal."""
        return urlencode(self.to_query_params(), safe=",", quote_via=quote)


def with_query(path: str, options: ListOptions | None) -> str:
    """Append the encoded options to a path, if there are any."""
    if options is None:
        return path
    query = options.to_query_string()
    return f"{path}?{query}" if query else path
