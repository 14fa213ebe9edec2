"""Paginated, filterable list queries shared by every listing endpoint."""

import math
from dataclasses import dataclass
from typing import Optional, Any, Callable, Dict, List

from sqlalchemy import or_, cast, String
from sqlalchemy.orm import Query

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
TALENT_DEFAULT_LIMIT = 9
MAX_LIMIT = 100


def _positive_int(raw: Any) -> Optional[int]:
    """Parse a query-string value; None for absent, non-numeric or < 1."""
    if raw is None or raw == "":
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value >= 1 else None


@dataclass(frozen=True)
class PageParams:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_raw(
        cls,
        page: Any = None,
        limit: Any = None,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> "PageParams":
        """Build params from untrusted query values.

        Absent or invalid values fall back to page 1 and ``default_limit``;
        limits above ``max_limit`` are clamped.
        """
        parsed_page = _positive_int(page) or DEFAULT_PAGE
        parsed_limit = _positive_int(limit) or default_limit
        return cls(page=parsed_page, limit=min(parsed_limit, max_limit))


def contains_filter(term: Optional[str], *columns):
    """Case-insensitive substring match of ``term`` over any of ``columns``.

    Returns None when there is no term. ``%`` and ``_`` in the term match
    literally. Non-string columns (JSON lists) are matched on their
    serialized text.
    """
    if not term:
        return None
    clauses = []
    for column in columns:
        if not isinstance(column.type, String):
            column = cast(column, String)
        clauses.append(column.icontains(term, autoescape=True))
    return or_(*clauses)


def paginate(
    query: Query,
    params: PageParams,
    order_by: tuple,
    serialize: Callable[[Any], Any] = lambda row: row,
) -> Dict[str, Any]:
    """Count, order, slice and serialize ``query``.

    Returns ``{data, total, page, limit, total_pages}`` with
    ``total_pages == ceil(total / limit)``; an empty result is not an error.
    """
    total = query.count()
    rows: List[Any] = (
        query.order_by(*order_by)
        .offset(params.offset)
        .limit(params.limit)
        .all()
    )
    return {
        "data": [serialize(row) for row in rows],
        "total": total,
        "page": params.page,
        "limit": params.limit,
        "total_pages": math.ceil(total / params.limit),
    }
