"""
Listing query builder shared by the post, project and contact listings.

`build_query` turns raw query-string values into a backend-neutral
`ListingQuery`; each `DbClient` implementation knows how to apply one.
`paginate` wraps a page of results with the pagination metadata the
listing endpoints return.
"""

from __future__ import annotations

import math
import re
import string
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")

STATUS_ALL = "all"

# Search matches whole words; these characters separate words.
WORD_SEPARATORS = string.whitespace + string.punctuation
_WORD_SPLIT = re.compile("[" + re.escape(WORD_SEPARATORS) + "]+")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class ListingSpec:
    """Per-entity listing behaviour."""

    default_limit: int
    # (attribute, descending) pairs, applied in order.
    sort: tuple[tuple[str, bool], ...]
    search_fields: tuple[str, ...]
    # Status filter applied when the caller passes none; "all" disables it.
    default_status: Optional[str] = None
    supports_featured: bool = False


POST_LISTING = ListingSpec(
    default_limit=10,
    sort=(("created_at", True),),
    search_fields=("title", "content", "excerpt", "tags"),
    default_status="published",
)

PROJECT_LISTING = ListingSpec(
    default_limit=12,
    sort=(("featured", True), ("created_at", True)),
    search_fields=("title", "description", "technologies"),
    supports_featured=True,
)

CONTACT_LISTING = ListingSpec(
    default_limit=20,
    sort=(("created_at", True),),
    search_fields=("name", "email", "subject", "message"),
)


@dataclass
class ListingParams:
    """Raw query-string values as received by a listing route."""

    page: Optional[str] = None
    limit: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    featured: Optional[str] = None
    search: Optional[str] = None


@dataclass(frozen=True)
class ListingQuery:
    filters: dict[str, Any]
    search_terms: tuple[str, ...]
    search_fields: tuple[str, ...]
    sort: tuple[tuple[str, bool], ...]
    page: int
    skip: int
    limit: int


@dataclass
class Page(Generic[T]):
    items: list[T]
    current_page: int
    total_pages: int
    total_count: int


def parse_positive_int(value: Optional[str], default: int) -> int:
    """
    Parse a page/limit value from its leading digits, so "2abc" and "1.5"
    read as 2 and 1. Falls back to `default` when nothing usable is there.
    """
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    parsed = int(match.group(1))
    return parsed if parsed > 0 else default


def split_words(text: str) -> list[str]:
    return [word for word in _WORD_SPLIT.split(text.lower()) if word]


def split_search_terms(search: Optional[str]) -> tuple[str, ...]:
    if not search:
        return ()
    return tuple(dict.fromkeys(split_words(search)))


def build_query(params: ListingParams, spec: ListingSpec) -> ListingQuery:
    page = parse_positive_int(params.page, 1)
    limit = parse_positive_int(params.limit, spec.default_limit)

    filters: dict[str, Any] = {}
    if params.status == STATUS_ALL and spec.default_status is not None:
        # Exposes drafts; callers only send this from the admin UI.
        status = None
    else:
        status = params.status or spec.default_status
    if status:
        filters["status"] = status

    if params.category:
        filters["category"] = params.category

    if spec.supports_featured and params.featured == "true":
        filters["featured"] = True

    return ListingQuery(
        filters=filters,
        search_terms=split_search_terms(params.search),
        search_fields=spec.search_fields,
        sort=spec.sort,
        page=page,
        skip=(page - 1) * limit,
        limit=limit,
    )


def paginate(items: Sequence[T], total: int, query: ListingQuery) -> Page[T]:
    return Page(
        items=list(items),
        current_page=query.page,
        total_pages=math.ceil(total / query.limit),
        total_count=total,
    )


# In-memory evaluation, used by InMemoryDbClient.


def _field_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return str(value)


def record_matches(record: Any, query: ListingQuery) -> bool:
    for name, expected in query.filters.items():
        if getattr(record, name, None) != expected:
            return False
    if query.search_terms:
        words = set(
            split_words(
                " ".join(
                    _field_text(getattr(record, name, None))
                    for name in query.search_fields
                )
            )
        )
        if not any(term in words for term in query.search_terms):
            return False
    return True


def sort_records(records: Iterable[T], sort: Sequence[tuple[str, bool]]) -> list[T]:
    ordered = list(records)
    # Stable sorts applied from the least significant key.
    for name, descending in reversed(sort):
        ordered.sort(key=lambda r: getattr(r, name), reverse=descending)
    return ordered
