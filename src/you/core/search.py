"""Issue search request body and query parameters."""

from dataclasses import dataclass, field
from typing import Any

from .issues import ExpandField, join_expand


@dataclass
class SearchRequest:
    """
    Body of POST issues/_search.

    Pick one filter mode: `filter` (field/value object), `query` (query
    language string) or `keys`. Combinations are passed through and left to
    the tracker to resolve.
    """

    filter: dict[str, Any] | None = None
    query: str | None = None
    keys: list[str] | None = None
    queue: str | None = None
    filter_id: int | None = None
    order: str | None = None

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.filter is not None:
            body["filter"] = self.filter
        if self.query is not None:
            body["query"] = self.query
        if self.keys is not None:
            body["keys"] = self.keys
        if self.queue is not None:
            body["queue"] = self.queue
        if self.filter_id is not None:
            body["filterId"] = self.filter_id
        if self.order is not None:
            body["order"] = self.order
        return body


@dataclass
class SearchParams:
    """Query-string options: expand, page-based or scroll-based pagination."""

    expand: list[ExpandField] = field(default_factory=list)
    per_page: int | None = None
    page: int | None = None
    id: str | None = None
    # Scroll pagination
    scroll_type: str | None = None  # "sorted" | "unsorted"
    per_scroll: int | None = None
    scroll_ttl_millis: int | None = None
    scroll_id: str | None = None

    def to_query(self) -> dict[str, str]:
        query = {}
        if self.expand:
            query["expand"] = join_expand(self.expand)

        optional = {
            "perPage": self.per_page,
            "page": self.page,
            "id": self.id,
            "scrollType": self.scroll_type,
            "perScroll": self.per_scroll,
            "scrollTTLMillis": self.scroll_ttl_millis,
            "scrollId": self.scroll_id,
        }
        for name, value in optional.items():
            if value is not None:
                query[name] = str(value)
        return query
