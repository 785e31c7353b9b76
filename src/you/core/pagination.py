"""Page-number pagination parameters and response metadata."""

from collections.abc import Mapping
from dataclasses import dataclass

TOTAL_PAGES_HEADER = "X-Total-Pages"
TOTAL_COUNT_HEADER = "X-Total-Count"


@dataclass
class PaginationParams:
    per_page: int | None = 50
    page: int | None = 1

    def to_query(self) -> dict[str, str]:
        query = {}
        if self.per_page is not None:
            query["perPage"] = str(self.per_page)
        if self.page is not None:
            query["page"] = str(self.page)
        return query


@dataclass
class PaginationMeta:
    total_pages: int | None = None
    total_count: int | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "PaginationMeta | None":
        """
        Read X-Total-Pages / X-Total-Count.

        Returns None when neither header is present with an integer value.
        `headers` should be case-insensitive (requests' headers are).
        """
        total_pages = _parse_int(headers.get(TOTAL_PAGES_HEADER))
        total_count = _parse_int(headers.get(TOTAL_COUNT_HEADER))
        if total_pages is None and total_count is None:
            return None
        return cls(total_pages=total_pages, total_count=total_count)


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None
