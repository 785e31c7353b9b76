"""Tracker API adapter - HTTP client for issues."""

import logging
from typing import Any

from ..config import TrackerConfig
from ..core.issues import ExpandField, Issue, issues_from_api, join_expand
from ..core.pagination import PaginationMeta, PaginationParams
from ..core.search import SearchParams, SearchRequest
from ..errors import DecodeError
from .http import build_session, check_response, decode_json, send

logger = logging.getLogger(__name__)

SERVICE = "Tracker"


class TrackerClient:
    """
    Tracker API adapter.

    Implements IssueRepository protocol. Builds authenticated requests,
    classifies responses into data or typed errors. No business logic and
    no retries - just I/O.
    """

    def __init__(self, config: TrackerConfig):
        self.config = config
        self._session = build_session(config.proxy)

    @classmethod
    def from_env(cls) -> "TrackerClient":
        """Client configured from TRACKER_* environment variables."""
        return cls(TrackerConfig.from_env())

    @classmethod
    def with_token(cls, oauth_token: str) -> "TrackerClient":
        """Client with default settings and the given token."""
        return cls(TrackerConfig(oauth_token=oauth_token))

    def build_url(self, resource_path: str) -> str:
        """Full URL for a resource. A leading slash on the path is ignored."""
        path = resource_path.lstrip("/")
        return f"{self.config.base_url.rstrip('/')}/{self.config.api_version}/{path}"

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"OAuth {self.config.oauth_token}",
            "Accept-Language": self.config.language.value,
        }
        if self.config.org_id:
            headers["X-Org-ID"] = self.config.org_id
        return headers

    def request(
        self,
        method: str,
        resource_path: str,
        body: Any = None,
        query: dict[str, str] | None = None,
    ) -> tuple[Any, PaginationMeta | None]:
        """Make authenticated API request. Returns (json, pagination meta)."""
        url = self.build_url(resource_path)
        logger.debug(f"{method} {url} params={query}")

        kwargs: dict[str, Any] = {
            "headers": self._headers(),
            "params": query or None,
            "timeout": self.config.timeout,
        }
        if body is not None:
            kwargs["json"] = body

        resp = send(self._session, SERVICE, method, url, **kwargs)
        logger.debug(f"{method} {url} -> {resp.status_code}")
        check_response(resp, SERVICE)
        return decode_json(resp, SERVICE), PaginationMeta.from_headers(resp.headers)

    def get(self, resource_path: str, query: dict[str, str] | None = None):
        return self.request("GET", resource_path, query=query)

    def get_paginated(
        self,
        resource_path: str,
        pagination: PaginationParams,
        query: dict[str, str] | None = None,
    ):
        """GET with perPage/page ahead of caller-supplied filters."""
        merged = pagination.to_query()
        merged.update(query or {})
        return self.request("GET", resource_path, query=merged)

    def post(self, resource_path: str, body: Any, query: dict[str, str] | None = None):
        return self.request("POST", resource_path, body=body, query=query)

    def patch(self, resource_path: str, body: Any, query: dict[str, str] | None = None):
        return self.request("PATCH", resource_path, body=body, query=query)

    def delete(self, resource_path: str, query: dict[str, str] | None = None):
        return self.request("DELETE", resource_path, query=query)

    # ============== Issues ==============

    def get_issue(self, issue_id: str, expand: list[ExpandField] | None = None) -> Issue:
        """Fetch a single issue by key or id."""
        logger.debug(f"Fetching issue {issue_id}")
        query = {"expand": join_expand(expand)} if expand else None
        data, _ = self.get(f"issues/{issue_id}", query)

        issue = Issue.from_api(data)
        logger.info(f"Fetched issue {issue.key}: {issue.summary}")
        return issue

    def search_issues(self, request: SearchRequest, params: SearchParams | None = None) -> list[Issue]:
        """Search issues by filter, query language string or key list."""
        query = params.to_query() if params else None
        data, _ = self.post("issues/_search", request.to_body(), query)

        issues = issues_from_api(data)
        logger.info(f"Search returned {len(issues)} issues")
        return issues

    def count_issues(self, request: SearchRequest) -> int:
        """Number of issues matching the search criteria."""
        data, _ = self.post("issues/_count", request.to_body())
        if isinstance(data, bool) or not isinstance(data, int):
            raise DecodeError(f"{SERVICE}: expected an integer count, got {data!r}")
        return data
