"""Shared HTTP plumbing: session setup and status-code classification."""

import logging

import requests

from ..core.completions import parse_error_message
from ..errors import (
    ApiError,
    DecodeError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    TransportError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


def build_session(proxy: str | None = None) -> requests.Session:
    """Create a session, routing all traffic through `proxy` when given."""
    session = requests.Session()
    if proxy:
        session.proxies.update({"http": proxy, "https": proxy})
    return session


def parse_retry_after(value: str | None) -> int | None:
    """Numeric `retry-after` seconds, or None if absent/unparseable."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def check_response(resp: requests.Response, service: str, rate_limit: bool = False) -> None:
    """
    Raise the matching error for a non-2xx response.

    401, 403, 404 map to dedicated errors regardless of body. 429 maps to
    RateLimitedError only when `rate_limit` is set; otherwise it falls
    through to ApiError like any other status.
    """
    status = resp.status_code
    if 200 <= status < 300:
        return

    if status == 401:
        raise UnauthorizedError(service)
    if status == 403:
        raise ForbiddenError(service)
    if status == 404:
        raise NotFoundError(resp.text, service)
    if status == 429 and rate_limit:
        retry_after = parse_retry_after(resp.headers.get("retry-after"))
        logger.warning(f"{service} rate limit exceeded, retry after: {retry_after}")
        raise RateLimitedError(retry_after, service)

    body = resp.text
    logger.warning(f"{service} error response {status}: {body[:500]}")
    raise ApiError(status, parse_error_message(body) or body, service)


def decode_json(resp: requests.Response, service: str):
    """Decode a success body. An empty body decodes to None."""
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError as e:
        raise DecodeError(f"{service}: failed to parse JSON: {e}") from e


def send(session: requests.Session, service: str, method: str, url: str, **kwargs) -> requests.Response:
    """Issue the request, turning transport failures into TransportError."""
    try:
        return session.request(method, url, **kwargs)
    except requests.Timeout as e:
        raise TransportError(f"{service}: request timed out: {e}") from e
    except requests.RequestException as e:
        raise TransportError(f"{service}: HTTP request failed: {e}") from e
