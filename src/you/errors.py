"""Error taxonomy shared by the tracker and LLM clients."""


class YouError(Exception):
    """Base exception for all you errors."""

    pass


class ConfigError(YouError):
    """Invalid or missing configuration (e.g. no credential in the environment)."""

    pass


class TransportError(YouError):
    """The HTTP call itself failed: connection refused, DNS, timeout."""

    pass


class DecodeError(YouError):
    """Response body was not valid JSON or did not have the expected shape."""

    pass


class InvalidRequestError(YouError):
    """Request rejected locally, or a response carried nothing usable."""

    pass


class UnauthorizedError(YouError):
    """HTTP 401."""

    def __init__(self, service: str = "API"):
        self.service = service
        super().__init__(f"{service}: authentication failed (missing or invalid token)")


class ForbiddenError(YouError):
    """HTTP 403."""

    def __init__(self, service: str = "API"):
        self.service = service
        super().__init__(f"{service}: access forbidden")


class NotFoundError(YouError):
    """HTTP 404. `resource` holds the raw response body."""

    def __init__(self, resource: str, service: str = "API"):
        self.resource = resource
        self.service = service
        super().__init__(f"{service}: resource not found: {resource}")


class RateLimitedError(YouError):
    """HTTP 429 with the parsed `retry-after` header, if any."""

    def __init__(self, retry_after: int | None = None, service: str = "API"):
        self.retry_after = retry_after
        self.service = service
        super().__init__(f"{service}: rate limit exceeded, retry after: {retry_after}")


class ApiError(YouError):
    """Any other non-2xx response. Carries the raw status and best-effort message."""

    def __init__(self, status: int, message: str, service: str = "API"):
        self.status = status
        self.message = message
        self.service = service
        super().__init__(f"{service} error: {status} - {message}")
