"""Exception classes for the Cloud Foundry client."""

from __future__ import annotations

from typing import Any


class CloudFoundryError(Exception):
    """Base exception for all cfclient errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TransportError(CloudFoundryError):
    """The request could not be completed by the HTTP transport.

    Attributes:
        cause: The underlying exception, if any.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class ConnectionError(TransportError):
    """Failed to connect to the Cloud Controller.

    This error is raised when:
    - Network is unavailable
    - API host is unreachable
    """

    def __init__(
        self,
        message: str = "Failed to connect to the Cloud Controller",
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause)


class TimeoutError(TransportError):
    """Request timed out.

    This error is raised when a single HTTP request takes longer than the
    configured client timeout. Waiting on an asynchronous operation raises
    PollTimeoutError instead.
    """

    def __init__(
        self,
        message: str = "Request timed out",
        timeout_seconds: float | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(message, cause)


class APIError(TransportError):
    """Error returned by the Cloud Controller.

    Attributes:
        status_code: HTTP status code from the API.
        errors: Error entries from the v3 error envelope
            (each with ``code``, ``title`` and ``detail``).
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(f"[{status_code}] {message}")

    @property
    def title(self) -> str | None:
        """Title of the first error entry, e.g. ``CF-ResourceNotFound``."""
        if self.errors:
            return self.errors[0].get("title")
        return None

    @property
    def is_retryable(self) -> bool:
        """Check if this error is retryable.

        Returns:
            True if the error could be resolved by retrying.
        """
        # 429 Too Many Requests, 500+ Server Errors
        return self.status_code == 429 or self.status_code >= 500


class AuthenticationError(APIError):
    """Authentication failed.

    This error is raised when:
    - No access token is available
    - The token is invalid or has expired
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(401, message, errors)


class ForbiddenError(APIError):
    """The authenticated user is not allowed to perform the operation."""

    def __init__(
        self,
        message: str = "Forbidden",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(403, message, errors)


class NotFoundError(APIError):
    """Resource not found.

    This error is raised when:
    - A GUID doesn't exist (404 from the API)
    - A name lookup through ``single`` matches nothing
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: str = "",
        errors: list[dict[str, Any]] | None = None,
        message: str | None = None,
    ) -> None:
        self.resource = resource
        self.resource_id = resource_id
        if message is None:
            message = (
                f"{resource} '{resource_id}' not found" if resource_id else f"{resource} not found"
            )
        super().__init__(404, message, errors)


class ConflictError(APIError):
    """Resource conflict, e.g. a name already taken in the space."""

    def __init__(
        self,
        message: str = "Resource conflict",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(409, message, errors)


class ValidationError(APIError):
    """Request validation failed (unprocessable entity)."""

    def __init__(
        self,
        message: str = "Validation error",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(422, message, errors)


class RateLimitError(APIError):
    """Rate limit exceeded.

    Attributes:
        retry_after: Seconds to wait before retrying (if provided by API).
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.retry_after = retry_after
        super().__init__(429, message, errors)


class PaginationError(CloudFoundryError):
    """Pagination could not be performed."""


class MalformedPaginationLinkError(PaginationError):
    """The next-page link has no usable ``page`` query parameter."""

    def __init__(self, href: str) -> None:
        self.href = href
        super().__init__(f"Malformed pagination link: '{href}'")


class NoNextPageError(PaginationError):
    """Advancing was requested but the current page is the last one."""

    def __init__(self) -> None:
        super().__init__("No next page to advance to")


class AmbiguousResultError(CloudFoundryError):
    """More than one resource matched where exactly one was expected.

    Attributes:
        count: Number of matches seen (a lower bound when more pages exist).
    """

    def __init__(self, resource: str = "resource", count: int = 2) -> None:
        self.resource = resource
        self.count = count
        super().__init__(f"Expected exactly one {resource}, but found {count}")


class OperationFailedError(CloudFoundryError):
    """An asynchronous operation reached a failure state.

    Attributes:
        state: The terminal failure state, e.g. ``FAILED``.
        reason: Failure reason reported by the server, if any.
    """

    def __init__(self, state: str, reason: str | None = None) -> None:
        self.state = state
        self.reason = reason
        message = f"Operation reached state {state}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PollTimeoutError(CloudFoundryError):
    """No terminal state was observed before the polling deadline."""

    def __init__(self, timeout_seconds: float, last_state: str | None = None) -> None:
        self.timeout_seconds = timeout_seconds
        self.last_state = last_state
        super().__init__(
            f"Timed out after {timeout_seconds}s waiting for a terminal state "
            f"(last state: {last_state})"
        )


class PollCancelledError(CloudFoundryError):
    """Polling was aborted through its cancellation signal."""

    def __init__(self, message: str = "Polling cancelled") -> None:
        super().__init__(message)


class PushError(CloudFoundryError):
    """A step of the app push pipeline failed.

    Attributes:
        step: Name of the failing step, e.g. ``wait for build``.
        subject: The org, space or app the step was working on.
        cause: The underlying exception.
    """

    def __init__(self, step: str, subject: str, cause: Exception) -> None:
        self.step = step
        self.subject = subject
        self.cause = cause
        super().__init__(f"push failed at '{step}' for {subject}: {cause}")


def raise_for_status(status_code: int, response_data: dict[str, Any] | None = None) -> None:
    """Raise an appropriate exception for an HTTP status code.

    Cloud Controller v3 errors come wrapped in an envelope::

        {"errors": [{"code": 10010, "title": "CF-ResourceNotFound", "detail": "App not found"}]}

    Args:
        status_code: HTTP status code.
        response_data: Parsed JSON response data.

    Raises:
        AuthenticationError: For 401 status.
        ForbiddenError: For 403 status.
        NotFoundError: For 404 status.
        ConflictError: For 409 status.
        ValidationError: For 422 status.
        RateLimitError: For 429 status.
        APIError: For other 4xx/5xx status codes.
    """
    if status_code < 400:
        return

    data = response_data or {}
    errors = data.get("errors") or []
    message = (
        (errors[0].get("detail") if errors else None)
        or data.get("description")
        or data.get("message")
        or "Unknown error"
    )

    if status_code == 401:
        raise AuthenticationError(message, errors)
    elif status_code == 403:
        raise ForbiddenError(message, errors)
    elif status_code == 404:
        raise NotFoundError(errors=errors, message=message)
    elif status_code == 409:
        raise ConflictError(message, errors)
    elif status_code == 422:
        raise ValidationError(message, errors)
    elif status_code == 429:
        retry_after = data.get("retry_after")
        raise RateLimitError(message, retry_after, errors)
    else:
        raise APIError(status_code, message, errors)
