"""Custom exception hierarchy for Festival Match.

All application exceptions inherit from :class:`FestivalMatchError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "bandsintown", "worldtimeapi") caused the failure,
and an HTTP ``status_code`` the API layer uses when the error escapes a
route handler.

    FestivalMatchError  (base, 500)
    +-- ValidationError           (400: missing/empty required field)
    +-- AuthenticationError       (401: no session or expired session)
    +-- PermissionDeniedError     (403: authenticated but not allowed)
    +-- NotFoundError             (404)
    +-- ConflictError             (409: duplicate add, terminal state)
    +-- ProviderUnavailableError  (502: external service down / bad payload)
    +-- CatalogError              (500: festival catalog unreadable/unwritable)
    +-- ConfigurationError        (500: startup / missing config)

Upstream failures are normally handled locally (degraded payloads) and only
reach the client when a caller decides not to recover.
"""


class FestivalMatchError(Exception):
    """Base exception for all Festival Match errors.

    The ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[bandsintown] Request timed out``.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Client errors
# ---------------------------------------------------------------------------

class ValidationError(FestivalMatchError):
    """Raised when a required field is missing or empty."""

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid request",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class AuthenticationError(FestivalMatchError):
    """Raised when a request needs a session and has none (or it expired)."""

    status_code = 401

    def __init__(
        self,
        message: str = "Not authenticated",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PermissionDeniedError(FestivalMatchError):
    """Raised when an authenticated user lacks the required role."""

    status_code = 403

    def __init__(
        self,
        message: str = "Permission denied",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class NotFoundError(FestivalMatchError):
    """Raised when the requested record does not exist (or is not owned)."""

    status_code = 404

    def __init__(
        self,
        message: str = "Not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConflictError(FestivalMatchError):
    """Raised on duplicate adds and on transitions out of a terminal state."""

    status_code = 409

    def __init__(
        self,
        message: str = "Conflict",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External service / storage errors
# ---------------------------------------------------------------------------

class ProviderUnavailableError(FestivalMatchError):
    """Raised when an external service is unreachable or returns garbage.

    The tour-date service catches this and returns a degraded payload
    instead of failing the request.
    """

    status_code = 502

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class CatalogError(FestivalMatchError):
    """Raised when the festival catalog file cannot be read or written."""

    status_code = 500

    def __init__(
        self,
        message: str = "Festival catalog unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(FestivalMatchError):
    """Raised when configuration is invalid or missing at startup."""

    status_code = 500

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
