"""Error taxonomy shared by services and routes.

Services raise these; the exception handler in ``nas_api.main`` renders them
as ``{"error": message}`` with the class's HTTP status.
"""


class NasApiError(Exception):
    """Base class for errors that terminate a request with a JSON error body."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BadRequestError(NasApiError):
    """Malformed or missing request fields."""

    status_code = 400


class InvalidPathError(BadRequestError):
    """Path rejected by the path policy (traversal or outside the storage root)."""


class ProtectedAccountError(BadRequestError):
    """Attempt to delete the bootstrap admin account."""


class InvalidCredentialsError(NasApiError):
    """Unknown username or wrong password. The message never says which."""

    status_code = 401


class UnauthenticatedError(NasApiError):
    """No usable bearer token on a protected request."""

    status_code = 401


class SessionNotFoundError(UnauthenticatedError):
    """Token does not name a live session."""


class SessionExpiredError(UnauthenticatedError):
    """Token named a session whose TTL has passed; the session has been evicted."""


class ForbiddenError(NasApiError):
    """Authenticated caller lacks the required role."""

    status_code = 403


class NotFoundError(NasApiError):
    status_code = 404


class ConflictError(NasApiError):
    status_code = 409


class InternalFailureError(NasApiError):
    """Entropy source or password hashing failure."""

    status_code = 500
