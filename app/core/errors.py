"""Error taxonomy shared by repositories, services and routes.

Each error carries a human-readable message and the HTTP status it maps to.
The FastAPI app registers a single handler for AppError (see app.main), so
routes raise these instead of building HTTPException by hand.
"""


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class InputValidationError(AppError):
    """Malformed or missing input that schema validation cannot express."""

    status_code = 400


class AuthenticationError(AppError):
    """Bad credentials or an unusable bearer token."""

    status_code = 401


class AuthorizationError(AppError):
    """Authenticated, but not allowed to perform the operation."""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Username or email already taken."""

    status_code = 400


class InfrastructureError(AppError):
    """Store or external provider unavailable. Never retried here."""

    status_code = 503


class InvalidOperationError(AppError):
    """Programming-contract violation, e.g. committing an empty change-set."""

    status_code = 500
