from typing import Any


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    kind: str = 'error'

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_content(self) -> dict[str, Any]:
        return {'detail': self.message, 'kind': self.kind}


class DomainError(CustomBaseError):
    kind = 'invalid_request'

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class InvalidRequestError(DomainError):
    """Malformed input the caller has to fix before retrying."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class InvalidStateError(DomainError):
    """Business rule violation against the current state (past event, cutoff, terminal status)."""

    kind = 'invalid_state'

    def __init__(self, message: str) -> None:
        super().__init__(message, 422)


class ForbiddenError(CustomBaseError):
    kind = 'forbidden'

    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    kind = 'not_found'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    kind = 'conflict'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class InsufficientCapacityError(CustomBaseError):
    kind = 'insufficient_capacity'

    def __init__(self, message: str, *, remaining: int) -> None:
        self.remaining = remaining
        super().__init__(message, 409)

    def to_content(self) -> dict[str, Any]:
        return super().to_content() | {'remaining': self.remaining}


class ContentionError(CustomBaseError):
    """Unit of work could not finish in time. Safe to retry with backoff."""

    kind = 'contention'

    def __init__(self, message: str, *, retry_after: int = 1) -> None:
        self.retry_after = retry_after
        super().__init__(message, 503)


class InternalError(CustomBaseError):
    kind = 'internal'

    def __init__(self, message: str = 'Internal server error') -> None:
        super().__init__(message, 500)


class AuthenticationError(CustomBaseError):
    kind = 'unauthenticated'

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class LoginError(CustomBaseError):
    kind = 'invalid_request'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)
