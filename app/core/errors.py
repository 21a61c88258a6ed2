"""Domain errors raised by the auth services and translated to HTTP by app.main."""


class AppError(Exception):
    """
    Base error for expected failures of a service operation.

    is_operational separates expected client errors (logged as noise) from
    server faults (logged as incidents).
    """

    status_code = 500

    def __init__(
        self,
        name: str,
        message: str,
        status_code: int | None = None,
        is_operational: bool = True,
    ) -> None:
        self.name = name
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.is_operational = is_operational
        super().__init__(message)


class ConflictError(AppError):
    status_code = 409

    def __init__(self, name: str, message: str) -> None:
        super().__init__(name, message)


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, name: str, message: str) -> None:
        super().__init__(name, message)


class UnauthorizedError(AppError):
    """Bad credentials, missing role or unknown token subject (uniform messages)."""

    status_code = 401

    def __init__(self, name: str, message: str | None = None) -> None:
        super().__init__(name, message or name)


class ForbiddenError(AppError):
    status_code = 403

    def __init__(self, name: str, message: str | None = None) -> None:
        super().__init__(name, message or name)


class InternalError(AppError):
    """Unexpected server-side fault (store write failed, etc.)."""

    status_code = 500

    def __init__(self, message: str, name: str = "Internal server error") -> None:
        super().__init__(name, message, is_operational=False)


class ConfigurationError(InternalError):
    """A required setting (e.g. a token signing secret) is missing."""
