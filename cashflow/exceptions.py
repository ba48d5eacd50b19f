class AppError(Exception):
    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(AppError):
    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"{resource} '{resource_id}' not found", code="NOT_FOUND")


class ValidationError(AppError):
    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class ConflictError(AppError):
    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")


class UnauthorizedError(AppError):
    def __init__(self, message: str):
        super().__init__(message, code="UNAUTHORIZED")


class InvalidPeriodError(AppError):
    def __init__(self, period: str, valid: list[str]):
        self.period = period
        super().__init__(
            f"Invalid period '{period}'. Use: {', '.join(valid)}",
            code="INVALID_PERIOD",
        )


class UserNotFoundError(AppError):
    """The authenticated identity has no profile yet (registration incomplete)."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(
            f"User '{user_id}' has not completed registration",
            code="USER_NOT_FOUND",
        )


class UpstreamFetchError(AppError):
    """The storage call itself failed. Not retried here."""

    def __init__(self, message: str):
        super().__init__(message, code="UPSTREAM_FETCH_FAILED")
