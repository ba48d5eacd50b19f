from fastapi import Request
from fastapi.responses import JSONResponse

from cashflow.exceptions import (
    AppError,
    ConflictError,
    InvalidPeriodError,
    NotFoundError,
    UnauthorizedError,
    UpstreamFetchError,
    UserNotFoundError,
    ValidationError,
)


def _error_response(status_code: int, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(500, exc)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(404, exc)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(422, exc)


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return _error_response(409, exc)


async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return _error_response(401, exc)


async def invalid_period_handler(request: Request, exc: InvalidPeriodError) -> JSONResponse:
    return _error_response(400, exc)


async def user_not_found_handler(request: Request, exc: UserNotFoundError) -> JSONResponse:
    return _error_response(400, exc)


async def upstream_fetch_handler(request: Request, exc: UpstreamFetchError) -> JSONResponse:
    return _error_response(500, exc)


def register_exception_handlers(app):
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(UnauthorizedError, unauthorized_handler)
    app.add_exception_handler(InvalidPeriodError, invalid_period_handler)
    app.add_exception_handler(UserNotFoundError, user_not_found_handler)
    app.add_exception_handler(UpstreamFetchError, upstream_fetch_handler)
    app.add_exception_handler(AppError, app_error_handler)
