import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from marketplace.errors import ErrorType, ERROR_STATUS_MAP

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Custom exception that services can raise."""

    def __init__(self, error_type: ErrorType, message: str):
        self.error_type = error_type
        self.message = message
        super().__init__(message)


class NotFoundError(AppException):
    """Referenced entity (order, vendor, boost request, product) is absent."""

    def __init__(self, message: str):
        super().__init__(ErrorType.NOT_FOUND, message)


class AlreadyResolvedError(AppException):
    """Boost request is no longer pending."""

    def __init__(self, message: str):
        super().__init__(ErrorType.ALREADY_RESOLVED, message)


class UnauthorizedError(AppException):
    """Actor failed a view or role check.

    `public_message` is what the caller sees; it reads like a not-found
    response for the same resource.
    """

    def __init__(self, message: str, public_message: str = "Not found"):
        self.public_message = public_message
        super().__init__(ErrorType.UNAUTHORIZED, message)


class InconsistentDataError(AppException):
    """Stored data violates an invariant the resolver relies on."""

    def __init__(self, message: str):
        super().__init__(ErrorType.INCONSISTENT_DATA, message)


async def app_exception_handler(_request: Request, exc: AppException) -> JSONResponse:
    """Global handler for AppException - converts to proper HTTP response."""
    status_code = ERROR_STATUS_MAP.get(exc.error_type, 500)

    detail = exc.message
    if isinstance(exc, UnauthorizedError):
        logger.warning(f"Access denied: {exc.message}")
        detail = exc.public_message
    elif isinstance(exc, InconsistentDataError):
        logger.error(f"Inconsistent data: {exc.message}")
        detail = "Inconsistent promotional data"

    return JSONResponse(
        status_code=status_code,
        content={"detail": detail}
    )


async def generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled exceptions - returns 500."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )
