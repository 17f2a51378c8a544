from enum import Enum


class ErrorType(Enum):
    NOT_FOUND = "not_found"
    ALREADY_RESOLVED = "already_resolved"
    UNAUTHORIZED = "unauthorized"
    INCONSISTENT_DATA = "inconsistent_data"
    INVALID_REQUEST = "invalid_request"
    INTERNAL_ERROR = "internal_error"


# Map error types to HTTP status codes.
# Unauthorized renders as 404 so records the actor cannot see are never confirmed.
ERROR_STATUS_MAP = {
    ErrorType.NOT_FOUND: 404,
    ErrorType.UNAUTHORIZED: 404,
    ErrorType.ALREADY_RESOLVED: 409,
    ErrorType.INVALID_REQUEST: 400,
    ErrorType.INCONSISTENT_DATA: 500,
    ErrorType.INTERNAL_ERROR: 500,
}
