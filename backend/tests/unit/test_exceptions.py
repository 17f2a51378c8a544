import json
import pytest

from marketplace.errors import ErrorType, ERROR_STATUS_MAP
from marketplace.exceptions import (
    AlreadyResolvedError,
    AppException,
    InconsistentDataError,
    NotFoundError,
    UnauthorizedError,
    app_exception_handler,
    generic_exception_handler,
)


class TestErrorTaxonomy:
    """Tests for exception types and status mapping."""

    def test_subclasses_carry_error_type(self):
        assert NotFoundError("x").error_type == ErrorType.NOT_FOUND
        assert AlreadyResolvedError("x").error_type == ErrorType.ALREADY_RESOLVED
        assert UnauthorizedError("x").error_type == ErrorType.UNAUTHORIZED
        assert InconsistentDataError("x").error_type == ErrorType.INCONSISTENT_DATA

    def test_all_are_app_exceptions(self):
        for exc in (NotFoundError("x"), AlreadyResolvedError("x"), UnauthorizedError("x"), InconsistentDataError("x")):
            assert isinstance(exc, AppException)

    def test_unauthorized_maps_to_not_found_status(self):
        assert ERROR_STATUS_MAP[ErrorType.UNAUTHORIZED] == ERROR_STATUS_MAP[ErrorType.NOT_FOUND] == 404


class TestHandlers:
    """Tests for the FastAPI exception handlers."""

    @pytest.mark.asyncio
    async def test_unauthorized_hides_reason(self):
        """Test the internal reason is not leaked to the caller."""
        exc = UnauthorizedError("vendor user-9 may not view order o1", public_message="Order not found")

        response = await app_exception_handler(None, exc)

        assert response.status_code == 404
        assert json.loads(response.body) == {"detail": "Order not found"}

    @pytest.mark.asyncio
    async def test_already_resolved(self):
        response = await app_exception_handler(None, AlreadyResolvedError("Boost request already approved"))

        assert response.status_code == 409
        assert json.loads(response.body) == {"detail": "Boost request already approved"}

    @pytest.mark.asyncio
    async def test_inconsistent_data(self):
        response = await app_exception_handler(None, InconsistentDataError("two active flash sales"))

        assert response.status_code == 500
        assert json.loads(response.body) == {"detail": "Inconsistent promotional data"}

    @pytest.mark.asyncio
    async def test_generic_handler(self):
        response = await generic_exception_handler(None, RuntimeError("boom"))

        assert response.status_code == 500
        assert json.loads(response.body) == {"detail": "Internal server error"}
