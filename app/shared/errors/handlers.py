"""
Centralized error handlers for FastAPI.

Maps advisory domain errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.advisory.errors import (
    AdvisoryDomainError,
    ClientAlreadyExistsError,
    ClientNotFoundError,
    InvalidAmountError,
    InvalidIdentifierError,
    InvalidProductSelectorError,
    InvalidTermError,
    InvestmentNotFoundError,
    NoApplicableRateError,
    PersistenceConflictError,
    PersistenceError,
    ProductNotFoundError,
    RiskProfileNotFoundError,
)

logger = logging.getLogger(__name__)

HTTP_404 = 404
HTTP_409 = 409
HTTP_422 = 422
HTTP_500 = 500

INVALID_INPUT_ERRORS = (
    InvalidAmountError,
    InvalidTermError,
    InvalidIdentifierError,
    InvalidProductSelectorError,
)


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    async def handle_invalid_input(
        _request: Request, exc: AdvisoryDomainError
    ) -> JSONResponse:
        """Handle rejected amounts, terms, identifiers and selectors."""
        logger.warning("Invalid input: %s", exc.message)
        return _error_response(HTTP_422, "Invalid input", exc.message)

    for error_type in INVALID_INPUT_ERRORS:
        app.add_exception_handler(error_type, handle_invalid_input)

    @app.exception_handler(ClientNotFoundError)
    async def handle_client_not_found(
        _request: Request, exc: ClientNotFoundError
    ) -> JSONResponse:
        """Handle missing client errors."""
        logger.warning("Client not found: %d", exc.client_id)
        return _error_response(HTTP_404, "Client not found", exc.message)

    @app.exception_handler(ProductNotFoundError)
    async def handle_product_not_found(
        _request: Request, exc: ProductNotFoundError
    ) -> JSONResponse:
        """Handle missing product or unknown category errors."""
        logger.warning("Product not found: %s", exc.product_ref)
        return _error_response(HTTP_404, "Product not found", exc.message)

    @app.exception_handler(RiskProfileNotFoundError)
    async def handle_profile_not_found(
        _request: Request, exc: RiskProfileNotFoundError
    ) -> JSONResponse:
        """Handle missing risk profile errors."""
        logger.warning("Risk profile not found: %d", exc.profile_id)
        return _error_response(HTTP_404, "Risk profile not found", exc.message)

    @app.exception_handler(InvestmentNotFoundError)
    async def handle_investment_not_found(
        _request: Request, exc: InvestmentNotFoundError
    ) -> JSONResponse:
        """Handle missing investment errors."""
        logger.warning(
            "Investment not found: client=%d investment=%d",
            exc.client_id,
            exc.investment_id,
        )
        return _error_response(HTTP_404, "Investment not found", exc.message)

    @app.exception_handler(NoApplicableRateError)
    async def handle_no_applicable_rate(
        _request: Request, exc: NoApplicableRateError
    ) -> JSONResponse:
        """Handle amounts outside every yield band of a product."""
        logger.warning("No applicable rate: product=%d", exc.product_id)
        return _error_response(HTTP_404, "No applicable rate", exc.message)

    @app.exception_handler(ClientAlreadyExistsError)
    async def handle_client_exists(
        _request: Request, exc: ClientAlreadyExistsError
    ) -> JSONResponse:
        """Handle duplicate client registration."""
        logger.warning("Client already registered: %d", exc.client_id)
        return _error_response(HTTP_409, "Client already registered", exc.message)

    @app.exception_handler(PersistenceConflictError)
    async def handle_conflict(
        _request: Request, exc: PersistenceConflictError
    ) -> JSONResponse:
        """Handle lost optimistic updates. The caller may retry."""
        logger.warning("Persistence conflict: %s", exc.reason)
        return _error_response(HTTP_409, "Concurrent update, retry the request")

    @app.exception_handler(PersistenceError)
    async def handle_persistence(
        _request: Request, exc: PersistenceError
    ) -> JSONResponse:
        """Handle storage failures without leaking driver details."""
        logger.error("Persistence failure: %s", exc.reason)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(AdvisoryDomainError)
    async def handle_advisory_domain(
        _request: Request, exc: AdvisoryDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled advisory domain errors."""
        logger.error("Unhandled advisory domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
