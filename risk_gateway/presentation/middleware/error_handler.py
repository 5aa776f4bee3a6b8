"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from risk_gateway.domain.exceptions import (
    DomainException,
    DecisionNotFoundException,
    InvalidConfigurationException,
    InvalidLoanRequestException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(DecisionNotFoundException)
    async def decision_not_found_handler(
        request: Request,
        exc: DecisionNotFoundException,
    ) -> JSONResponse:
        """Handle decision not found errors."""
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(InvalidLoanRequestException)
    async def invalid_request_handler(
        request: Request,
        exc: InvalidLoanRequestException,
    ) -> JSONResponse:
        """Handle invalid loan application errors."""
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(InvalidConfigurationException)
    async def invalid_configuration_handler(
        request: Request,
        exc: InvalidConfigurationException,
    ) -> JSONResponse:
        """Refuse to decide against an invalid configuration."""
        return _error_response(500, exc.code, exc.message)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
