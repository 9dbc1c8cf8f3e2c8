"""Maps domain exceptions to the ``{result: "NG", ...}`` error envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from staffing_api.domain.exceptions import (
    AllocationExhaustedError,
    EntityNotFoundError,
    PreconditionFailedError,
    PreconditionRequiredError,
    RecordValidationError,
    StoreError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def _client_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"result": "NG", "message": message})


def _server_error(error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"result": "NG", "error": error},
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on ``app``. Call once from create_app()."""

    @app.exception_handler(EntityNotFoundError)
    async def handle_not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
        return _client_error(status.HTTP_404_NOT_FOUND, f"{exc.entity_type} not found")

    @app.exception_handler(RecordValidationError)
    async def handle_invalid_record(request: Request, exc: RecordValidationError) -> JSONResponse:
        return _client_error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(PreconditionRequiredError)
    async def handle_missing_token(request: Request, exc: PreconditionRequiredError) -> JSONResponse:
        return _client_error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(PreconditionFailedError)
    async def handle_stale_token(request: Request, exc: PreconditionFailedError) -> JSONResponse:
        return _client_error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _client_error(status.HTTP_400_BAD_REQUEST, _describe_validation_errors(exc))

    @app.exception_handler(AllocationExhaustedError)
    async def handle_allocation_exhausted(request: Request, exc: AllocationExhaustedError) -> JSONResponse:
        logger.warning("%s %s: %s", request.method, request.url.path, exc)
        return _server_error("Max attempts reached")

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("%s %s: %s", request.method, request.url.path, exc)
        return _server_error(INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _server_error(INTERNAL_ERROR_MESSAGE)
