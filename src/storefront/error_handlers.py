"""Exception-to-HTTP mapping for the storefront API.

Builds on Protean's FastAPI handlers and adds the storefront's own error
types. Every handled error is logged before its response is produced.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers

from storefront.exceptions import AuthenticationError, ConflictError, ExternalServiceError, WebhookVerificationError

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    content = {"message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Request rejected", path=request.url.path, errors=exc.messages)
    return _error_response(400, "Validation failed", exc.messages)


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    logger.info("Resource not found", path=request.url.path, error=str(exc))
    return _error_response(404, str(exc) or "Not found")


async def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
    logger.info("Conflict", path=request.url.path, error=exc.message)
    return _error_response(400, exc.message)


async def _unauthenticated(request: Request, exc: AuthenticationError) -> JSONResponse:
    return _error_response(401, exc.message)


async def _bad_webhook(request: Request, exc: WebhookVerificationError) -> JSONResponse:
    logger.warning("Webhook verification failed", path=request.url.path, error=exc.message)
    return _error_response(400, exc.message)


async def _external_service_error(request: Request, exc: ExternalServiceError) -> JSONResponse:
    logger.error("Payment gateway error", path=request.url.path, error=exc.message, **exc.context)
    return _error_response(500, exc.message)


async def _server_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return _error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    register_protean_handlers(app)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(ConflictError, _conflict)
    app.add_exception_handler(AuthenticationError, _unauthenticated)
    app.add_exception_handler(WebhookVerificationError, _bad_webhook)
    app.add_exception_handler(ExternalServiceError, _external_service_error)
    app.add_exception_handler(Exception, _server_error)
