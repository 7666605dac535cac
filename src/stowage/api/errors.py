"""HTTP mapping for stowage errors.

Protean's handlers cover plain validation failures. Rule violations that are
conflicts with current state answer 409, store failures answer 503.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from stowage.errors import CapacityExceeded, Conflict, InvalidMove, NoCapacity, StoreFailure
from stowage.utils.logging import get_logger

logger = get_logger(__name__)

CONFLICT_ERRORS = (Conflict, CapacityExceeded, NoCapacity, InvalidMove)


async def _validation_error(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": exc.messages})


async def _conflict_error(request: Request, exc: ValidationError):
    return JSONResponse(status_code=409, content={"error": exc.messages})


async def _not_found_error(request: Request, exc: ObjectNotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


async def _request_validation_error(request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path"))
        errors.setdefault(field or "request", []).append(error["msg"])
    return JSONResponse(status_code=400, content={"error": errors})


async def _store_failure(request: Request, exc: StoreFailure):
    logger.error("Request failed in storage layer", path=request.url.path, operation=exc.operation)
    return JSONResponse(status_code=503, content={"error": str(exc)})


def register_error_handlers(app: FastAPI):
    """Install Protean's exception handlers plus the stowage-specific mapping."""
    register_exception_handlers(app)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found_error)
    for error_cls in CONFLICT_ERRORS:
        app.add_exception_handler(error_cls, _conflict_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(StoreFailure, _store_failure)
