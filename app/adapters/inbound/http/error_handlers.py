"""Projection of domain and validation errors onto HTTP responses."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.application.dtos.error import ErrorResponse
from app.domain.exceptions import (
    BusinessError,
    InvalidArgumentError,
    ResourceNotFoundError,
    VehicleQuotaExceededError,
)
from app.infrastructure.logging.logger import log_event, logger

INTERNAL_ERROR_MESSAGE = "Une erreur interne est survenue"
VALIDATION_ERROR_MESSAGE = "Erreur de validation des données"

# Location prefixes that are not part of the field name
_LOCATION_PREFIXES = {"body", "query", "path"}

# French messages per pydantic error type, filled from the error context
_VALIDATION_MESSAGES = {
    "missing": "champ obligatoire",
    "string_type": "doit être une chaîne de caractères",
    "string_too_short": "doit contenir au moins {min_length} caractère(s)",
    "string_too_long": "doit contenir au plus {max_length} caractère(s)",
    "string_pattern_mismatch": "format invalide",
    "greater_than": "doit être strictement supérieur à {gt}",
    "greater_than_equal": "doit être supérieur ou égal à {ge}",
    "less_than": "doit être strictement inférieur à {lt}",
    "less_than_equal": "doit être inférieur ou égal à {le}",
    "int_type": "doit être un nombre entier",
    "int_parsing": "doit être un nombre entier",
    "int_from_float": "doit être un nombre entier",
    "decimal_type": "doit être un nombre décimal",
    "decimal_parsing": "doit être un nombre décimal",
    "decimal_max_digits": "ne doit pas dépasser {max_digits} chiffres",
    "decimal_max_places": "ne doit pas dépasser {decimal_places} décimales",
    "enum": "doit être l'une des valeurs suivantes : {expected}",
    "dict_type": "doit être un objet",
    "model_attributes_type": "doit être un objet",
    "json_invalid": "JSON invalide",
}


def create_error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: Optional[list[str]] = None,
) -> JSONResponse:
    """
    Create the uniform error body.

    Args:
        request: Failing request (its path is echoed back)
        status_code: HTTP status
        error: Short error tag, e.g. "Not Found"
        message: Human readable message
        details: Field level messages for validation errors

    Returns:
        JSON response
    """
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=status_code,
        error=error,
        message=message,
        path=request.url.path,
        details=details,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def translate_validation_message(error: dict) -> str:
    """
    Render a pydantic error message in French.

    Messages raised by the DTO validators are already French and are kept as
    they are. Unknown error types fall back to the pydantic message.

    Args:
        error: One entry of ValidationError.errors()

    Returns:
        Message without the field name
    """
    error_type = error.get("type", "")
    context = error.get("ctx") or {}
    if error_type == "value_error":
        if "reason" in context:
            return "adresse email invalide"
        if "error" in context:
            return str(context["error"])
    template = _VALIDATION_MESSAGES.get(error_type)
    if template is None:
        return error.get("msg", "")
    return template.format(**context)


def format_validation_error(error: dict) -> str:
    """Render one pydantic error as "field: message"."""
    location = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
    field = ".".join(location)
    message = translate_validation_message(error)
    return f"{field}: {message}" if field else message


def handle_resource_not_found(request: Request, exc: ResourceNotFoundError) -> JSONResponse:
    return create_error_response(request, status.HTTP_404_NOT_FOUND, "Not Found", exc.message)


def handle_quota_exceeded(request: Request, exc: VehicleQuotaExceededError) -> JSONResponse:
    log_event(
        component="http",
        event="vehicle_quota_exceeded",
        path=request.url.path,
        garage=exc.garage_ref,
    )
    return create_error_response(request, status.HTTP_409_CONFLICT, "Quota Exceeded", exc.message)


def handle_invalid_argument(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    return create_error_response(
        request, status.HTTP_400_BAD_REQUEST, "Invalid Argument", exc.message
    )


def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    return create_error_response(request, status.HTTP_400_BAD_REQUEST, "Invalid Argument", str(exc))


def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report every constraint violation of the request at once."""
    details = [format_validation_error(error) for error in exc.errors()]
    return create_error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Validation Error",
        VALIDATION_ERROR_MESSAGE,
        details=details,
    )


def handle_business_error(request: Request, exc: BusinessError) -> JSONResponse:
    return create_error_response(
        request, status.HTTP_400_BAD_REQUEST, "Business Error", exc.message
    )


def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure and answer with an opaque message."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}")
    return create_error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        INTERNAL_ERROR_MESSAGE,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the error projection on an application.

    Starlette resolves handlers along the exception MRO, so the most specific
    handler wins (e.g. DuplicateEmailError goes to the InvalidArgumentError handler).

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(ResourceNotFoundError, handle_resource_not_found)
    app.add_exception_handler(VehicleQuotaExceededError, handle_quota_exceeded)
    app.add_exception_handler(InvalidArgumentError, handle_invalid_argument)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(BusinessError, handle_business_error)
    app.add_exception_handler(ValueError, handle_value_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
