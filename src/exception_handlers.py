from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.logger import logger


def _get_cep_from_request(request: Request) -> str | None:
    """Best-effort extraction of the cep value from the incoming request.

    Currently this looks at the `cep` query parameter used by /v1/cep/lookup.
    For other endpoints this will typically be None.
    """
    return request.query_params.get("cep")


def _build_validation_error_payload(exc: ValidationError) -> dict:
    """Normalize validation errors into a minimal `code`/`message` payload."""
    if any(tuple(error.get("loc", ()))[-1:] == ("cep",) for error in exc.errors()):
        return {"code": "invalid_cep", "message": "The supplied CEP must not be blank."}
    return {"code": "invalid_request", "message": "Invalid request parameters"}


async def pydantic_validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handle Pydantic validation errors raised during dependency resolution."""
    cep = _get_cep_from_request(request)
    logger.info(
        "Pydantic validation error during request handling "
        f"path={request.url.path} method={request.method} cep={cep} errors={exc.errors()}"
    )
    payload = _build_validation_error_payload(exc)
    payload["cep"] = cep
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors to return a structured 500 response."""
    cep = _get_cep_from_request(request)
    logger.exception(
        f"Unhandled exception while processing request: {repr(exc)} "
        f"path={request.url.path} method={request.method} cep={cep}"
    )
    content: dict[str, Any] = {
        "code": "internal_error",
        "message": "An unexpected error occurred while processing the request.",
        "cep": cep,
    }
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )
