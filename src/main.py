from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request, status
from pydantic import ValidationError

from src import settings
from src.clients.base import BaseCepLookupClient
from src.clients.viacep_client import ViaCepClient
from src.errors import CepNotFoundError, InvalidCepError, UpstreamServiceError
from src.exception_handlers import (
    pydantic_validation_exception_handler,
    unhandled_exception_handler,
)
from src.logger import logger
from src.models.common import CepLookupResult, CepSink
from src.models.request_models import CepLookupRequest, SinkKind
from src.models.response_models import CepLookupResponse, HealthResponse
from src.sinks.console import ConsoleSink
from src.sinks.file import FileSink

app = FastAPI(
    title="CEP Lookup Service",
    version="0.1.0",
    description="Looks up Brazilian postal codes on ViaCEP and hands the result to a sink.",
)
logger.info("Started CEP Lookup Service")


def get_cep_lookup_client() -> BaseCepLookupClient:
    """Dependency to provide the CEP lookup client."""
    return ViaCepClient()


def get_file_sink() -> FileSink:
    """Dependency to provide the file sink writing into the configured output directory."""
    return FileSink(settings.OUTPUT_DIR)


# Register global exception handlers using the shared handlers module.
app.add_exception_handler(ValidationError, pydantic_validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="ok")


@app.get(
    "/v1/cep/lookup",
    response_model=CepLookupResponse,
    status_code=status.HTTP_200_OK,
    tags=["cep"],
    summary="Look up the address of a Brazilian postal code.",
)
async def cep_lookup(
    request: Request,
    query: Annotated[CepLookupRequest, Depends()],
    client: Annotated[BaseCepLookupClient, Depends(get_cep_lookup_client)],
    file_sink: Annotated[FileSink, Depends(get_file_sink)],
) -> CepLookupResponse:
    """Look up a CEP and return the address.

    The result is collected through a sink like any other caller would do.
    When `query.sink` is `console` or `file`, that sink receives the result too;
    a file write is awaited before responding so its outcome is settled.
    """
    cep = query.cep
    collected: list[CepLookupResult] = []
    side_effect: CepSink | None = None
    if query.sink is SinkKind.console:
        side_effect = ConsoleSink()
    elif query.sink is SinkKind.file:
        side_effect = file_sink

    def collect(result: CepLookupResult) -> None:
        collected.append(result)
        if side_effect is not None:
            side_effect(result)

    logger.info(f"Performing CEP lookup path={request.url.path} method={request.method} cep={cep} sink={query.sink}")
    try:
        await client.lookup_cep(cep, collect)
    except InvalidCepError as exc:
        logger.error(f"Invalid CEP during lookup path={request.url.path} cep={cep} error={exc}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "invalid_cep", "message": str(exc), "cep": cep},
        ) from exc
    except CepNotFoundError as exc:
        logger.error(f"CEP not found during lookup path={request.url.path} cep={cep} error={exc}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "cep_not_found", "message": str(exc), "cep": cep},
        ) from exc
    except UpstreamServiceError as exc:
        logger.exception(f"Upstream CEP provider error during lookup path={request.url.path} cep={cep} error={exc}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "upstream_error", "message": str(exc), "cep": cep},
        ) from exc

    if query.sink is SinkKind.file:
        await file_sink.drain()

    result = collected[0]
    if result.not_found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "cep_not_found", "message": "ViaCEP has no address for this CEP.", "cep": cep},
        )

    return CepLookupResponse(cep=cep, sink=query.sink, address=result.as_payload())
