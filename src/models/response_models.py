from typing import Any

from pydantic import BaseModel

from src.models.request_models import SinkKind


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str


class CepLookupResponse(BaseModel):
    """Response model for CEP lookup."""

    cep: str
    sink: SinkKind
    address: dict[str, Any]
