from enum import Enum

from pydantic import BaseModel, Field, field_validator


class SinkKind(str, Enum):
    """Side-effect sinks that can be attached to an API lookup."""

    none = "none"
    console = "console"
    file = "file"


class CepLookupRequest(BaseModel):
    """Request model for CEP lookup via query parameters.

    The CEP is passed to the provider as-is; only blank values are rejected.
    Format problems are reported by ViaCEP itself (HTTP 400).
    """

    cep: str = Field(
        description="Brazilian postal code to look up, with or without the dash.",
        examples=["02266001", "01001-000"],
    )
    sink: SinkKind = Field(
        default=SinkKind.none,
        description="Optional sink that also receives the lookup result.",
        examples=["none", "console", "file"],
    )

    @field_validator("cep", mode="before")
    @classmethod
    def _validate_cep(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("cep is required")

        value_str = str(value).strip()
        if not value_str:
            raise ValueError("cep must not be blank")

        return value_str
