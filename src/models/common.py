from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict


class CepLookupResult(BaseModel):
    """Address data returned by ViaCEP for a single CEP.

    The named fields mirror the documented ViaCEP JSON response. Anything else
    the provider sends is kept as an extra field, so the result always carries
    the body exactly as it was received. Unassigned codes come back as
    ``{"erro": true}`` (older deployments send the string ``"true"``).
    """

    model_config = ConfigDict(extra="allow")

    cep: str | None = None
    logradouro: str | None = None
    complemento: str | None = None
    unidade: str | None = None
    bairro: str | None = None
    localidade: str | None = None
    uf: str | None = None
    estado: str | None = None
    regiao: str | None = None
    ibge: str | None = None
    gia: str | None = None
    ddd: str | None = None
    siafi: str | None = None
    erro: bool | str | None = None

    @property
    def not_found(self) -> bool:
        """True when the provider flagged the CEP as unassigned."""
        return self.erro is True or str(self.erro).lower() == "true"

    def as_payload(self) -> dict[str, Any]:
        """Return the provider body as it was deserialized, without defaults."""
        return self.model_dump(exclude_unset=True)


# A sink is any callable taking one lookup result; whatever it returns is ignored.
CepSink = Callable[[CepLookupResult], object]

# XML lookups hand the raw document text to the sink.
CepXmlSink = Callable[[str], object]
