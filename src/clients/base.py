from abc import ABC, abstractmethod

from src.models.common import CepLookupResult, CepSink


class BaseCepLookupClient(ABC):
    """Abstract base for all CEP lookup clients.

    Concrete implementations (e.g. ViaCEP, BrasilAPI) fetch the address data for
    a CEP and hand it to an optional caller-supplied sink.
    """

    @abstractmethod
    async def fetch_cep(self, cep: str) -> CepLookupResult:
        """Fetch and parse the address data for a CEP."""
        raise NotImplementedError

    @abstractmethod
    async def lookup_cep(self, cep: str, sink: CepSink | None = None) -> None:
        """Look up a CEP and deliver the result to `sink`, if one is given."""
        raise NotImplementedError
