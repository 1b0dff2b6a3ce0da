from http import HTTPStatus
from typing import Any

import httpx
from pydantic import ValidationError

from src import settings
from src.clients.base import BaseCepLookupClient
from src.errors import CepNotFoundError, InvalidCepError, UpstreamServiceError
from src.logger import logger
from src.models.common import CepLookupResult, CepSink, CepXmlSink


class ViaCepClient(BaseCepLookupClient):
    """Client for the https://viacep.com.br/ postal code API.

    Each lookup performs exactly one GET against ``/ws/{cep}/json/`` and hands
    the parsed body to the caller's sink. Nothing is cached or retried, and the
    client keeps no reference to the sink once the call returns.
    """

    def __init__(
        self,
        base_url: str = settings.VIACEP_BASE_URL,
        timeout_seconds: float = settings.VIACEP_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    async def lookup_cep(self, cep: str, sink: CepSink | None = None) -> None:
        """Look up a CEP and invoke `sink` with the result.

        The sink is called at most once, and only when it is callable. Provider
        failures raise before the sink is reached, so it never sees a partial
        or malformed result.
        """
        result = await self.fetch_cep(cep)
        self._deliver(cep, result, sink)

    async def lookup_cep_xml(self, cep: str, sink: CepXmlSink | None = None) -> None:
        """Look up a CEP using the XML endpoint and invoke `sink` with the raw document."""
        url = f"{self._base_url}/ws/{cep}/xml/"
        response = await self._request(url)
        self._deliver(cep, response.text, sink)

    async def fetch_cep(self, cep: str) -> CepLookupResult:
        url = f"{self._base_url}/ws/{cep}/json/"
        response = await self._request(url)
        data = self._parse_json(response)

        try:
            result = CepLookupResult.model_validate(data)
        except ValidationError as exc:
            raise UpstreamServiceError(f"CEP provider returned an unexpected address payload: {exc}") from exc

        if result.not_found:
            # Unassigned codes are valid answers; they flow to the sink unchanged.
            logger.info(f"ViaCEP has no address for cep={cep}")
        return result

    async def _request(self, url: str) -> httpx.Response:
        logger.debug(f"Requesting CEP data url={url}")
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                response = await client.get(url)
        except httpx.RequestError as exc:
            raise UpstreamServiceError(f"Request to CEP provider failed: {repr(exc)}") from exc

        self._handle_http_errors(response)
        return response

    def _handle_http_errors(self, response: httpx.Response) -> None:
        """Map HTTP status codes from the provider to domain-specific errors."""
        status_code = response.status_code

        if status_code == HTTPStatus.BAD_REQUEST:
            # ViaCEP answers 400 when the CEP is not eight digits.
            raise InvalidCepError(f"CEP provider rejected the request as malformed (HTTP 400): {response.text}")

        if status_code == HTTPStatus.NOT_FOUND:
            raise CepNotFoundError("No address information found for this CEP (HTTP 404).")

        if status_code == HTTPStatus.TOO_MANY_REQUESTS:
            raise UpstreamServiceError("CEP provider rate limit exceeded (HTTP 429).")

        if HTTPStatus.BAD_REQUEST <= status_code < HTTPStatus.INTERNAL_SERVER_ERROR:
            raise UpstreamServiceError(f"CEP provider returned HTTP {status_code}: {response.text}")

        if status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
            raise UpstreamServiceError(f"CEP provider returned HTTP {status_code}: {response.text}")

    @staticmethod
    def _parse_json(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamServiceError(f"Failed to decode CEP provider response as JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise UpstreamServiceError(f"CEP provider returned a non-object JSON body: {type(data).__name__}")
        return data

    @staticmethod
    def _deliver(cep: str, result: Any, sink: Any) -> None:
        if sink is None:
            logger.debug(f"No sink supplied, discarding result for cep={cep}")
            return
        if not callable(sink):
            logger.debug(f"Sink is not callable ({type(sink).__name__}), discarding result for cep={cep}")
            return
        sink(result)
