from collections.abc import Callable
from http import HTTPStatus
from typing import Any

import httpx

VIACEP_PAYLOAD: dict[str, Any] = {
    "cep": "02266-001",
    "logradouro": "Avenida Mazzei",
    "complemento": "até 1000 - lado par",
    "unidade": "",
    "bairro": "Vila Mazzei",
    "localidade": "São Paulo",
    "uf": "SP",
    "estado": "São Paulo",
    "regiao": "Sudeste",
    "ibge": "3550308",
    "gia": "1004",
    "ddd": "11",
    "siafi": "7107",
}


class MockResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = {} if payload is None else payload
        self.text = text

    def json(self) -> Any:
        return self._payload


class MockAsyncClient:
    """Minimal async context-manager mock for httpx.AsyncClient that records requested URLs."""

    def __init__(self, response: MockResponse, requested_urls: list[str] | None = None) -> None:
        self._response = response
        self.requested_urls = requested_urls if requested_urls is not None else []

    async def __aenter__(self) -> "MockAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str) -> MockResponse:
        self.requested_urls.append(url)
        return self._response


class FailingAsyncClient:
    """Async client that raises a RequestError on enter to simulate network failure."""

    def __init__(self, url: str, *args: Any, **kwargs: Any) -> None:
        self._url = url

    async def __aenter__(self) -> "FailingAsyncClient":
        request = httpx.Request("GET", self._url)
        raise httpx.RequestError("Network failure", request=request)

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str) -> MockResponse:
        return MockResponse(status_code=HTTPStatus.OK, payload={})


def make_fake_async_client(
    response: MockResponse, requested_urls: list[str] | None = None
) -> Callable[..., MockAsyncClient]:
    """Factory for a fake httpx.AsyncClient returning a fixed response.

    Pass a list as `requested_urls` to collect every URL the client was asked for.
    """

    def _fake_client(*args: Any, **kwargs: Any) -> MockAsyncClient:
        return MockAsyncClient(response, requested_urls)

    return _fake_client
