"""
High-level asynchronous client for the Instagram API.
"""

from collections.abc import Mapping
from typing import Any

import httpx

from .client import BaseInstagramClient
from .log import LOG, bound_logging_vars
from .request_builder import Verb
from .response import StructuredResponse


class AsyncInstagramClient(BaseInstagramClient):
    """
    Asynchronous HTTP client for the Instagram REST API.

    Resource and facade methods return coroutines::

        async with AsyncInstagramClient(client_id="...", client_secret="...") as client:
            client.set_access_token(token)
            tag = await client.get_tag("#nofilter")
    """

    def __init__(self, *, client: httpx.AsyncClient | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)

        if client is not None:
            self._client = client
            self._owns_client = False
        else:
            self._client = httpx.AsyncClient(
                headers=self._headers,
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
            )
            self._owns_client = True

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncInstagramClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def execute(
        self,
        path: str,
        verb: Verb | str = Verb.GET,
        params: Mapping[str, Any] | None = None,
    ) -> StructuredResponse:
        verb, url, data = self._prepare(path, verb, params)

        with bound_logging_vars(verb=verb.value, path=self._log_target(path)):
            LOG.debug(f"{verb.value} {self._log_target(path)}")
            try:
                response = await self._client.request(
                    verb.value,
                    url,
                    data=data,
                    headers=self._headers,
                    timeout=self._config.timeout,
                )
            except httpx.RequestError as exc:
                raise self._transport_error(exc) from exc

            return self._handle_response(response)

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> StructuredResponse:
        return await self.execute(path, Verb.GET, params)

    async def post(self, path: str, params: Mapping[str, Any] | None = None) -> StructuredResponse:
        return await self.execute(path, Verb.POST, params)

    async def put(self, path: str, params: Mapping[str, Any] | None = None) -> StructuredResponse:
        return await self.execute(path, Verb.PUT, params)

    async def patch(self, path: str, params: Mapping[str, Any] | None = None) -> StructuredResponse:
        return await self.execute(path, Verb.PATCH, params)

    async def delete(self, path: str, params: Mapping[str, Any] | None = None) -> StructuredResponse:
        return await self.execute(path, Verb.DELETE, params)

    async def get_oauth_token(self, code: str, token_only: bool = False) -> Any:
        response = await self.oauth.exchange_code(code)
        if token_only:
            return response.get("access_token")
        return response
