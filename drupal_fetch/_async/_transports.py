from __future__ import annotations

import typing as tp

import httpx

from drupal_fetch._core.models import FetchInit
from drupal_fetch._utils import transport_extensions

__all__ = ("AsyncHttpxTransport", "default_async_transport")


class AsyncHttpxTransport:
    """
    Adapt an `httpx.AsyncClient` to the transport interface of the fetch operations.

    The client is owned by the caller; this object never closes it.

    Args:
        client: The client used to send every request.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def __call__(self, url: str, init: FetchInit) -> httpx.Response:
        kwargs: tp.Dict[str, tp.Any] = {}
        if "timeout" in init:
            kwargs["timeout"] = init["timeout"]

        return await self._client.request(
            init.get("method", "GET"),
            url,
            headers=list(dict(init.get("headers", {})).items()),
            extensions=transport_extensions(init),
            **kwargs,
        )


async def default_async_transport(url: str, init: FetchInit) -> httpx.Response:
    async with httpx.AsyncClient() as client:
        return await AsyncHttpxTransport(client)(url, init)
