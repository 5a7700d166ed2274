"""Fetching a whole response body over HTTP."""

from __future__ import annotations

from typing import Union

import httpx


async def read_stream(http: httpx.AsyncClient, url: Union[str, httpx.URL]) -> bytes:
    """GET the URL and return the full response body, read chunk by chunk.

    Transport failures raise httpx.HTTPError. The status code is not checked.
    """
    data = bytearray()
    async with http.stream("GET", url) as response:
        async for chunk in response.aiter_bytes():
            data.extend(chunk)
    return bytes(data)