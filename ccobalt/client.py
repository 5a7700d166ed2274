"""Asynchronous client for a Cobalt API instance."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import httpx

from .errors import CobaltError
from .request import DownloadRequest
from .response import DownloadResponse, InfoResponse, parse_download_response, parse_info_response
from .stream import read_stream
from .write import save_to_file


def _validate_base_url(url: str) -> str:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ValueError(f"invalid base URL {url!r}") from exc
    if not parsed.scheme:
        raise ValueError(f"invalid base URL {url!r}: missing scheme")
    if parsed.scheme in ("http", "https") and not parsed.host:
        raise ValueError(f"invalid base URL {url!r}: missing host")
    return url


def _download_target(url: str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError):
        raise CobaltError("error.api.invalid_url") from None
    if not parsed.scheme or (parsed.scheme in ("http", "https") and not parsed.host):
        raise CobaltError("error.api.invalid_url")
    return parsed


class Client:
    """Talks to one API instance; use Client.builder() to configure one."""

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        bearer_token: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if api_key is not None and bearer_token is not None:
            raise ValueError("cannot set both api_key and bearer_token")
        self.base_url = _validate_base_url(base_url)
        self.api_key = api_key
        self.bearer_token = bearer_token
        self._owns_http = http is None
        self._http = http if http is not None else httpx.AsyncClient()

    def __repr__(self) -> str:
        return f"Client(base_url={self.base_url!r})"

    @classmethod
    def builder(cls) -> "ClientBuilder":
        return ClientBuilder()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    async def _fetch(self, request: httpx.Request) -> bytes:
        try:
            response = await self._http.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise CobaltError("error.api.unreachable") from exc
        try:
            return await response.aread()
        except httpx.HTTPError as exc:
            raise CobaltError("error.api.timed_out") from exc
        finally:
            await response.aclose()

    async def get_info(self) -> InfoResponse:
        """Return the version and capabilities of the API instance."""
        request = self._http.build_request(
            "GET", self.base_url, headers={"Accept": "application/json"}
        )
        body = await self._fetch(request)
        try:
            return parse_info_response(body)
        except ValueError as exc:
            raise CobaltError("error.api.unknown_response") from exc

    async def resolve_download(self, request: DownloadRequest) -> DownloadResponse:
        """Send a download request and return the parsed response."""
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.api_key is not None:
            headers["Authorization"] = f"Api-Key {self.api_key}"
        elif self.bearer_token is not None:
            headers["Authorization"] = f"Bearer {self.bearer_token}"
        http_request = self._http.build_request(
            "POST",
            self.base_url,
            headers=headers,
            content=request.to_json().encode("utf-8"),
        )
        body = await self._fetch(http_request)
        try:
            return parse_download_response(body)
        except ValueError as exc:
            raise CobaltError("error.api.unknown_response") from exc

    async def download(self, request: DownloadRequest) -> bytes:
        """Resolve the request and fetch the media from the returned URL."""
        response = await self.resolve_download(request)
        url = response.download_url()
        if url is None:
            raise CobaltError("error.api.no_download_url")
        target = _download_target(url)
        try:
            return await read_stream(self._http, target)
        except httpx.HTTPError as exc:
            raise CobaltError("error.api.download_failed") from exc

    async def download_and_save(
        self, request: DownloadRequest, base_name: str, directory: Union[str, Path]
    ) -> Path:
        """Download the media and save it under directory; return the file's path."""
        data = await self.download(request)
        try:
            return save_to_file(data, base_name, directory)
        except OSError as exc:
            raise CobaltError("error.api.save_failed") from exc


class ClientBuilder:
    """Step-by-step configuration of a Client."""

    def __init__(self) -> None:
        self._base_url: Optional[str] = None
        self._api_key: Optional[str] = None
        self._bearer_token: Optional[str] = None
        self._http: Optional[httpx.AsyncClient] = None

    def base_url(self, url: str) -> "ClientBuilder":
        """Set the API address; a trailing slash is added if missing."""
        url = str(url)
        self._base_url = url if url.endswith("/") else f"{url}/"
        return self

    def api_key(self, key: str) -> "ClientBuilder":
        self._api_key = key
        return self

    def bearer_token(self, token: str) -> "ClientBuilder":
        self._bearer_token = token
        return self

    def http_client(self, client: httpx.AsyncClient) -> "ClientBuilder":
        """Use this HTTP client instead of a new default one."""
        self._http = client
        return self

    def build(self) -> Client:
        """Create the client; raises ValueError if the configuration is invalid."""
        if self._base_url is None:
            raise ValueError("base_url is required")
        return Client(
            self._base_url,
            api_key=self._api_key,
            bearer_token=self._bearer_token,
            http=self._http,
        )