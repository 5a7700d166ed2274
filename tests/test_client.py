import json

import httpx
import pytest
import respx

from ccobalt.client import Client, ClientBuilder
from ccobalt.errors import CobaltError
from ccobalt.request import AudioFormat, DownloadMode, DownloadRequest
from ccobalt.response import TunnelResponse

API = "https://api.example.com/"
MEDIA = "https://media.example.com/file"

INFO = {
    "cobalt": {
        "version": "10.0.0",
        "url": API,
        "startTime": "1700000000000",
        "turnstileSitekey": "sitekey",
        "services": ["youtube", "tiktok"],
    },
    "git": {"branch": "main", "commit": "abc123", "remote": "example/cobalt"},
}

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _client(**kwargs):
    builder = Client.builder().base_url("https://api.example.com")
    if "api_key" in kwargs:
        builder = builder.api_key(kwargs["api_key"])
    if "bearer_token" in kwargs:
        builder = builder.bearer_token(kwargs["bearer_token"])
    return builder.build()


def test_builder_appends_trailing_slash():
    client = Client.builder().base_url("https://api.example.com").build()
    assert client.base_url == API


def test_builder_keeps_existing_slash():
    client = ClientBuilder().base_url(API).build()
    assert client.base_url == API


def test_builder_requires_base_url():
    with pytest.raises(ValueError):
        ClientBuilder().build()


def test_builder_rejects_both_credentials():
    builder = ClientBuilder().base_url(API).api_key("placeholder").bearer_token("token")
    with pytest.raises(ValueError):
        builder.build()


def test_builder_rejects_relative_url():
    with pytest.raises(ValueError):
        ClientBuilder().base_url("not a url").build()


@pytest.mark.asyncio
async def test_builder_uses_given_http_client():
    with respx.mock() as router:
        router.get(API).mock(return_value=httpx.Response(200, json=INFO))
        async with httpx.AsyncClient(headers={"X-Probe": "yes"}) as http:
            client = ClientBuilder().base_url(API).http_client(http).build()
            await client.get_info()
            await client.aclose()
            assert not http.is_closed
        sent = router.calls.last.request
    assert sent.headers["X-Probe"] == "yes"


@pytest.mark.asyncio
async def test_get_info_parses_response():
    with respx.mock() as router:
        route = router.get(API).mock(return_value=httpx.Response(200, json=INFO))
        async with _client() as client:
            info = await client.get_info()
    assert info.cobalt.version == "10.0.0"
    assert info.cobalt.services == ("youtube", "tiktok")
    assert info.git.commit == "abc123"
    assert route.calls.last.request.headers["Accept"] == "application/json"


@pytest.mark.asyncio
async def test_get_info_unreachable():
    with respx.mock() as router:
        router.get(API).mock(side_effect=httpx.ConnectError("refused"))
        async with _client() as client:
            with pytest.raises(CobaltError) as info:
                await client.get_info()
    assert info.value.code == "error.api.unreachable"
    assert str(info.value) == "API unreachable (try again later)"


@pytest.mark.asyncio
async def test_get_info_unknown_response():
    with respx.mock() as router:
        router.get(API).mock(return_value=httpx.Response(200, content=b"<html>"))
        async with _client() as client:
            with pytest.raises(CobaltError) as info:
                await client.get_info()
    assert info.value.code == "error.api.unknown_response"


@pytest.mark.asyncio
async def test_resolve_download_sends_body_and_api_key():
    request = DownloadRequest(
        url=MEDIA, audio_format=AudioFormat.MP3, download_mode=DownloadMode.AUDIO
    )
    reply = {"status": "tunnel", "url": MEDIA, "filename": "file.mp3"}
    with respx.mock() as router:
        route = router.post(API).mock(return_value=httpx.Response(200, json=reply))
        async with _client(api_key="placeholder") as client:
            response = await client.resolve_download(request)
    sent = route.calls.last.request
    assert json.loads(sent.content) == request.to_dict()
    assert sent.headers["Authorization"] == "Api-Key placeholder"
    assert sent.headers["Content-Type"] == "application/json"
    assert response == TunnelResponse(url=MEDIA, filename="file.mp3")


@pytest.mark.asyncio
async def test_resolve_download_bearer_token():
    reply = {"status": "redirect", "url": MEDIA, "filename": "file.mp4"}
    with respx.mock() as router:
        route = router.post(API).mock(return_value=httpx.Response(200, json=reply))
        async with _client(bearer_token="token") as client:
            response = await client.resolve_download(DownloadRequest(url=MEDIA))
    assert route.calls.last.request.headers["Authorization"] == "Bearer token"
    assert response.is_redirect()


@pytest.mark.asyncio
async def test_resolve_download_without_credentials():
    reply = {"status": "redirect", "url": MEDIA, "filename": "file.mp4"}
    with respx.mock() as router:
        route = router.post(API).mock(return_value=httpx.Response(200, json=reply))
        async with _client() as client:
            await client.resolve_download(DownloadRequest(url=MEDIA))
    assert "Authorization" not in route.calls.last.request.headers


@pytest.mark.asyncio
async def test_resolve_download_error_response():
    reply = {"status": "error", "error": {"code": "error.api.link.invalid"}}
    with respx.mock() as router:
        router.post(API).mock(return_value=httpx.Response(400, json=reply))
        async with _client() as client:
            response = await client.resolve_download(DownloadRequest(url=MEDIA))
    assert response.is_error()
    assert response.error.code == "error.api.link.invalid"


@pytest.mark.asyncio
async def test_download_fetches_tunnel_url():
    reply = {"status": "tunnel", "url": MEDIA, "filename": "file.png"}
    with respx.mock() as router:
        router.post(API).mock(return_value=httpx.Response(200, json=reply))
        router.get(MEDIA).mock(return_value=httpx.Response(200, content=PNG))
        async with _client() as client:
            data = await client.download(DownloadRequest(url=MEDIA))
    assert data == PNG


@pytest.mark.asyncio
async def test_download_picker_has_no_url():
    reply = {"status": "picker", "picker": [{"type": "photo", "url": MEDIA}]}
    with respx.mock() as router:
        router.post(API).mock(return_value=httpx.Response(200, json=reply))
        async with _client() as client:
            with pytest.raises(CobaltError) as info:
                await client.download(DownloadRequest(url=MEDIA))
    assert info.value.code == "error.api.no_download_url"


@pytest.mark.asyncio
async def test_download_empty_tunnel_is_invalid_url():
    reply = {
        "status": "local-processing",
        "type": "merge",
        "service": "youtube",
        "tunnel": [],
        "output": {"type": "video/mp4", "filename": "file.mp4"},
    }
    with respx.mock() as router:
        router.post(API).mock(return_value=httpx.Response(200, json=reply))
        async with _client() as client:
            with pytest.raises(CobaltError) as info:
                await client.download(DownloadRequest(url=MEDIA))
    assert info.value.code == "error.api.invalid_url"


@pytest.mark.asyncio
async def test_download_stream_failure():
    reply = {"status": "tunnel", "url": MEDIA, "filename": "file.png"}
    with respx.mock() as router:
        router.post(API).mock(return_value=httpx.Response(200, json=reply))
        router.get(MEDIA).mock(side_effect=httpx.ConnectError("refused"))
        async with _client() as client:
            with pytest.raises(CobaltError) as info:
                await client.download(DownloadRequest(url=MEDIA))
    assert info.value.code == "error.api.download_failed"


@pytest.mark.asyncio
async def test_download_and_save_writes_file(tmp_path):
    reply = {"status": "tunnel", "url": MEDIA, "filename": "file.png"}
    with respx.mock() as router:
        router.post(API).mock(return_value=httpx.Response(200, json=reply))
        router.get(MEDIA).mock(return_value=httpx.Response(200, content=PNG))
        async with _client() as client:
            path = await client.download_and_save(DownloadRequest(url=MEDIA), "media", tmp_path)
    assert path == tmp_path / "media.png"
    assert path.read_bytes() == PNG


@pytest.mark.asyncio
async def test_download_and_save_failure(tmp_path):
    reply = {"status": "tunnel", "url": MEDIA, "filename": "file.png"}
    missing = tmp_path / "missing"
    with respx.mock() as router:
        router.post(API).mock(return_value=httpx.Response(200, json=reply))
        router.get(MEDIA).mock(return_value=httpx.Response(200, content=PNG))
        async with _client() as client:
            with pytest.raises(CobaltError) as info:
                await client.download_and_save(DownloadRequest(url=MEDIA), "media", missing)
    assert info.value.code == "error.api.save_failed"
    assert not missing.exists()