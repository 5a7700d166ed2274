# ccobalt

An asynchronous Python client for the Cobalt media-download API, built on `httpx`.

It can query an instance for its info, resolve a download request into a
response (tunnel, redirect, local processing, picker or error), fetch the
media bytes, and save them to disk under an extension guessed from the
file's leading bytes.

## Installation

```
pip install ccobalt
```

## Usage

```python
import asyncio

from ccobalt.client import Client
from ccobalt.errors import CobaltError
from ccobalt.request import DownloadRequest, DownloadMode, VideoQuality


async def main():
    client = (
        Client.builder()
        .base_url("https://cobalt.example.com")
        .api_key("placeholder")
        .build()
    )
    async with client:
        try:
            info = await client.get_info()
            print(info.cobalt.version, info.cobalt.services)

            request = DownloadRequest(
                url="https://example.com/video",
                download_mode=DownloadMode.AUTO,
                video_quality=VideoQuality.Q1080,
            )
            path = await client.download_and_save(request, "video", "downloads")
            print("saved to", path)
        except CobaltError as error:
            print("failed:", error)


asyncio.run(main())
```

### Configuring the client

`Client.builder()` returns a `ClientBuilder` with the methods `base_url`,
`api_key`, `bearer_token` and `http_client`, each returning the builder, and
`build()`. A trailing slash is added to the base URL if it has none.
`build()` raises `ValueError` if no base URL was set, if the URL is invalid,
or if both an API key and a bearer token were set.

If no `http_client` is supplied, the client creates its own
`httpx.AsyncClient`; `await client.aclose()` (or leaving `async with client:`)
closes only a client it created itself.

The API key is sent as `Authorization: Api-Key <key>`, the bearer token as
`Authorization: Bearer <token>`, on download requests only.

### Download requests

`ccobalt.request.DownloadRequest` is a dataclass holding the URL and optional
settings (`audio_bitrate`, `audio_format`, `download_mode`, `filename_style`,
`video_quality`, `youtube_video_codec`, `youtube_dub_lang` and a number of
boolean switches). The enum fields also accept their string values, such as
`"1080"` or `"mp3"`. `to_dict()` and `to_json()` produce the camelCase body,
leaving out options that are not set, so the server's defaults apply;
`from_dict()` reads such a body back.

### Inspecting a response

`Client.resolve_download` returns one of `TunnelResponse`, `RedirectResponse`,
`LocalProcessingResponse`, `PickerResponse` or `ErrorResponse` from
`ccobalt.response`, all `DownloadResponse` subclasses. Each offers
`is_tunnel()`, `is_redirect()`, `is_local_processing()`, `is_picker()`,
`is_error()` and `download_url()`. `parse_download_response` and
`parse_info_response` parse JSON text or a decoded object directly and raise
`ValueError` on invalid data.

`Client.download` fetches the bytes from the tunnel or redirect URL, or from
the first tunnel URL of a local-processing response. Picker and error
responses have no download URL.

### Errors

Failures of the client's API calls are raised as `ccobalt.errors.CobaltError`.
Its `code` holds the error code, such as `error.api.unreachable`,
`error.api.unknown_response`, `error.api.no_download_url`,
`error.api.download_failed` or `error.api.save_failed`. An error returned by
the API itself arrives as an `ErrorResponse` whose `error` is a `CobaltError`
with an optional `ErrorContext`. `str(error)` gives a readable message for
known codes and the code itself otherwise; `describe_error(code)` returns the
same message without an exception.

### File type detection

`ccobalt.filetype.detect_file_type(data)` recognises GIF, JPEG, PNG, WebP,
MP4, WebM, MP3 and ZIP from their leading bytes and returns a `FileType`
(with `extension()`, `mime()` and `is_video()`) or `None`.
`ccobalt.write.save_to_file` uses it to choose the extension and falls back
to `.bin`. The target directory must already exist.

## What it does not do

The package is a library only: it has no command-line tool, and it does not
create download directories or handle the individual items of a picker
response for you.

## Running the tests

```
pip install -e ".[test]"
pytest
```