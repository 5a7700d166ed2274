"""Responses returned by the API."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from .errors import CobaltError

JsonInput = Union[str, bytes, bytearray, Mapping[str, Any]]


def _load(data: JsonInput) -> Mapping[str, Any]:
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    return _mapping(data, "response")


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be an object")
    return value


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _opt_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    return None if data.get(key) is None else _str(data, key)


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if not isinstance(value, bool):
        raise ValueError(f"field {key!r} must be a boolean")
    return value


def _opt_bool(data: Mapping[str, Any], key: str) -> Optional[bool]:
    return None if data.get(key) is None else _bool(data, key)


def _str_list(data: Mapping[str, Any], key: str) -> Tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"field {key!r} must be a list of strings")
    return tuple(value)


@dataclass(frozen=True)
class CobaltInfo:
    version: str
    url: str
    start_time: str
    turnstile_sitekey: str
    services: Tuple[str, ...]


@dataclass(frozen=True)
class GitInfo:
    branch: str
    commit: str
    remote: str


@dataclass(frozen=True)
class InfoResponse:
    """Version and capability details of an API instance."""

    cobalt: CobaltInfo
    git: GitInfo

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InfoResponse":
        data = _mapping(data, "info response")
        cobalt = _mapping(data.get("cobalt"), "field 'cobalt'")
        git = _mapping(data.get("git"), "field 'git'")
        return cls(
            cobalt=CobaltInfo(
                version=_str(cobalt, "version"),
                url=_str(cobalt, "url"),
                start_time=_str(cobalt, "startTime"),
                turnstile_sitekey=_str(cobalt, "turnstileSitekey"),
                services=_str_list(cobalt, "services"),
            ),
            git=GitInfo(
                branch=_str(git, "branch"),
                commit=_str(git, "commit"),
                remote=_str(git, "remote"),
            ),
        )


class LocalProcessingKind(str, Enum):
    MERGE = "merge"
    MUTE = "mute"
    AUDIO = "audio"
    GIF = "gif"
    REMUX = "remux"


@dataclass(frozen=True)
class OutputMetadata:
    album: Optional[str] = None
    copyright: Optional[str] = None
    title: Optional[str] = None
    artist: Optional[str] = None
    track: Optional[str] = None
    date: Optional[str] = None


@dataclass(frozen=True)
class Output:
    mime_type: str
    filename: str
    metadata: Optional[OutputMetadata] = None


@dataclass(frozen=True)
class Audio:
    copy: bool
    format: str
    bitrate: str


@dataclass(frozen=True)
class PickerItem:
    kind: str
    url: str
    thumb: Optional[str] = None


class DownloadResponse:
    """Base of the response variants to a download request."""

    def download_url(self) -> Optional[str]:
        """Return the URL the media can be fetched from, if there is one."""
        return None

    def is_error(self) -> bool:
        return isinstance(self, ErrorResponse)

    def is_tunnel(self) -> bool:
        return isinstance(self, TunnelResponse)

    def is_redirect(self) -> bool:
        return isinstance(self, RedirectResponse)

    def is_local_processing(self) -> bool:
        return isinstance(self, LocalProcessingResponse)

    def is_picker(self) -> bool:
        return isinstance(self, PickerResponse)


@dataclass(frozen=True)
class TunnelResponse(DownloadResponse):
    url: str
    filename: str

    def download_url(self) -> Optional[str]:
        return self.url


@dataclass(frozen=True)
class RedirectResponse(DownloadResponse):
    url: str
    filename: str

    def download_url(self) -> Optional[str]:
        return self.url


@dataclass(frozen=True)
class LocalProcessingResponse(DownloadResponse):
    kind: LocalProcessingKind
    service: str
    tunnel: Tuple[str, ...]
    output: Output
    audio: Optional[Audio] = None
    is_hls: Optional[bool] = None

    def download_url(self) -> Optional[str]:
        return self.tunnel[0] if self.tunnel else ""


@dataclass(frozen=True)
class PickerResponse(DownloadResponse):
    picker: Tuple[PickerItem, ...]
    audio: Optional[str] = None
    audio_filename: Optional[str] = None


@dataclass(frozen=True)
class ErrorResponse(DownloadResponse):
    error: CobaltError


def _parse_tunnel(data: Mapping[str, Any]) -> DownloadResponse:
    return TunnelResponse(url=_str(data, "url"), filename=_str(data, "filename"))


def _parse_redirect(data: Mapping[str, Any]) -> DownloadResponse:
    return RedirectResponse(url=_str(data, "url"), filename=_str(data, "filename"))


def _parse_output(value: Any) -> Output:
    data = _mapping(value, "field 'output'")
    raw_metadata = data.get("metadata")
    metadata = None
    if raw_metadata is not None:
        meta = _mapping(raw_metadata, "field 'metadata'")
        metadata = OutputMetadata(
            album=_opt_str(meta, "album"),
            copyright=_opt_str(meta, "copyright"),
            title=_opt_str(meta, "title"),
            artist=_opt_str(meta, "artist"),
            track=_opt_str(meta, "track"),
            date=_opt_str(meta, "date"),
        )
    return Output(
        mime_type=_str(data, "type"),
        filename=_str(data, "filename"),
        metadata=metadata,
    )


def _parse_local_processing(data: Mapping[str, Any]) -> DownloadResponse:
    kind = _str(data, "type")
    try:
        processing_kind = LocalProcessingKind(kind)
    except ValueError:
        raise ValueError(f"unknown local processing type {kind!r}") from None
    raw_audio = data.get("audio")
    audio = None
    if raw_audio is not None:
        audio_data = _mapping(raw_audio, "field 'audio'")
        audio = Audio(
            copy=_bool(audio_data, "copy"),
            format=_str(audio_data, "format"),
            bitrate=_str(audio_data, "bitrate"),
        )
    return LocalProcessingResponse(
        kind=processing_kind,
        service=_str(data, "service"),
        tunnel=_str_list(data, "tunnel"),
        output=_parse_output(data.get("output")),
        audio=audio,
        is_hls=_opt_bool(data, "isHLS"),
    )


def _parse_picker(data: Mapping[str, Any]) -> DownloadResponse:
    items = data.get("picker")
    if not isinstance(items, list):
        raise ValueError("field 'picker' must be a list")
    picker = tuple(
        PickerItem(
            kind=_str(item, "type"),
            url=_str(item, "url"),
            thumb=_opt_str(item, "thumb"),
        )
        for item in (_mapping(raw, "picker item") for raw in items)
    )
    return PickerResponse(
        picker=picker,
        audio=_opt_str(data, "audio"),
        audio_filename=_opt_str(data, "audioFilename"),
    )


def _parse_error(data: Mapping[str, Any]) -> DownloadResponse:
    return ErrorResponse(error=CobaltError.from_dict(_mapping(data.get("error"), "field 'error'")))


_PARSERS: Dict[str, Callable[[Mapping[str, Any]], DownloadResponse]] = {
    "tunnel": _parse_tunnel,
    "redirect": _parse_redirect,
    "local-processing": _parse_local_processing,
    "picker": _parse_picker,
    "error": _parse_error,
}


def parse_download_response(data: JsonInput) -> DownloadResponse:
    """Parse a download response from JSON text or a decoded object.

    Raises ValueError if the data is not a valid response.
    """
    body = _load(data)
    status = body.get("status")
    parser = _PARSERS.get(status) if isinstance(status, str) else None
    if parser is None:
        raise ValueError(f"unknown response status {status!r}")
    return parser(body)


def parse_info_response(data: JsonInput) -> InfoResponse:
    """Parse an info response from JSON text or a decoded object."""
    return InfoResponse.from_dict(_load(data))