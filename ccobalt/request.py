"""The body of a download request sent to the API."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class AudioBitrate(str, Enum):
    KBPS_320 = "320"
    KBPS_256 = "256"
    KBPS_128 = "128"
    KBPS_96 = "96"
    KBPS_64 = "64"
    KBPS_8 = "8"


class AudioFormat(str, Enum):
    BEST = "best"
    MP3 = "mp3"
    OGG = "ogg"
    WAV = "wav"
    OPUS = "opus"


class DownloadMode(str, Enum):
    AUTO = "auto"
    AUDIO = "audio"
    MUTE = "mute"


class FilenameStyle(str, Enum):
    CLASSIC = "classic"
    PRETTY = "pretty"
    BASIC = "basic"
    NERDY = "nerdy"


class VideoQuality(str, Enum):
    MAX = "max"
    Q4320 = "4320"
    Q2160 = "2160"
    Q1440 = "1440"
    Q1080 = "1080"
    Q720 = "720"
    Q480 = "480"
    Q360 = "360"
    Q240 = "240"
    Q144 = "144"


class YoutubeVideoCodec(str, Enum):
    H264 = "h264"
    AV1 = "av1"
    VP9 = "vp9"


_ENUM_FIELDS = {
    "audio_bitrate": AudioBitrate,
    "audio_format": AudioFormat,
    "download_mode": DownloadMode,
    "filename_style": FilenameStyle,
    "video_quality": VideoQuality,
    "youtube_video_codec": YoutubeVideoCodec,
}

_BOOL_FIELDS = frozenset(
    {
        "disable_metadata",
        "always_proxy",
        "local_processing",
        "convert_gif",
        "allow_h265",
        "tiktok_full_audio",
        "youtube_better_audio",
        "youtube_hls",
    }
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


@dataclass
class DownloadRequest:
    """Options for resolving a media link; unset options use server defaults."""

    url: str
    audio_bitrate: Optional[AudioBitrate] = None
    audio_format: Optional[AudioFormat] = None
    download_mode: Optional[DownloadMode] = None
    filename_style: Optional[FilenameStyle] = None
    video_quality: Optional[VideoQuality] = None
    disable_metadata: Optional[bool] = None
    always_proxy: Optional[bool] = None
    local_processing: Optional[bool] = None
    youtube_video_codec: Optional[YoutubeVideoCodec] = None
    youtube_dub_lang: Optional[str] = None
    convert_gif: Optional[bool] = None
    allow_h265: Optional[bool] = None
    tiktok_full_audio: Optional[bool] = None
    youtube_better_audio: Optional[bool] = None
    youtube_hls: Optional[bool] = None

    def __post_init__(self) -> None:
        if not isinstance(self.url, str):
            raise TypeError("url must be a string")
        for name, enum_type in _ENUM_FIELDS.items():
            value = getattr(self, name)
            if value is None or isinstance(value, enum_type):
                continue
            if isinstance(value, int) and not isinstance(value, bool):
                value = str(value)
            setattr(self, name, enum_type(value))
        for name in _BOOL_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, bool):
                raise TypeError(f"{name} must be a bool")
        if self.youtube_dub_lang is not None and not isinstance(self.youtube_dub_lang, str):
            raise TypeError("youtube_dub_lang must be a string")

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON body with camelCase keys, leaving out unset options."""
        body: Dict[str, Any] = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is None:
                continue
            body[_camel(field.name)] = value.value if isinstance(value, Enum) else value
        return body

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DownloadRequest":
        if not isinstance(data, Mapping):
            raise ValueError("request must be an object")
        if "url" not in data:
            raise ValueError("request is missing 'url'")
        values = {
            field.name: data[_camel(field.name)]
            for field in fields(cls)
            if data.get(_camel(field.name)) is not None
        }
        return cls(**values)