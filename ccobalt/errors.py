"""Errors reported by the Cobalt API and by the client."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any, Mapping, Optional

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

_MESSAGES = {
    "error.api.unreachable": "API unreachable (try again later)",
    "error.api.timed_out": "API timeout (try again later)",
    "error.api.rate_exceeded": "Rate limited (try again later)",
    "error.api.capacity": "API busy (try again later)",
    "error.api.generic": "General API error (try again later)",
    "error.api.unknown_response": (
        "Download failure. Make sure the link is valid. (unknown response)"
    ),
    "error.api.service.unsupported": "That service or website is not supported.",
    "error.api.service.disabled": (
        "Downloading from that service or website is temporarily disabled."
    ),
    "error.api.link.invalid": "That link is invalid. Make sure it is correct.",
    "error.api.link.unsupported": "That link or format is unsupported.",
    "error.api.fetch.fail": (
        "Failed to fetch the media. Make sure the link is valid, or try again later."
    ),
    "error.api.fetch.critical": (
        "Critical error fetching the media. Make sure the link is valid, "
        "or try again later."
    ),
    "error.api.fetch.empty": (
        "The service or website returned no data. This may be caused by the "
        "site blocking the downloader (try again later)"
    ),
    "error.api.fetch.rate": (
        "The service or website has rate limited the downloader (try again later)"
    ),
    "error.api.fetch.short_link": (
        "Unable to resolve the shortlink. Try using the full link to the media."
    ),
    "error.api.content.too_long": "The requested content is too big.",
    "error.api.content.video.unavailable": (
        "That video is unavailable. Make sure it is not region or age "
        "restricted, and is not private."
    ),
    "error.api.content.video.live": "Live videos are unsupported.",
    "error.api.content.video.private": "That video is private.",
    "error.api.content.video.age": "That video is age restricted.",
    "error.api.content.video.region": "That video is region restricted.",
    "error.api.content.post.unavailable": (
        "That post is unavailable. Make sure it is not region or age "
        "restricted, and is not private."
    ),
    "error.api.content.post.private": "That post is private.",
    "error.api.content.post.age": "That post is age restricted.",
    "error.api.youtube.codec": "Missing YouTube codec. This is a bug.",
    "error.api.youtube.decipher": (
        "Cannot decipher that video. Something probably broke."
    ),
    "error.api.youtube.login": (
        "That video requires a logged in account, which we do not have."
    ),
    "error.api.youtube.token_expired": "Our YouTube token expired (try again later)",
}


def describe_error(code: str) -> str:
    """Return a human-readable message for an error code, or the code itself."""
    return _MESSAGES.get(code.translate(_ASCII_LOWER), code)


@dataclass(frozen=True)
class ErrorContext:
    """Extra details the API may attach to an error."""

    service: Optional[str] = None
    limit: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ErrorContext":
        if not isinstance(data, Mapping):
            raise ValueError("error context must be an object")
        service = data.get("service")
        if service is not None and not isinstance(service, str):
            raise ValueError("error context 'service' must be a string")
        limit = data.get("limit")
        if limit is not None:
            if isinstance(limit, bool) or not isinstance(limit, int):
                raise ValueError("error context 'limit' must be an integer")
            if not 0 <= limit <= 0xFFFFFFFF:
                raise ValueError("error context 'limit' is out of range")
        return cls(service=service, limit=limit)


class CobaltError(Exception):
    """An error code from the API or from the client, with optional context."""

    def __init__(self, code: str, context: Optional[ErrorContext] = None) -> None:
        super().__init__(code)
        self.code = code
        self.context = context

    def __str__(self) -> str:
        return describe_error(self.code)

    def __repr__(self) -> str:
        return f"CobaltError(code={self.code!r}, context={self.context!r})"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CobaltError":
        if not isinstance(data, Mapping):
            raise ValueError("error must be an object")
        code = data.get("code")
        if not isinstance(code, str):
            raise ValueError("error 'code' must be a string")
        raw_context = data.get("context")
        context = None if raw_context is None else ErrorContext.from_dict(raw_context)
        return cls(code, context)