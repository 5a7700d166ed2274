"""Asynchronous client for downloading media through the Cobalt API."""

__version__ = "0.2.0"

__all__ = ["client", "errors", "filetype", "request", "response", "stream", "write"]