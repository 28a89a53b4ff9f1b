"""I/O layer: aiohttp-backed operations."""

from .http_client import HTTPClient
from .operation import DEFAULT_USER_AGENT, HTTPOperation

__all__ = [
    "HTTPClient",
    "HTTPOperation",
    "DEFAULT_USER_AGENT",
]
