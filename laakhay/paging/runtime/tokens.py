"""Continuation token extraction and injection."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core.exceptions import TokenShapeError
from ..core.protocols import ResponseDocument
from ..models import PaginationConfig


def token_present(token: Any) -> bool:
    """Whether ``token`` asks for another page.

    ``None`` and ``""`` are absent; a composite token is present when any of
    its parts is.
    """
    if isinstance(token, list):
        return any(token_present(part) for part in token)
    return token is not None and token != ""


def extract_next_token(config: PaginationConfig, response: ResponseDocument) -> Any:
    """Compute the token for the page after ``response``.

    Returns:
        None, a scalar token, or a list of token parts when composite
    """
    if config.more_results is not None and not response.get_path(config.more_results):
        return None
    if config.output_token is None:
        return None
    if isinstance(config.output_token, tuple):
        return [response.get_path(key) for key in config.output_token]
    return response.get_path(config.output_token)


def apply_token(config: PaginationConfig, operation: Any, token: Any) -> None:
    """Set ``token`` on the request parameter(s) named by ``input_token``.

    Raises:
        TokenShapeError: If a composite key and the token differ in shape
    """
    key = config.input_token
    if key is None:
        return
    if isinstance(key, tuple):
        if not isinstance(token, (list, tuple)) or len(token) != len(key):
            raise TokenShapeError(expected=list(key), token=token)
        for param, part in zip(key, token, strict=True):
            operation.set(param, part)
        return
    operation.set(key, token)


def extract_items(config: PaginationConfig, response: ResponseDocument) -> list[Any]:
    """Read the page's items; a missing or empty result path yields no items."""
    if config.result_key is None:
        return []
    found = response.get_path(config.result_key)
    if not found:
        return []
    if isinstance(found, (list, tuple)):
        return list(found)
    if isinstance(found, Mapping):
        return list(found.values())
    return [found]
