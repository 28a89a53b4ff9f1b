"""Structured logging for pagination.

This module provides telemetry hooks for iterators, emitting structured
logs for each page, retry and completed iteration.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    operation: str,
    request_index: int,
    items: int,
    has_next_token: bool,
    latency_ms: float | None = None,
) -> None:
    """Log one executed page request.

    Args:
        operation: Operation name
        request_index: Zero-based index of the request within the iteration
        items: Number of items extracted from the response
        has_next_token: Whether the response carried a continuation token
        latency_ms: Latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={
            "operation": operation,
            "request_index": request_index,
            "items": items,
            "has_next_token": has_next_token,
            "latency_ms": latency_ms,
        },
    )


def log_empty_page_retry(*, operation: str, retries: int, token: Any) -> None:
    """Log an empty page that still carried a continuation token."""
    logger.info(
        "empty_page_retry",
        extra={
            "operation": operation,
            "retries": retries,
            "token": repr(token),
        },
    )


def log_iteration_complete(
    *,
    operation: str,
    request_count: int,
    retrieved_count: int,
    yielded_count: int,
) -> None:
    """Log the end of an iteration.

    Args:
        operation: Operation name
        request_count: Requests sent, including empty-page retries
        retrieved_count: Items received from the backend
        yielded_count: Items handed to the caller
    """
    logger.info(
        "iteration_complete",
        extra={
            "operation": operation,
            "request_count": request_count,
            "retrieved_count": retrieved_count,
            "yielded_count": yielded_count,
        },
    )


def log_page_error(
    *,
    operation: str,
    request_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a page request that raised."""
    logger.error(
        "page_error",
        extra={
            "operation": operation,
            "request_index": request_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )
