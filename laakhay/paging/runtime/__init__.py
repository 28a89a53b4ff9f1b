"""Pagination runtime: iterators, factories and telemetry.

Architecture:
    The runtime layer consists of:
    - tokens.py: Token extraction/injection and item extraction helpers
    - iterator.py: Shared state machine and the synchronous PagingIterator
    - async_iterator.py: AsyncPagingIterator for awaitable operations
    - factory.py: Per-operation configuration resolution and delegation
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .async_iterator import AsyncPagingIterator
from .factory import IteratorClassFactory, PaginationIteratorFactory, iterator_class_for
from .iterator import BasePagingIterator, PagingIterator
from .tokens import apply_token, extract_items, extract_next_token, token_present

__all__ = [
    "BasePagingIterator",
    "PagingIterator",
    "AsyncPagingIterator",
    "PaginationIteratorFactory",
    "IteratorClassFactory",
    "iterator_class_for",
    "apply_token",
    "extract_items",
    "extract_next_token",
    "token_present",
]
