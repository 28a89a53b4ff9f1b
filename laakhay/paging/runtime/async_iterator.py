"""Paging iterator for awaitable operations."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from inspect import isawaitable
from time import perf_counter
from typing import Any, TypeVar

from ..models import IteratorOptions, PaginationConfig
from .iterator import BasePagingIterator

T = TypeVar("T")


class AsyncPagingIterator(BasePagingIterator, AsyncIterator[Any]):
    """Async counterpart of PagingIterator.

    Runs the same state machine; each page is one awaited ``execute()``.

    Example:
        >>> async with HTTPClient(base_url="https://api.example.com") as client:
        ...     operation = HTTPOperation("ListItems", client, "/items", params={"limit": 100})
        ...     async for item in factory.build(operation):
        ...         print(item)
    """

    def __init__(
        self,
        operation: Any,
        config: PaginationConfig | None = None,
        options: IteratorOptions | None = None,
    ) -> None:
        super().__init__(operation, config, options)
        self._page_source: AsyncIterator[list[Any]] | None = None
        self._item_source: AsyncIterator[Any] | None = None

    def __aiter__(self) -> AsyncPagingIterator:
        return self

    async def __anext__(self) -> Any:
        if self._item_source is None:
            self._item_source = self._iter_items()
        return await self._item_source.__anext__()

    def pages(self) -> AsyncIterator[list[Any]]:
        """Iterate page by page; shares its state with item iteration."""
        if self._page_source is None:
            self._page_source = self._iter_pages()
        return self._page_source

    async def to_list(self) -> list[Any]:
        return [item async for item in self]

    async def map(self, transform: Callable[[Any], T | Awaitable[T]]) -> AsyncIterator[T]:
        """Yield ``transform(item)``; awaitable results are awaited."""
        async for item in self:
            value = transform(item)
            if isawaitable(value):
                value = await value
            yield value

    async def filter(self, predicate: Callable[[Any], bool]) -> AsyncIterator[Any]:
        async for item in self:
            if predicate(item):
                yield item

    async def _iter_items(self) -> AsyncIterator[Any]:
        async for page in self.pages():
            for item in page:
                yield item

    async def _iter_pages(self) -> AsyncIterator[list[Any]]:
        while not self._limit_reached():
            items = self._accept_page(await self._fetch_page())
            if items:
                yield items
            if not self._more_pages():
                break
        self._complete()

    async def _fetch_page(self) -> list[Any]:
        retries = 0
        while True:
            operation = self._begin_request()
            started = perf_counter()
            try:
                response = await operation.execute()
            except Exception as e:
                self._fail_request(e)
                raise
            items = self._handle_response(response, started)
            if not self._should_refetch(items, retries):
                return items
            retries += 1
