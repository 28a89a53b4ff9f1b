"""Paging iterator state machine.

This module provides the shared request/extract/continue logic and the
synchronous PagingIterator that drives an Operation page by page.

Architecture:
    Each page goes through the same steps:
    - Start from a fresh clone of the caller's operation (never mutated)
    - Negotiate the page size against the iterator's limit and page size
    - Apply the current continuation token
    - Execute, extract items and compute the next token
    - Retry immediately when a page is empty but still carries a token

    The state lives in BasePagingIterator; PagingIterator and
    AsyncPagingIterator only differ in how a request is executed.

See Also:
    - AsyncPagingIterator: Same state machine over awaitable operations
    - PaginationIteratorFactory: Builds iterators from per-operation config
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from time import perf_counter
from typing import Any, TypeVar

from ..core.exceptions import EmptyPageLimitError
from ..core.operation import ITERATOR_USER_AGENT, USER_AGENT_OPTION, as_document
from ..core.protocols import ResponseDocument
from ..models import IteratorOptions, PaginationConfig
from .telemetry import (
    log_empty_page_retry,
    log_iteration_complete,
    log_page_error,
    log_page_fetched,
)
from .tokens import apply_token, extract_items, extract_next_token, token_present

T = TypeVar("T")

PageHook = Callable[[Any, ResponseDocument], None]


def _as_number(value: Any) -> int | float | None:
    """Read a request limit as a number; bools and non-numeric values give None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class BasePagingIterator:
    """Iteration state shared by the sync and async iterators.

    Attributes:
        config: Key names used to read and write tokens, limits and items
        options: Tuning options (total limit, page size, retry bound)
    """

    def __init__(
        self,
        operation: Any,
        config: PaginationConfig | None = None,
        options: IteratorOptions | None = None,
    ) -> None:
        """Initialize the iterator.

        Args:
            operation: Caller's request; it is cloned for every page and
                never modified itself
            config: Pagination keys for this operation
            options: Iterator tuning options
        """
        self.config = config if config is not None else PaginationConfig()
        self.options = options if options is not None else IteratorOptions()
        self._original = operation
        self._operation = operation.clone()
        self._next_token: Any = None
        self._last_result: ResponseDocument | None = None
        self._request_count = 0
        self._retrieved_count = 0
        self._yielded_count = 0
        self._finished = False
        self._page_hooks: list[PageHook] = []

    @property
    def operation(self) -> Any:
        """The caller's original operation."""
        return self._original

    @property
    def operation_name(self) -> str:
        return self._original.name

    @property
    def last_result(self) -> ResponseDocument | None:
        """Most recent raw response, or None before the first request."""
        return self._last_result

    @property
    def next_token(self) -> Any:
        return self._next_token

    @property
    def request_count(self) -> int:
        """Requests sent so far, including empty-page retries."""
        return self._request_count

    @property
    def retrieved_count(self) -> int:
        """Items received from the backend so far."""
        return self._retrieved_count

    @property
    def finished(self) -> bool:
        return self._finished

    def add_page_hook(self, hook: PageHook) -> None:
        """Register a callback invoked with ``(iterator, response)`` after each request."""
        self._page_hooks.append(hook)

    def _remaining(self) -> int | None:
        if self.options.limit is None:
            return None
        return max(0, self.options.limit - self._yielded_count)

    def _limit_reached(self) -> bool:
        return self._remaining() == 0

    def _calculate_page_size(self) -> int | None:
        page_size = self.options.page_size
        remaining = self._remaining()
        if page_size is not None and remaining is not None and page_size > remaining:
            return remaining
        return page_size

    def _prepare_request(self) -> None:
        """Reduce the request's own page size to the iterator's page size.

        Numeric strings such as ``"100"`` count as numbers and are replaced
        by an int when negotiated.
        """
        limit_key = self.config.limit_key
        if limit_key is None:
            return
        current = _as_number(self._operation.get(limit_key))
        if not current:
            return
        page_size = self._calculate_page_size()
        if page_size:
            self._operation.set(limit_key, min(current, page_size))

    def _begin_request(self) -> Any:
        """Build the working request for the next send."""
        self._operation = self._original.clone()
        self._prepare_request()
        if token_present(self._next_token):
            apply_token(self.config, self._operation, self._next_token)
        self._operation.add(USER_AGENT_OPTION, ITERATOR_USER_AGENT)
        return self._operation

    def _fail_request(self, error: Exception) -> None:
        log_page_error(
            operation=self.operation_name,
            request_index=self._request_count,
            error_type=type(error).__name__,
            error_message=str(error),
        )

    def _handle_response(self, response: Any, started: float) -> list[Any]:
        """Record ``response`` and return its items."""
        document = as_document(response)
        self._last_result = document
        items = extract_items(self.config, document)
        self._next_token = extract_next_token(self.config, document)

        log_page_fetched(
            operation=self.operation_name,
            request_index=self._request_count,
            items=len(items),
            has_next_token=token_present(self._next_token),
            latency_ms=(perf_counter() - started) * 1000.0,
        )
        self._request_count += 1
        for hook in self._page_hooks:
            hook(self, document)
        return items

    def _should_refetch(self, items: list[Any], retries: int) -> bool:
        """Whether an empty page still asks for another request.

        Raises:
            EmptyPageLimitError: If ``max_empty_retries`` is exceeded
        """
        if items or not token_present(self._next_token):
            return False
        bound = self.options.max_empty_retries
        if bound is not None and retries >= bound:
            raise EmptyPageLimitError(
                f"Operation {self.operation_name} returned {retries + 1} empty pages "
                "with a continuation token",
                operation=self.operation_name,
                retries=retries,
            )
        log_empty_page_retry(
            operation=self.operation_name, retries=retries + 1, token=self._next_token
        )
        return True

    def _accept_page(self, items: list[Any]) -> list[Any]:
        """Count a non-retried page and trim it to the remaining limit."""
        self._retrieved_count += len(items)
        remaining = self._remaining()
        if remaining is not None:
            items = items[:remaining]
        self._yielded_count += len(items)
        return items

    def _more_pages(self) -> bool:
        return token_present(self._next_token) and not self._limit_reached()

    def _complete(self) -> None:
        self._finished = True
        log_iteration_complete(
            operation=self.operation_name,
            request_count=self._request_count,
            retrieved_count=self._retrieved_count,
            yielded_count=self._yielded_count,
        )


class PagingIterator(BasePagingIterator, Iterator[Any]):
    """Lazy, single-pass iterator over every item of a paged operation.

    Pages are fetched only when the items of the previous page have been
    consumed. An empty page that still carries a continuation token is
    fetched again from a fresh clone of the original request before anything
    is yielded; unless ``max_empty_retries`` is set this retry is unbounded,
    so a backend that keeps answering with empty pages and a token never
    ends the iteration.

    Example:
        >>> iterator = PagingIterator(
        ...     operation,
        ...     PaginationConfig(input_token="Marker", output_token="NextMarker"),
        ... )
        >>> for item in iterator:
        ...     print(item)
        >>> iterator.last_result.get_path("NextMarker")
    """

    def __init__(
        self,
        operation: Any,
        config: PaginationConfig | None = None,
        options: IteratorOptions | None = None,
    ) -> None:
        super().__init__(operation, config, options)
        self._page_source: Iterator[list[Any]] | None = None
        self._item_source: Iterator[Any] | None = None

    def __iter__(self) -> PagingIterator:
        return self

    def __next__(self) -> Any:
        if self._item_source is None:
            self._item_source = self._iter_items()
        return next(self._item_source)

    def pages(self) -> Iterator[list[Any]]:
        """Iterate page by page instead of item by item.

        Shares its state with item iteration; empty pages are never yielded.
        """
        if self._page_source is None:
            self._page_source = self._iter_pages()
        return self._page_source

    def to_list(self) -> list[Any]:
        """Consume the remaining items into a list."""
        return list(self)

    def map(self, transform: Callable[[Any], T]) -> Iterator[T]:
        return map(transform, self)

    def filter(self, predicate: Callable[[Any], bool]) -> Iterator[Any]:
        return filter(predicate, self)

    def _iter_items(self) -> Iterator[Any]:
        for page in self.pages():
            yield from page

    def _iter_pages(self) -> Iterator[list[Any]]:
        while not self._limit_reached():
            items = self._accept_page(self._fetch_page())
            if items:
                yield items
            if not self._more_pages():
                break
        self._complete()

    def _fetch_page(self) -> list[Any]:
        retries = 0
        while True:
            operation = self._begin_request()
            started = perf_counter()
            try:
                response = operation.execute()
            except Exception as e:
                self._fail_request(e)
                raise
            items = self._handle_response(response, started)
            if not self._should_refetch(items, retries):
                return items
            retries += 1
