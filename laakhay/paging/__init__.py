"""Laakhay Paging - configuration-driven pagination for list-style APIs."""

from .config import iterator_factory_from_file, load_iterator_definitions
from .core import (
    AsyncOperation,
    BaseOperation,
    CallableOperation,
    ConfigurationError,
    Document,
    EmptyPageLimitError,
    IteratorFactory,
    Operation,
    PagingError,
    ResponseDocument,
    TokenShapeError,
    lookup_path,
)
from .io import HTTPClient, HTTPOperation
from .models import IteratorOptions, PaginationConfig
from .runtime import (
    AsyncPagingIterator,
    BasePagingIterator,
    IteratorClassFactory,
    PaginationIteratorFactory,
    PagingIterator,
)

__version__ = "0.1.0"

__all__ = [
    # Iterators
    "BasePagingIterator",
    "PagingIterator",
    "AsyncPagingIterator",
    # Factories
    "PaginationIteratorFactory",
    "IteratorClassFactory",
    "iterator_factory_from_file",
    "load_iterator_definitions",
    # Models
    "PaginationConfig",
    "IteratorOptions",
    # Operations
    "Operation",
    "AsyncOperation",
    "BaseOperation",
    "CallableOperation",
    "HTTPClient",
    "HTTPOperation",
    "ResponseDocument",
    "Document",
    "lookup_path",
    "IteratorFactory",
    # Exceptions
    "PagingError",
    "ConfigurationError",
    "TokenShapeError",
    "EmptyPageLimitError",
]
