"""Core components."""

from .document import Document, lookup_path
from .exceptions import (
    ConfigurationError,
    EmptyPageLimitError,
    PagingError,
    TokenShapeError,
)
from .operation import (
    ITERATOR_USER_AGENT,
    USER_AGENT_OPTION,
    BaseOperation,
    CallableOperation,
    as_document,
)
from .protocols import AsyncOperation, IteratorFactory, Operation, ResponseDocument

__all__ = [
    "BaseOperation",
    "CallableOperation",
    "as_document",
    "USER_AGENT_OPTION",
    "ITERATOR_USER_AGENT",
    "Document",
    "lookup_path",
    "Operation",
    "AsyncOperation",
    "ResponseDocument",
    "IteratorFactory",
    "PagingError",
    "ConfigurationError",
    "TokenShapeError",
    "EmptyPageLimitError",
]
