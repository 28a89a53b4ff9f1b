"""Interfaces consumed and exposed by the pagination core.

Architecture:
    The iterators never talk to a transport directly. They drive an
    ``Operation`` (a cloneable, mutable request command) and read its
    ``ResponseDocument`` through path lookups. Factories share one small
    capability interface so they can be chained.

See Also:
    - BaseOperation: Parameter bag implementing most of ``Operation``
    - Document: Dict-backed ``ResponseDocument``
    - PaginationIteratorFactory: Generic factory with primary delegation
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import Self

    from ..runtime.iterator import PagingIterator


@runtime_checkable
class ResponseDocument(Protocol):
    """Decoded response supporting path-based field lookup."""

    def get_path(self, path: str) -> Any:
        """Return the value at ``path`` or ``None`` when absent."""
        ...


class _Command(Protocol):
    @property
    def name(self) -> str: ...

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def add(self, key: str, value: Any) -> None: ...

    def clone(self) -> Self: ...


@runtime_checkable
class Operation(_Command, Protocol):
    """One invocable request executed from the calling thread."""

    def execute(self) -> ResponseDocument: ...


@runtime_checkable
class AsyncOperation(_Command, Protocol):
    """One invocable request whose execution is awaited."""

    async def execute(self) -> ResponseDocument: ...


class IteratorFactory(Protocol):
    """Capability interface shared by all iterator factories."""

    def can_build(self, operation: Operation | str) -> bool: ...

    def build(
        self, operation: Operation, options: Mapping[str, Any] | None = None
    ) -> PagingIterator: ...
