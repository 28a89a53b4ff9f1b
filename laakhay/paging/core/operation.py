"""Base operation class.

Architecture:
    An operation is a named parameter bag that knows how to execute itself.
    Iterators treat it as an opaque command: they clone it, set token and
    limit parameters on the clone and execute it once per page. Subclasses
    only have to provide ``execute``.

See Also:
    - HTTPOperation: aiohttp-backed operation
    - PagingIterator: Drives operations page by page
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from .document import Document
from .protocols import ResponseDocument

# Option used to tag a request as issued by an iterator
USER_AGENT_OPTION = "ua.append"
ITERATOR_USER_AGENT = "ITR"

OperationT = TypeVar("OperationT", bound="BaseOperation")


class BaseOperation(ABC):
    """Named, cloneable request command."""

    def __init__(self, name: str, params: Mapping[str, Any] | None = None) -> None:
        self._name = name
        self._params: dict[str, Any] = dict(params or {})

    @property
    def name(self) -> str:
        return self._name

    @property
    def params(self) -> dict[str, Any]:
        """Copy of the current parameters."""
        return dict(self._params)

    def get(self, key: str) -> Any:
        return self._params.get(key)

    def set(self, key: str, value: Any) -> None:
        self._params[key] = value

    def add(self, key: str, value: Any) -> None:
        """Add a value, collecting repeated values for the same key in a list."""
        if key not in self._params:
            self._params[key] = value
            return
        existing = self._params[key]
        if not isinstance(existing, list):
            existing = [existing]
        self._params[key] = [*existing, value]

    def remove(self, key: str) -> None:
        self._params.pop(key, None)

    def request_params(self) -> dict[str, Any]:
        """Parameters to send, without the iterator tag under ``ua.append``."""
        params = self.params
        params.pop(USER_AGENT_OPTION, None)
        return params

    def clone(self: OperationT) -> OperationT:
        """Return an independent copy; parameter values are deep-copied."""
        other = copy.copy(self)
        other._params = copy.deepcopy(self._params)
        return other

    @abstractmethod
    def execute(self) -> Any:
        """Send the request and return the decoded response document."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, params={self._params!r})"


class CallableOperation(BaseOperation):
    """Operation backed by a plain function of its parameters.

    The function receives a copy of the parameters, minus the iterator tag,
    and may return a ``ResponseDocument`` or decoded JSON, which is wrapped
    in a ``Document``.

    Example:
        >>> op = CallableOperation("ListUsers", client.list_users, {"Limit": 50})
        >>> users = list(factory.build(op))
    """

    def __init__(
        self,
        name: str,
        fetch: Callable[[dict[str, Any]], Any],
        params: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(name, params)
        self._fetch = fetch

    def execute(self) -> ResponseDocument:
        return as_document(self._fetch(self.request_params()))


def as_document(response: Any) -> ResponseDocument:
    """Wrap a decoded JSON object or array in a ``Document``.

    Raises:
        TypeError: If ``response`` is a scalar or string
    """
    if isinstance(response, ResponseDocument):
        return response
    if response is None:
        return Document({})
    if isinstance(response, (Mapping, list, tuple)):
        return Document(response)
    raise TypeError(f"Cannot build a response document from {type(response).__name__}")
