"""Iterator factories resolving pagination config per operation name.

Architecture:
    PaginationIteratorFactory owns a mapping of operation name to
    PaginationConfig and builds the generic iterator for registered names.
    An optional primary factory is consulted first, so operations that need
    hand-written iteration logic can be served by IteratorClassFactory while
    everything else falls back to configuration.

Resolution Order:
    1. Primary factory, when one is set and it can build the operation
    2. Registered configuration for the operation name
    3. ConfigurationError (raised before any request is sent)

See Also:
    - PagingIterator: Generic iterator built from a PaginationConfig
    - iterator_factory_from_file: Loads definitions from JSON
"""

from __future__ import annotations

from collections.abc import Mapping
from inspect import iscoroutinefunction
from typing import Any

from pydantic import ValidationError

from ..core.exceptions import ConfigurationError
from ..core.protocols import IteratorFactory
from ..models import IteratorOptions, PaginationConfig, split_options
from .async_iterator import AsyncPagingIterator
from .iterator import BasePagingIterator, PagingIterator


def _operation_name(operation: Any) -> str:
    if isinstance(operation, str):
        return operation
    return operation.name


def _build_options(options: Mapping[str, Any] | None, operation: str) -> IteratorOptions:
    try:
        return IteratorOptions.model_validate(dict(options or {}))
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid iterator options for operation {operation}: {e}", operation=operation
        ) from e


def iterator_class_for(operation: Any) -> type[BasePagingIterator]:
    """Pick the sync or async iterator depending on ``operation.execute``."""
    if iscoroutinefunction(operation.execute):
        return AsyncPagingIterator
    return PagingIterator


class PaginationIteratorFactory:
    """Builds generic iterators from per-operation pagination keys."""

    def __init__(
        self,
        config: Mapping[str, Mapping[str, Any] | PaginationConfig],
        primary: IteratorFactory | None = None,
    ) -> None:
        """Initialize the factory.

        Args:
            config: Operation name -> partial pagination keys; unset keys
                default to "not configured"
            primary: Factory consulted before the local configuration

        Raises:
            ConfigurationError: If a definition has unknown or invalid keys
        """
        self._primary = primary
        self._config: dict[str, PaginationConfig] = {}
        for name, definition in config.items():
            self._config[name] = self._resolve(name, definition)

    @staticmethod
    def _resolve(name: str, definition: Mapping[str, Any] | PaginationConfig) -> PaginationConfig:
        if isinstance(definition, PaginationConfig):
            return definition
        try:
            return PaginationConfig.model_validate(dict(definition))
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid iterator definition for operation {name}: {e}", operation=name
            ) from e

    @property
    def primary(self) -> IteratorFactory | None:
        return self._primary

    @property
    def operations(self) -> list[str]:
        """Names of the operations with a registered configuration."""
        return list(self._config)

    def get_config(self, operation: Any) -> PaginationConfig | None:
        return self._config.get(_operation_name(operation))

    def can_build(self, operation: Any) -> bool:
        """Whether this factory (or its primary) can build an iterator for ``operation``."""
        if self._primary is not None and self._primary.can_build(operation):
            return True
        return _operation_name(operation) in self._config

    def build(self, operation: Any, options: Mapping[str, Any] | None = None) -> Any:
        """Build an iterator for ``operation``.

        Args:
            operation: Operation to paginate
            options: Caller options; pagination keys override the registered
                configuration, the rest are IteratorOptions

        Returns:
            PagingIterator, or AsyncPagingIterator for awaitable operations

        Raises:
            ConfigurationError: If no primary or configuration covers the
                operation, or the options are invalid
        """
        if self._primary is not None and self._primary.can_build(operation):
            return self._primary.build(operation, options)

        name = _operation_name(operation)
        base = self._config.get(name)
        if base is None:
            raise ConfigurationError(f"no iterator available for operation {name}", operation=name)

        overrides, tuning = split_options(options or {})
        try:
            config = base.merged(overrides) if overrides else base
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid iterator options for operation {name}: {e}", operation=name
            ) from e
        return iterator_class_for(operation)(operation, config, _build_options(tuning, name))


class IteratorClassFactory:
    """Registry of hand-written iterator classes keyed by operation name.

    Registered classes are constructed as ``cls(operation, config, options)``
    where ``config`` is the class attribute ``config`` (if any). Meant to be
    the primary of a PaginationIteratorFactory.

    Example:
        >>> class ListObjectsIterator(PagingIterator):
        ...     def _handle_response(self, response, started): ...
        >>> classes = IteratorClassFactory({"ListObjects": ListObjectsIterator})
        >>> factory = PaginationIteratorFactory(definitions, primary=classes)
    """

    def __init__(self, classes: Mapping[str, type[BasePagingIterator]] | None = None) -> None:
        self._classes: dict[str, type[BasePagingIterator]] = {}
        for name, cls in (classes or {}).items():
            self.register(name, cls)

    def register(self, operation: str, iterator_class: type[BasePagingIterator]) -> None:
        """Register an iterator class.

        Raises:
            ConfigurationError: If the operation already has a class
        """
        if operation in self._classes:
            raise ConfigurationError(
                f"Iterator for operation {operation} is already registered", operation=operation
            )
        self._classes[operation] = iterator_class

    def unregister(self, operation: str) -> None:
        if operation not in self._classes:
            raise ConfigurationError(
                f"Iterator for operation {operation} is not registered", operation=operation
            )
        del self._classes[operation]

    def is_registered(self, operation: str) -> bool:
        return operation in self._classes

    def can_build(self, operation: Any) -> bool:
        return _operation_name(operation) in self._classes

    def build(self, operation: Any, options: Mapping[str, Any] | None = None) -> Any:
        name = _operation_name(operation)
        iterator_class = self._classes.get(name)
        if iterator_class is None:
            raise ConfigurationError(f"no iterator available for operation {name}", operation=name)

        overrides, tuning = split_options(options or {})
        base = getattr(iterator_class, "config", None)
        if not isinstance(base, PaginationConfig):
            base = PaginationConfig()
        try:
            config = base.merged(overrides) if overrides else base
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid iterator options for operation {name}: {e}", operation=name
            ) from e
        return iterator_class(operation, config, _build_options(tuning, name))
