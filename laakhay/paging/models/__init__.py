"""Configuration models.

Architecture:
    Pydantic v2 models describing how an operation paginates and how an
    iterator is tuned. Both are frozen; factories derive per-build copies
    instead of mutating shared definitions.

See Also:
    - PaginationIteratorFactory: Resolves a PaginationConfig per operation name
"""

from .config import CONFIG_KEYS, IteratorOptions, PaginationConfig, split_options

__all__ = [
    "PaginationConfig",
    "IteratorOptions",
    "CONFIG_KEYS",
    "split_options",
]
