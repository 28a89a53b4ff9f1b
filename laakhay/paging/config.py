"""Loading iterator definitions from JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .core.exceptions import ConfigurationError
from .core.protocols import IteratorFactory
from .runtime.factory import PaginationIteratorFactory


def load_iterator_definitions(path: str | Path) -> dict[str, dict[str, Any]]:
    """Read per-operation iterator definitions.

    Accepts either a flat ``{operation: keys}`` mapping or a service-style
    document with the mapping under ``"operations"``.

    Raises:
        ConfigurationError: If the file is missing, not JSON or badly shaped
    """
    path = Path(path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read iterator definitions from {path}: {e}") from e

    if isinstance(document, dict) and isinstance(document.get("operations"), dict):
        document = document["operations"]
    if not isinstance(document, dict) or not all(isinstance(v, dict) for v in document.values()):
        raise ConfigurationError(
            f"Iterator definitions in {path} must map operation names to objects"
        )
    return document


def iterator_factory_from_file(
    path: str | Path, primary: IteratorFactory | None = None
) -> PaginationIteratorFactory:
    """Build a PaginationIteratorFactory from a JSON definitions file."""
    return PaginationIteratorFactory(load_iterator_definitions(path), primary=primary)
