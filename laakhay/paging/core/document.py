"""JSON-backed response document with path lookups."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

PATH_SEPARATOR = "/"
WILDCARD = "*"


def lookup_path(data: Any, path: str, separator: str = PATH_SEPARATOR) -> Any:
    """Resolve ``path`` against nested mappings and lists.

    Path segments are mapping keys or list indices (negative indices count
    from the end). A ``*`` segment fans out over every value at that level
    and collects the matches into a list.

    Args:
        data: Decoded response data
        path: Separator-delimited path, e.g. ``"Contents/-1/Key"``
        separator: Segment separator

    Returns:
        The value found, or None when any segment is missing
    """
    if not path:
        return None
    return _walk(data, path.split(separator))


def _walk(data: Any, parts: list[str]) -> Any:
    for position, part in enumerate(parts):
        if part == WILDCARD:
            return _fan_out(data, parts[position + 1 :])
        if isinstance(data, Mapping):
            if part not in data:
                return None
            data = data[part]
        elif isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
            try:
                index = int(part)
            except ValueError:
                return None
            if not -len(data) <= index < len(data):
                return None
            data = data[index]
        else:
            return None
    return data


def _fan_out(data: Any, rest: list[str]) -> list[Any] | None:
    if isinstance(data, Mapping):
        values = list(data.values())
    elif isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        values = list(data)
    else:
        return None

    nested = WILDCARD in rest
    matches: list[Any] = []
    for value in values:
        found = _walk(value, rest) if rest else value
        if found is None:
            continue
        if nested and isinstance(found, list):
            matches.extend(found)
        else:
            matches.append(found)
    return matches


class Document(Mapping[str, Any]):
    """Read-only view over a decoded response.

    The response may be a JSON object or a top-level array. Paths resolve
    against either; the mapping interface only sees the keys of an object,
    so an array document has no keys.

    Example:
        >>> doc = Document({"Items": [{"Id": 1}], "NextMarker": "m1"})
        >>> doc.get_path("Items/0/Id")
        1
        >>> doc.get_path("Missing/Key") is None
        True
    """

    def __init__(
        self, data: Mapping[str, Any] | Sequence[Any], separator: str = PATH_SEPARATOR
    ) -> None:
        self._data = data
        self._separator = separator

    @property
    def data(self) -> Mapping[str, Any] | Sequence[Any]:
        return self._data

    def _mapping(self) -> Mapping[str, Any]:
        return self._data if isinstance(self._data, Mapping) else {}

    def get_path(self, path: str) -> Any:
        return lookup_path(self._data, path, self._separator)

    def __getitem__(self, key: str) -> Any:
        return self._mapping()[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping())

    def __len__(self) -> int:
        return len(self._mapping())

    def __repr__(self) -> str:
        return f"Document({self._data!r})"
