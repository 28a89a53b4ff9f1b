"""HTTP-backed operation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core.operation import USER_AGENT_OPTION, BaseOperation, as_document
from ..core.protocols import ResponseDocument
from .http_client import HTTPClient

DEFAULT_USER_AGENT = "laakhay-paging"


def _query_pairs(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Flatten params into query pairs; list values repeat the key, None is dropped."""
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if item is None:
                continue
            if isinstance(item, bool):
                item = "true" if item else "false"
            pairs.append((key, str(item)))
    return pairs


class HTTPOperation(BaseOperation):
    """Operation sending its parameters to one HTTP endpoint.

    GET operations send parameters as the query string, POST operations as
    a JSON body. The iterator tag set under ``ua.append`` is sent as a
    ``User-Agent`` suffix rather than as a parameter.

    Example:
        >>> async with HTTPClient(base_url="https://api.example.com") as client:
        ...     op = HTTPOperation("ListItems", client, "/items", params={"limit": 50})
        ...     document = await op.execute()
    """

    def __init__(
        self,
        name: str,
        client: HTTPClient,
        path: str,
        *,
        method: str = "GET",
        params: Mapping[str, Any] | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(name, params)
        method = method.upper()
        if method not in ("GET", "POST"):
            raise ValueError(f"Unsupported HTTP method: {method}")
        self.client = client
        self.path = path
        self.method = method
        self.user_agent = user_agent

    def build_headers(self) -> dict[str, str]:
        tags = self.get(USER_AGENT_OPTION)
        if tags is None:
            return {"User-Agent": self.user_agent}
        if not isinstance(tags, list):
            tags = [tags]
        return {"User-Agent": " ".join([self.user_agent, *map(str, tags)])}

    async def execute(self) -> ResponseDocument:
        headers = self.build_headers()
        params = self.request_params()
        if self.method == "GET":
            data = await self.client.get(self.path, params=_query_pairs(params), headers=headers)
        else:
            data = await self.client.post(self.path, json=params, headers=headers)
        return as_document(data)
