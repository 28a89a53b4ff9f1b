"""Iterator configuration models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

TokenKey = str | tuple[str, ...]


class PaginationConfig(BaseModel):
    """Key names describing how one operation paginates.

    Every key is optional; ``None`` means "not configured".

    Attributes:
        input_token: Request parameter(s) receiving the continuation token
        output_token: Response path(s) holding the next token
        limit_key: Request parameter holding the page size
        result_key: Response path holding the page's items
        more_results: Response path of a "has more" flag
    """

    input_token: TokenKey | None = None
    output_token: TokenKey | None = None
    limit_key: str | None = None
    result_key: str | None = None
    more_results: str | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("input_token", "output_token", mode="before")
    @classmethod
    def normalize_token_key(cls, v: Any) -> Any:
        """Store composite keys as tuples."""
        if isinstance(v, list):
            return tuple(v)
        return v

    @field_validator("input_token", "output_token")
    @classmethod
    def validate_token_key(cls, v: TokenKey | None) -> TokenKey | None:
        """Reject empty keys."""
        if isinstance(v, tuple) and (not v or not all(v)):
            raise ValueError("composite token keys must be non-empty strings")
        if v == "":
            raise ValueError("token key must not be empty")
        return v

    @property
    def composite_input(self) -> bool:
        return isinstance(self.input_token, tuple)

    @property
    def composite_output(self) -> bool:
        return isinstance(self.output_token, tuple)

    def merged(self, overrides: Mapping[str, Any]) -> PaginationConfig:
        """Return a validated copy with ``overrides`` applied on top."""
        return type(self).model_validate({**self.model_dump(), **overrides})


class IteratorOptions(BaseModel):
    """Tuning options of one iterator.

    Attributes:
        limit: Total number of items to yield (None = unlimited)
        page_size: Preferred number of items per request (None = unset)
        max_empty_retries: Bound on consecutive empty pages carrying a token
            (None = unbounded)
    """

    limit: int | None = Field(default=None, ge=0)
    page_size: int | None = Field(default=None, gt=0)
    max_empty_retries: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("limit")
    @classmethod
    def zero_limit_is_unlimited(cls, v: int | None) -> int | None:
        return v or None


CONFIG_KEYS = frozenset(PaginationConfig.model_fields)


def split_options(options: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split caller options into config overrides and iterator tuning options."""
    overrides = {k: v for k, v in options.items() if k in CONFIG_KEYS}
    tuning = {k: v for k, v in options.items() if k not in CONFIG_KEYS}
    return overrides, tuning
