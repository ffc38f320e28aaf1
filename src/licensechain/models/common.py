"""Shared API model types.

Single resources arrive wrapped as ``{"data": {...}}``; list endpoints return
the page object directly.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for API responses. Unknown fields are ignored for forward compatibility."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class RequestModel(BaseModel):
    """Base for request bodies. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")


class Page(ApiModel, Generic[T]):
    """One page of a list endpoint.

    Attributes:
        data: Items on this page.
        total: Total number of items across all pages.
        page: 1-based page number.
        limit: Page size used by the server.
    """

    data: list[T] = Field(default_factory=list)
    total: int = Field(ge=0, default=0)
    page: int = Field(ge=1, default=1)
    limit: int = Field(ge=1, default=10)

    @property
    def has_next(self) -> bool:
        return self.page * self.limit < self.total
