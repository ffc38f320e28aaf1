"""User resource models."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, JsonValue

from licensechain.models.common import ApiModel, Page, RequestModel


class User(ApiModel):
    id: str
    email: str
    name: str
    created_at: datetime
    updated_at: datetime
    metadata: dict[str, JsonValue] = Field(default_factory=dict)


class CreateUserRequest(RequestModel):
    email: str
    name: str
    metadata: dict[str, JsonValue] = Field(default_factory=dict)


class UpdateUserRequest(RequestModel):
    email: str | None = None
    name: str | None = None
    metadata: dict[str, JsonValue] | None = None


class UserStats(ApiModel):
    total: int = 0
    active: int = 0
    inactive: int = 0


UserListResponse = Page[User]
