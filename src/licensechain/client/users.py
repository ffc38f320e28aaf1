"""User operations."""

from __future__ import annotations

import logging

from licensechain.client.http import ApiClient, prepare_body
from licensechain.errors import ValidationError
from licensechain.models.user import (
    CreateUserRequest,
    UpdateUserRequest,
    User,
    UserListResponse,
    UserStats,
)
from licensechain.utils.validation import (
    require_uuid,
    validate_email,
    validate_not_empty,
    validate_pagination,
)

logger = logging.getLogger(__name__)


def _check_email(email: str) -> None:
    if not validate_email(email):
        raise ValidationError(f"email is not a valid address: '{email}'")


class UserService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def create(self, request: CreateUserRequest) -> User:
        _check_email(request.email)
        validate_not_empty(request.name, "name")
        action = "create user"
        payload = self._api.request(
            "POST", "/users", action=action, json_body=prepare_body(request)
        )
        user = self._api.parse_data(User, payload, action)
        logger.info("Created user id=%s", user.id)
        return user

    def get(self, user_id: str) -> User:
        require_uuid(user_id, "user_id")
        action = f"get user {user_id}"
        payload = self._api.request("GET", f"/users/{user_id}", action=action)
        return self._api.parse_data(User, payload, action)

    def update(self, user_id: str, request: UpdateUserRequest) -> User:
        require_uuid(user_id, "user_id")
        if request.email is not None:
            _check_email(request.email)
        action = f"update user {user_id}"
        payload = self._api.request(
            "PUT", f"/users/{user_id}", action=action, json_body=prepare_body(request)
        )
        return self._api.parse_data(User, payload, action)

    def delete(self, user_id: str) -> None:
        require_uuid(user_id, "user_id")
        self._api.request("DELETE", f"/users/{user_id}", action=f"delete user {user_id}")
        logger.info("Deleted user id=%s", user_id)

    def list(self, page: int = 1, limit: int = 10) -> UserListResponse:
        page, limit = validate_pagination(page, limit)
        action = "list users"
        payload = self._api.request(
            "GET", "/users", action=action, params={"page": page, "limit": limit}
        )
        return self._api.parse(UserListResponse, payload, action)

    def stats(self) -> UserStats:
        action = "get user stats"
        payload = self._api.request("GET", "/users/stats", action=action)
        return self._api.parse_data(UserStats, payload, action)
