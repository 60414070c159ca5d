"""
issue_portal.services.admin_actions

Request models for the admin-management endpoint.

Responsibilities:
- One model per action tag, each with its own parameters.
- Turn a raw JSON object into exactly one of them (or a 400-class error).
"""

from __future__ import annotations

import uuid
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from issue_portal.errors import UnknownActionError, ValidationError

PASSWORD_TOO_SHORT = "Password minimal {min_length} karakter"
CREDENTIALS_REQUIRED = "Email dan password wajib diisi"
USER_ID_REQUIRED = "user_id wajib diisi"
CANNOT_DELETE_SELF = "Tidak bisa menghapus akun sendiri"
INVALID_USER_ID = "user_id tidak valid"


class _Action(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


def _canonical_user_id(value: str | None) -> str | None:
    # Account ids are UUIDs and end up as a URL path segment on the admin API.
    if not value:
        return value
    return str(uuid.UUID(value))


class ChangePassword(_Action):
    action: Literal["change_password"] = "change_password"
    new_password: str = ""
    # Defaults to the caller when absent or empty.
    user_id: str | None = None

    @field_validator("user_id")
    @classmethod
    def check_user_id(cls, value: str | None) -> str | None:
        return _canonical_user_id(value)


class CreateAdmin(_Action):
    action: Literal["create_admin"] = "create_admin"
    email: str = ""
    password: str = ""


class ListAdmins(_Action):
    action: Literal["list_admins"] = "list_admins"


class DeleteAdmin(_Action):
    action: Literal["delete_admin"] = "delete_admin"
    user_id: str = ""

    @field_validator("user_id")
    @classmethod
    def check_user_id(cls, value: str | None) -> str | None:
        return _canonical_user_id(value)


ActionRequest = ChangePassword | CreateAdmin | ListAdmins | DeleteAdmin

_MODELS: dict[str, type[_Action]] = {
    "change_password": ChangePassword,
    "create_admin": CreateAdmin,
    "list_admins": ListAdmins,
    "delete_admin": DeleteAdmin,
}


def _invalid_params_message(action: str, *, min_password_length: int) -> str:
    if action == "change_password":
        return PASSWORD_TOO_SHORT.format(min_length=min_password_length)
    if action == "create_admin":
        return CREDENTIALS_REQUIRED
    if action == "delete_admin":
        return USER_ID_REQUIRED
    return "Invalid parameters"


def parse_action(payload: Any, *, min_password_length: int) -> ActionRequest:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    action = payload.get("action")
    model = _MODELS.get(action) if isinstance(action, str) else None
    if model is None:
        raise UnknownActionError()

    try:
        return model.model_validate(payload)  # type: ignore[return-value]
    except PydanticValidationError as e:
        if any(
            err["loc"][:1] == ("user_id",) and err["type"] == "value_error" for err in e.errors()
        ):
            raise ValidationError(INVALID_USER_ID) from e
        # Wrong parameter types get the same message as missing ones.
        raise ValidationError(
            _invalid_params_message(action, min_password_length=min_password_length)
        ) from e


# --- Module Notes -----------------------------------------------------------
# Messages are user-facing and shown verbatim by the account page.
