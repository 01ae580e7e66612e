from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from pydantic import BaseModel, EmailStr, Field

from notion_clone.core.models.base import AppBaseModel
from notion_clone.core.models.user import ProfilePicture, WorkspaceAccess  # noqa: TCH001


class UserRead(AppBaseModel):
    """Public view of a user; the password hash never leaves the service."""

    model_config = {"extra": "ignore"}

    id: str
    name: str
    email: str
    is_dark_mode: bool
    profile_picture: ProfilePicture | None
    workspaces: list[WorkspaceAccess]
    created_at: datetime
    updated_at: datetime | None


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    is_dark_mode: bool | None = None


class ProfilePictureUpdate(BaseModel):
    url: str = Field(..., min_length=1)
