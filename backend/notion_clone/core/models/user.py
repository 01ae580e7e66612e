from __future__ import annotations

from pydantic import Field

from .base import AppBaseModel, TimestampedModel


class ProfilePicture(AppBaseModel):
    url: str


class WorkspaceAccess(AppBaseModel):
    """One workspace a user can open, with the pages they starred in it."""

    workspace_id: str
    favorites: list[str] = Field(default_factory=list)


class User(TimestampedModel):
    """User domain model. ``password`` always holds a bcrypt hash."""

    id: str | None = Field(default=None, description="Store identifier")
    name: str = Field(..., max_length=255)
    email: str
    password: str
    is_dark_mode: bool = False
    profile_picture: ProfilePicture | None = None
    workspaces: list[WorkspaceAccess] = Field(default_factory=list)

    def has_workspace(self, workspace_id: str) -> bool:
        return any(access.workspace_id == workspace_id for access in self.workspaces)

    def favorites_for(self, workspace_id: str) -> list[str] | None:
        for access in self.workspaces:
            if access.workspace_id == workspace_id:
                return access.favorites
        return None
