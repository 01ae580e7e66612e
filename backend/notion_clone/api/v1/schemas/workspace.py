from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from pydantic import BaseModel, Field

from notion_clone.core.models.base import AppBaseModel
from notion_clone.core.models.workspace import PageEntry  # noqa: TCH001


class WorkspaceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Workspace name")
    icon: str = Field(..., min_length=1, description="Workspace icon")


class WorkspaceCreated(BaseModel):
    workspace_id: str


class WorkspaceUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    icon: str | None = Field(default=None, min_length=1)


class WorkspaceRead(AppBaseModel):
    id: str
    name: str
    icon: str | None
    members: list[str]
    pages: list[PageEntry]
    created_at: datetime
    updated_at: datetime | None
