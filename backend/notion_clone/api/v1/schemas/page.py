from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from typing import Any

from pydantic import BaseModel, Field, field_validator

from notion_clone.core.models.base import AppBaseModel
from notion_clone.core.models.page import CoverPicture, PageSettings


class PageCreate(BaseModel):
    title: str = Field(..., max_length=255, description="Page title")
    icon: str | None = None
    cover_picture: CoverPicture | None = None
    content: dict[str, Any] | None = Field(default=None, description="Rich text document")
    page_settings: PageSettings | None = None
    parent_page_id: str | None = Field(default=None, description="Create the page under this page")


class PageCreated(BaseModel):
    page_id: str


class PageUpdate(BaseModel):
    icon: str | None = None
    cover_picture: CoverPicture | None = None
    content: dict[str, Any] | None = None
    page_settings: PageSettings | None = None
    favorite: list[str] | None = None


class PageTitleUpdate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title must not be blank")
        return v


class PageRead(AppBaseModel):
    id: str
    title: str
    icon: str | None
    cover_picture: CoverPicture | None
    content: dict[str, Any]
    favorite: list[str]
    page_settings: PageSettings
    reference: str
    path: str | None
    workspace_id: str
    created_at: datetime
    updated_at: datetime | None
