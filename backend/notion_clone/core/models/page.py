from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from .base import AppBaseModel, TimestampedModel
from .page_path import PagePath
from .workspace import PageEntry


class CoverPicture(AppBaseModel):
    url: str
    vertical_position: int = 0


class PageSettings(AppBaseModel):
    font: str = "serif"
    small_text: bool = False
    full_width: bool = False
    lock: bool = False


def _empty_document() -> dict[str, Any]:
    return {"type": "doc", "content": []}


class Page(TimestampedModel):
    """Page domain model. Authoritative copy of everything in a PageEntry."""

    id: str | None = Field(default=None, description="Store identifier")
    title: str = Field(..., max_length=255, description="Page title")
    icon: str | None = None
    cover_picture: CoverPicture | None = None
    content: dict[str, Any] = Field(default_factory=_empty_document, description="Rich text document")
    favorite: list[str] = Field(default_factory=list)
    page_settings: PageSettings = Field(default_factory=PageSettings)
    reference: str | None = None
    path: str | None = None
    workspace_id: str

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str | None) -> str | None:
        return PagePath.parse(v).serialize()

    @property
    def page_path(self) -> PagePath:
        return PagePath.parse(self.path)

    def to_entry(self) -> PageEntry:
        """Project this page onto the summary stored in its workspace."""
        if self.id is None or self.reference is None:
            raise ValueError("Only stored pages can be summarized")
        return PageEntry(
            page_id=self.id,
            reference=self.reference,
            path=self.path,
            icon=self.icon,
            title=self.title,
            created_at=self.created_at,
        )
