from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from pydantic import Field, field_validator

from .base import AppBaseModel, TimestampedModel
from .page_path import PagePath


class PageEntry(AppBaseModel):
    """Summary of a page kept inside its workspace document for listings."""

    page_id: str
    reference: str
    path: str | None = None
    icon: str | None = None
    title: str
    created_at: datetime | None = None

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str | None) -> str | None:
        # Round-trip through PagePath so malformed paths never get stored.
        return PagePath.parse(v).serialize()

    @property
    def page_path(self) -> PagePath:
        return PagePath.parse(self.path)

    @property
    def is_root(self) -> bool:
        return self.path is None


class Workspace(TimestampedModel):
    """Workspace domain model; owns its member set and page index."""

    id: str | None = Field(default=None, description="Store identifier")
    name: str = Field(..., max_length=255)
    icon: str | None = None
    members: list[str] = Field(default_factory=list)
    pages: list[PageEntry] = Field(default_factory=list)

    def find_page(self, page_id: str) -> PageEntry | None:
        return next((entry for entry in self.pages if entry.page_id == page_id), None)
