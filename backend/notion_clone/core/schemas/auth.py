from __future__ import annotations

from notion_clone.core.models.base import AppBaseModel


class AuthUser(AppBaseModel):
    """Authenticated user extracted from the bearer token."""

    id: str
