from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, status

from notion_clone.api.v1.schemas.page import PageRead, PageTitleUpdate, PageUpdate
from notion_clone.dependencies import get_current_user, get_page_service

if TYPE_CHECKING:
    from notion_clone.core.schemas.auth import AuthUser
    from notion_clone.core.services.page_service import PageService

router = APIRouter()


@router.get("/{page_id}", response_model=PageRead)
async def get_page(
    page_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: PageService = Depends(get_page_service),
):
    page = await service.get_page(page_id, user_id=current_user.id)
    return PageRead.model_validate(page.model_dump())


@router.patch("/{page_id}", response_model=PageRead)
async def update_page(
    page_id: str,
    payload: PageUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: PageService = Depends(get_page_service),
):
    page = await service.update_page(page_id, payload, user_id=current_user.id)
    return PageRead.model_validate(page.model_dump())


@router.patch("/{page_id}/title", status_code=status.HTTP_204_NO_CONTENT)
async def update_page_title(
    page_id: str,
    payload: PageTitleUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: PageService = Depends(get_page_service),
):
    await service.update_title(page_id, payload.title, user_id=current_user.id)
    return None


@router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_page(
    page_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: PageService = Depends(get_page_service),
):
    """Delete a page and everything nested below it."""
    await service.delete_page(page_id, user_id=current_user.id)
    return None
