from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, status

from notion_clone.api.v1.schemas.page import PageCreate, PageCreated
from notion_clone.api.v1.schemas.workspace import (
    WorkspaceCreate,
    WorkspaceCreated,
    WorkspaceRead,
    WorkspaceUpdate,
)
from notion_clone.core.models.workspace import PageEntry
from notion_clone.dependencies import get_current_user, get_page_service, get_workspace_service

if TYPE_CHECKING:
    from notion_clone.core.schemas.auth import AuthUser
    from notion_clone.core.services.page_service import PageService
    from notion_clone.core.services.workspace_service import WorkspaceService

router = APIRouter()


@router.post("", response_model=WorkspaceCreated, status_code=status.HTTP_201_CREATED)
async def create_workspace(
    payload: WorkspaceCreate,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    """Create a workspace with a default root page; the caller becomes its first member."""
    workspace_id = await service.create_workspace(payload.name, payload.icon, user_id=current_user.id)
    return WorkspaceCreated(workspace_id=workspace_id)


@router.get("/{workspace_id}", response_model=WorkspaceRead)
async def get_workspace(
    workspace_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    workspace = await service.get_workspace(workspace_id, user_id=current_user.id)
    return WorkspaceRead.model_validate(workspace.model_dump())


@router.patch("/{workspace_id}", response_model=WorkspaceRead)
async def update_workspace(
    workspace_id: str,
    payload: WorkspaceUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    workspace = await service.update_workspace(workspace_id, payload, user_id=current_user.id)
    return WorkspaceRead.model_validate(workspace.model_dump())


@router.delete("/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workspace(
    workspace_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    await service.delete_workspace(workspace_id, user_id=current_user.id)
    return None


@router.get("/{workspace_id}/members", response_model=list[str])
async def get_members(
    workspace_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    return await service.get_members(workspace_id, user_id=current_user.id)


@router.post("/{workspace_id}/members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def add_member(
    workspace_id: str,
    member_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    await service.add_member(workspace_id, member_id, user_id=current_user.id)
    return None


@router.delete("/{workspace_id}/members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    workspace_id: str,
    member_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    await service.remove_member(workspace_id, member_id, user_id=current_user.id)
    return None


@router.get("/{workspace_id}/pages", response_model=list[PageEntry])
async def get_root_pages(
    workspace_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    """List the top-level pages of a workspace."""
    return await service.get_root_pages(workspace_id, user_id=current_user.id)


@router.post("/{workspace_id}/pages", response_model=PageCreated, status_code=status.HTTP_201_CREATED)
async def create_page(
    workspace_id: str,
    payload: PageCreate,
    current_user: AuthUser = Depends(get_current_user),
    service: PageService = Depends(get_page_service),
):
    page_id = await service.create_page(workspace_id, payload, user_id=current_user.id)
    return PageCreated(page_id=page_id)


@router.get("/{workspace_id}/pages/{page_id}/children", response_model=list[PageEntry])
async def get_children(
    workspace_id: str,
    page_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    """List every page nested below ``page_id``, at any depth."""
    return await service.get_children(workspace_id, page_id, user_id=current_user.id)
