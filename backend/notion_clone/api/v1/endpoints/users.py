from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, status

from notion_clone.api.v1.schemas.user import ProfilePictureUpdate, UserRead, UserUpdate
from notion_clone.core.models.user import WorkspaceAccess
from notion_clone.dependencies import get_current_user, get_user_service

if TYPE_CHECKING:
    from notion_clone.core.schemas.auth import AuthUser
    from notion_clone.core.services.user_service import UserService

router = APIRouter()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.get_user(user_id, actor_id=current_user.id)
    return UserRead.model_validate(user.model_dump())


@router.patch("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.update_user(user_id, payload, actor_id=current_user.id)
    return UserRead.model_validate(user.model_dump())


@router.patch("/{user_id}/profile-picture", status_code=status.HTTP_204_NO_CONTENT)
async def update_profile_picture(
    user_id: str,
    payload: ProfilePictureUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.update_profile_picture(user_id, payload.url, actor_id=current_user.id)
    return None


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.delete_user(user_id, actor_id=current_user.id)
    return None


@router.get("/{user_id}/workspaces-access", response_model=list[WorkspaceAccess])
async def get_workspaces_access(
    user_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.get_workspaces_access(user_id, actor_id=current_user.id)


@router.post("/{user_id}/workspaces-access/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
async def add_workspace_access(
    user_id: str,
    workspace_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.add_workspace_access(user_id, workspace_id, actor_id=current_user.id)
    return None


@router.delete("/{user_id}/workspaces-access/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_workspace_access(
    user_id: str,
    workspace_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.remove_workspace_access(user_id, workspace_id, actor_id=current_user.id)
    return None


@router.get("/{user_id}/workspaces-access/{workspace_id}/favorites", response_model=list[str])
async def get_favorites(
    user_id: str,
    workspace_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.get_favorites(user_id, workspace_id, actor_id=current_user.id)


@router.post(
    "/{user_id}/workspaces-access/{workspace_id}/favorites/{page_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def add_favorite(
    user_id: str,
    workspace_id: str,
    page_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.add_favorite(user_id, workspace_id, page_id, actor_id=current_user.id)
    return None


@router.delete(
    "/{user_id}/workspaces-access/{workspace_id}/favorites/{page_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_favorite(
    user_id: str,
    workspace_id: str,
    page_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.remove_favorite(user_id, workspace_id, page_id, actor_id=current_user.id)
    return None
