from __future__ import annotations

from fastapi import APIRouter

from .endpoints import auth, health, pages, users, workspaces

api_router = APIRouter()

api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(workspaces.router, prefix="/workspaces", tags=["workspaces"])
api_router.include_router(pages.router, prefix="/pages", tags=["pages"])
