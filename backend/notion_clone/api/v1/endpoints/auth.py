from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from notion_clone.api.v1.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from notion_clone.dependencies import get_auth_service

# Configure router with authentication-specific settings
router = APIRouter(
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        429: {"description": "Too many requests"}
    }
)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_200_OK)
async def register(
    request: Request,
    payload: RegisterRequest,
    auth_service=Depends(get_auth_service),
):
    """Create an account and return a bearer token."""
    return await auth_service.register(request, payload)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: Request,
    payload: LoginRequest,
    auth_service=Depends(get_auth_service),
):
    """Sign in with email and password."""
    return await auth_service.login(request, payload)
