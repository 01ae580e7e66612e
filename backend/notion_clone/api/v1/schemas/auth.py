from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field


class ProfilePictureIn(BaseModel):
    url: str = Field(..., min_length=1, description="Public URL of the picture")


class RegisterRequest(BaseModel):
    """Request to create an account."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=8, description="User's password")
    is_dark_mode: bool = Field(default=False, description="Dark mode preference")
    profile_picture: ProfilePictureIn | None = None


class LoginRequest(BaseModel):
    """Request to sign in with email and password."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class AuthResponse(BaseModel):
    """Response containing the bearer token for subsequent calls."""

    authentication_token: str = Field(..., description="JWT access token for API calls")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration time in seconds")
