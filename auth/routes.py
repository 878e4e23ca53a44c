"""
Auth API routes — signup, login, forgot-password, reset-password.

Route prefix: /api
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.schemas import MessageResponse
from auth.dependencies import get_auth_service
from auth.service import AuthService

router = APIRouter(tags=["auth"])


# ── Request schemas ────────────────────────────────────────────────────


class SignupRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=128)
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=128)
    password: str = Field(..., min_length=1, max_length=128)


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/signup", response_model=MessageResponse)
async def signup(
    req: SignupRequest,
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Register a new user."""
    await auth.signup(req.username, req.email, req.password)
    return {"success": True, "message": "User created successfully!"}


@router.post("/login", response_model=MessageResponse)
async def login(
    req: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Login with email + password."""
    await auth.login(req.email, req.password)
    return {"success": True, "message": "Login successful"}


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    req: ForgotPasswordRequest,
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Email a single-use reset link."""
    await auth.forgot_password(req.email)
    return {"success": True, "message": "Password reset link sent!"}


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    req: ResetPasswordRequest,
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    await auth.reset_password(req.token, req.password)
    return {"success": True, "message": "Password reset successful!"}
