"""
Service-level routes.
"""

from __future__ import annotations

from fastapi import APIRouter

from api.schemas import MessageResponse

router = APIRouter(tags=["service"])


@router.get("/health", response_model=MessageResponse)
async def health() -> MessageResponse:
    return MessageResponse(success=True, message="ok")
