"""
Response envelopes shared by every route.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel


class MessageResponse(BaseModel):
    success: bool
    message: str


class CreatedResponse(MessageResponse):
    id: int


class JobListResponse(BaseModel):
    success: bool
    jobs: List[Dict[str, Any]]
    page: int
    limit: int


class JobResponse(BaseModel):
    success: bool
    job: Dict[str, Any]

