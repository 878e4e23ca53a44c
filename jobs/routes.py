"""
Job API routes.

Route prefix: /api/jobs
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas import CreatedResponse, JobListResponse, JobResponse, MessageResponse
from database.session import get_db_session
from jobs.repository import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, JobRepository
from utils.errors import NotFound

router = APIRouter(tags=["jobs"])

_JOB_NOT_FOUND = "Job not found!"


class JobPayload(BaseModel):
    """Job fields as clients send them; all optional, presence is checked downstream."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: Optional[str] = None
    category: Optional[str] = None
    jobCategory: Optional[str] = None
    salary: Optional[str] = None
    property: Optional[str] = None
    benefits: Optional[str] = None
    location: Optional[str] = None


async def get_job_repository(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
) -> JobRepository:
    return JobRepository(session, timeout=request.app.state.settings.store_timeout_seconds)


@router.get("", response_model=JobListResponse)
async def list_jobs(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    jobs: JobRepository = Depends(get_job_repository),
) -> Dict[str, Any]:
    rows = await jobs.list_jobs(page=page, limit=limit)
    return {
        "success": True,
        "jobs": [job.to_dict() for job in rows],
        "page": page,
        "limit": limit,
    }


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: int,
    jobs: JobRepository = Depends(get_job_repository),
) -> Dict[str, Any]:
    job = await jobs.get(job_id)
    if job is None:
        raise NotFound(_JOB_NOT_FOUND)
    return {"success": True, "job": job.to_dict()}


@router.post("", response_model=CreatedResponse)
async def create_job(
    payload: JobPayload,
    jobs: JobRepository = Depends(get_job_repository),
) -> Dict[str, Any]:
    job = await jobs.create(payload.model_dump(exclude_none=True))
    return {"success": True, "message": "Job created successfully!", "id": job.id}


@router.put("/{job_id}", response_model=MessageResponse)
async def update_job(
    job_id: int,
    payload: JobPayload,
    jobs: JobRepository = Depends(get_job_repository),
) -> Dict[str, Any]:
    """Update the supplied fields of a job; omitted fields are left as they are."""
    if not await jobs.update(job_id, payload.model_dump(exclude_unset=True)):
        raise NotFound(_JOB_NOT_FOUND)
    return {"success": True, "message": "Job updated successfully!"}


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: int,
    jobs: JobRepository = Depends(get_job_repository),
) -> Dict[str, Any]:
    if not await jobs.delete(job_id):
        raise NotFound(_JOB_NOT_FOUND)
    return {"success": True, "message": "Job deleted successfully!"}
