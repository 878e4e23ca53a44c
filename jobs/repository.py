"""
Job repository — plain CRUD and paging over the ``jobs`` table.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update

from database.helpers import SessionStore
from database.models import Job
from utils.errors import MissingFields

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Largest id a 64-bit INTEGER column can hold; anything above cannot exist.
MAX_JOB_ID = 2**63 - 1

# Public field name -> ORM attribute.
_FIELD_MAP = {
    "title": "title",
    "category": "category",
    "jobCategory": "job_category",
    "salary": "salary",
    "property": "property_",
    "benefits": "benefits",
    "location": "location",
}


def _to_columns(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {_FIELD_MAP[k]: v for k, v in fields.items() if k in _FIELD_MAP}


def _valid_id(job_id: int) -> bool:
    return 1 <= job_id <= MAX_JOB_ID


class JobRepository(SessionStore):
    async def list_jobs(self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> List[Job]:
        """Return at most ``limit`` jobs starting at offset ``(page - 1) * limit``."""
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_LIMIT)
        result = await self._run(
            self._session.execute(
                select(Job).order_by(Job.id).limit(limit).offset((page - 1) * limit)
            ),
            "list jobs",
        )
        return list(result.scalars().all())

    async def get(self, job_id: int) -> Optional[Job]:
        if not _valid_id(job_id):
            return None
        return await self._run(self._session.get(Job, job_id, populate_existing=True), "get job")

    async def create(self, fields: Dict[str, Any]) -> Job:
        if not fields.get("title") or not fields.get("category"):
            raise MissingFields("Title and category are required.")

        job = Job(**_to_columns(fields))
        self._session.add(job)
        await self._run(self._session.flush(), "insert job")
        await self.commit()
        logger.info("Created job %s (%s)", job.id, job.title)
        return job

    async def update(self, job_id: int, fields: Dict[str, Any]) -> bool:
        """Apply ``fields`` to one job. Returns ``False`` if it does not exist."""
        if await self.get(job_id) is None:
            return False

        for required in ("title", "category"):
            if required in fields and not fields[required]:
                raise MissingFields("Title and category cannot be empty.")

        values = _to_columns(fields)
        if not values:
            return True

        await self._run(
            self._session.execute(
                update(Job)
                .where(Job.id == job_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            ),
            "update job",
        )
        await self.commit()
        return True

    async def delete(self, job_id: int) -> bool:
        if not _valid_id(job_id):
            return False
        result = await self._run(
            self._session.execute(
                delete(Job)
                .where(Job.id == job_id)
                .execution_options(synchronize_session=False)
            ),
            "delete job",
        )
        await self.commit()
        return result.rowcount > 0
