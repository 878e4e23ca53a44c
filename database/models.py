"""
SQLAlchemy ORM models for users, password resets and jobs.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import Column, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(128), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class PasswordReset(Base):
    __tablename__ = "password_resets"
    __table_args__ = (Index("ix_password_resets_email", "email"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(64), unique=True, nullable=False)
    email = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    expires_at = Column(DateTime(timezone=True), nullable=False)


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    category = Column(String(128), nullable=False)
    job_category = Column("jobCategory", String(128))
    salary = Column(String(128))
    property_ = Column("property", Text)
    benefits = Column(Text)
    location = Column(String(255))
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        """Public JSON shape, keyed by the column names clients expect."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "jobCategory": self.job_category,
            "salary": self.salary,
            "property": self.property_,
            "benefits": self.benefits,
            "location": self.location,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
