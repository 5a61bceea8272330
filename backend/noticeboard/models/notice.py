# noticeboard/models/notice.py
"""
Document model for notices posted on the board.
"""
import datetime as dt
from enum import Enum
from typing import Optional
from beanie import Document
from pydantic import Field


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Audience(str, Enum):
    ALL = "all"
    FACULTY = "faculty"
    STUDENT = "student"


class Notice(Document):
    """
    Notice document (collection "notices").

    A notice optionally carries one attachment (image or PDF) stored under the
    upload directory and served from /uploads.
    """
    title: str
    content: str = ""
    category: str = "general"
    audience: Audience = Audience.ALL
    attachment_url: Optional[str] = None  # e.g. "/uploads/<uuid>.pdf"
    attachment_name: Optional[str] = None  # original filename as uploaded
    author_id: str
    author_username: str
    author_role: str
    created_at: dt.datetime = Field(default_factory=_utcnow)
    updated_at: dt.datetime = Field(default_factory=_utcnow)

    class Settings:
        name = "notices"
        indexes = [
            "audience",
            "category",
            "created_at",
        ]
