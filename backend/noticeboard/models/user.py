# noticeboard/models/user.py
"""
Document model for accounts.
Represents a login account with a fixed role (admin, faculty or student).
"""
import datetime as dt
from enum import Enum
from beanie import Document
from pydantic import Field


class Role(str, Enum):
    ADMIN = "admin"
    FACULTY = "faculty"
    STUDENT = "student"


class User(Document):
    """
    Account document (collection "users").

    Security:
    - Password is stored as an Argon2 hash, never in plain text
    - Username uniqueness is enforced by the routes that create accounts, not
      by a database index; the startup seed relies on this (see
      core.bootstrap.seed_default_users)
    """
    username: str
    password_hash: str
    role: Role = Role.STUDENT
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))

    class Settings:
        name = "users"
        indexes = [
            "username",
            "role",
        ]

    def __repr__(self):
        return f"<User(username='{self.username}', role='{self.role.value}')>"
