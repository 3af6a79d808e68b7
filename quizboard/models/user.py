from datetime import datetime, UTC
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class UserRole(str, Enum):
    student = "student"
    teacher = "teacher"
    parent = "parent"


class User(SQLModel, table=True):
    """User model represents a student, teacher or parent account."""
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True)
    email: str = Field(unique=True, index=True)
    password: str = Field(exclude=True)
    role: UserRole = Field(default=UserRole.student)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
