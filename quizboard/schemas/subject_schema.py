from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SubjectCreateRequest(BaseModel):
    name: Optional[str] = None
    teacher_id: Optional[int] = None


class SubjectResponse(BaseModel):
    id: int
    name: str
    teacher_id: Optional[int]
    teacher_name: Optional[str] = None
    teacher_email: Optional[str] = None
    created_at: datetime
