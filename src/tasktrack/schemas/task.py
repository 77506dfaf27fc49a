"""Pydantic schemas for tasks.

- TaskCreate: what you POST to create a task
- TaskUpdate: what you PUT to replace a task's editable fields
- TaskRead: what the API returns
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255, pattern=r"\S")
    description: Optional[str] = None
    due_date: Optional[date] = None


class TaskUpdate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255, pattern=r"\S")
    description: Optional[str] = None
    due_date: Optional[date] = None


class TaskRead(BaseModel):
    id: int
    title: str
    description: Optional[str]
    due_date: Optional[date]
    completed: bool

    model_config = {"from_attributes": True}
