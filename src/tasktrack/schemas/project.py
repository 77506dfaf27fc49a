"""Pydantic schemas for projects and progress.

Learn: Separate schemas for create/update/read keeps the API clean.
ProjectRead flattens the project and its derived progress into one object;
progress is computed per request, never stored.
"""

from typing import Optional

from pydantic import BaseModel, Field

from tasktrack.services.project_service import ProgressSnapshot, ProjectWithProgress


class ProjectCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255, pattern=r"\S")
    description: Optional[str] = None


class ProjectUpdate(BaseModel):
    """Full update — title is required, description may be cleared."""
    title: str = Field(..., min_length=1, max_length=255, pattern=r"\S")
    description: Optional[str] = None


class ProjectRead(BaseModel):
    id: int
    title: str
    description: Optional[str]
    total_tasks: int
    completed_tasks: int
    progress_percentage: int

    @classmethod
    def from_result(cls, result: ProjectWithProgress) -> "ProjectRead":
        return cls(
            id=result.project.id,
            title=result.project.title,
            description=result.project.description,
            total_tasks=result.progress.total_tasks,
            completed_tasks=result.progress.completed_tasks,
            progress_percentage=result.progress.percentage,
        )


class ProgressRead(BaseModel):
    project_id: int
    total_tasks: int
    completed_tasks: int
    progress_percentage: int

    @classmethod
    def from_snapshot(cls, project_id: int, snapshot: ProgressSnapshot) -> "ProgressRead":
        return cls(
            project_id=project_id,
            total_tasks=snapshot.total_tasks,
            completed_tasks=snapshot.completed_tasks,
            progress_percentage=snapshot.percentage,
        )
