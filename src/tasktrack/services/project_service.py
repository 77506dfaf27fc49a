"""Project service — owner-scoped project CRUD and progress.

Learn: Every operation on an existing project goes through
OwnershipGuard.check_project_ownership first, so a caller can only ever
touch their own rows. Progress is never stored; it is recomputed from
task counts on every read:

    percentage = 0                              if total == 0
               = completed * 100 // total       otherwise (truncated)
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.context import AuthContext
from tasktrack.authz.guard import OwnershipGuard
from tasktrack.db.models import Project, User
from tasktrack.db.pagination import Page, PageRequest
from tasktrack.db.repositories import ProjectRepository, TaskRepository

logger = structlog.get_logger()


@dataclass(frozen=True)
class ProgressSnapshot:
    total_tasks: int
    completed_tasks: int
    percentage: int

    @classmethod
    def of(cls, total: int, completed: int) -> "ProgressSnapshot":
        return cls(total, completed, progress_percentage(total, completed))


def progress_percentage(total: int, completed: int) -> int:
    if total <= 0:
        return 0
    return (completed * 100) // total


EMPTY_PROGRESS = ProgressSnapshot(0, 0, 0)


@dataclass(frozen=True)
class ProjectWithProgress:
    project: Project
    progress: ProgressSnapshot


class ProjectService:
    """Business logic for projects."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.projects = ProjectRepository(db)
        self.tasks = TaskRepository(db)
        self.guard = OwnershipGuard(self.projects, self.tasks)

    # ─── Create ──────────────────────────────────────────

    async def create_project(
        self, title: str, description: Optional[str], owner: User
    ) -> ProjectWithProgress:
        project = Project(title=title, description=description, owner_id=owner.id)
        await self.projects.save(project)
        await self.db.commit()

        logger.info("project.created", project_id=project.id, owner_id=owner.id)
        return ProjectWithProgress(project, EMPTY_PROGRESS)

    # ─── Read ────────────────────────────────────────────

    async def list_projects(
        self, owner: User, page: PageRequest
    ) -> Page[ProjectWithProgress]:
        """The owner's projects, each with progress.

        Learn: Counts for the whole page come from a single GROUP BY query
        instead of two COUNTs per project.
        """
        projects = await self.projects.find_by_owner(owner.id, page)
        counts = await self.projects.task_counts([p.id for p in projects.content])

        content = []
        for project in projects.content:
            total, completed = counts.get(project.id, (0, 0))
            content.append(
                ProjectWithProgress(project, ProgressSnapshot.of(total, completed))
            )
        return Page(
            content=content,
            page=projects.page,
            size=projects.size,
            total_elements=projects.total_elements,
        )

    async def get_project(self, project_id: int, ctx: AuthContext) -> ProjectWithProgress:
        project = await self.guard.check_project_ownership(project_id, ctx)
        return ProjectWithProgress(project, await self._progress(project))

    async def get_progress(self, project_id: int, ctx: AuthContext) -> ProgressSnapshot:
        project = await self.guard.check_project_ownership(project_id, ctx)
        return await self._progress(project)

    # ─── Update ──────────────────────────────────────────

    async def update_project(
        self,
        project_id: int,
        ctx: AuthContext,
        title: str,
        description: Optional[str],
    ) -> ProjectWithProgress:
        """Replace title and description. Id and owner never change."""
        project = await self.guard.check_project_ownership(project_id, ctx)
        project.title = title
        project.description = description
        await self.projects.save(project)
        await self.db.commit()

        logger.info("project.updated", project_id=project.id)
        return ProjectWithProgress(project, await self._progress(project))

    # ─── Delete ──────────────────────────────────────────

    async def delete_project(self, project_id: int, ctx: AuthContext) -> None:
        """Delete the project and all its tasks in one transaction."""
        project = await self.guard.check_project_ownership(project_id, ctx)
        try:
            await self.projects.delete(project)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info("project.deleted", project_id=project_id)

    async def _progress(self, project: Project) -> ProgressSnapshot:
        total = await self.tasks.count_by_project(project.id)
        completed = await self.tasks.count_by_project_and_completed(project.id)
        return ProgressSnapshot.of(total, completed)
