"""Task service — business logic for tasks inside a project.

Learn: Every call walks the ownership chain root-first:
1. check_project_ownership(project_id, ctx) → caller owns the project
2. check_task_ownership(task_id, project)   → task lives in that project
3. apply the change and commit once

Step 2 is what stops /projects/1/tasks/99 from touching a task that
belongs to project 2, even when the caller owns both.
"""

from datetime import date
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.auth.context import AuthContext
from tasktrack.authz.guard import OwnershipGuard
from tasktrack.db.models import Task
from tasktrack.db.pagination import Page, PageRequest
from tasktrack.db.repositories import ProjectRepository, TaskRepository

logger = structlog.get_logger()


class TaskService:
    """Business logic for task CRUD and completion."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tasks = TaskRepository(db)
        self.guard = OwnershipGuard(ProjectRepository(db), self.tasks)

    # ─── Create ──────────────────────────────────────────

    async def create_task(
        self,
        project_id: int,
        ctx: AuthContext,
        title: str,
        description: Optional[str] = None,
        due_date: Optional[date] = None,
    ) -> Task:
        """Create a task in a project. Tasks always start incomplete."""
        project = await self.guard.check_project_ownership(project_id, ctx)
        task = Task(
            title=title,
            description=description,
            due_date=due_date,
            completed=False,
            project_id=project.id,
        )
        await self.tasks.save(task)
        await self.db.commit()

        logger.info("task.created", task_id=task.id, project_id=project.id)
        return task

    # ─── Read ────────────────────────────────────────────

    async def list_tasks(
        self,
        project_id: int,
        ctx: AuthContext,
        page: PageRequest,
        completed: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Page[Task]:
        """List a project's tasks, filtered by completion and/or title search."""
        project = await self.guard.check_project_ownership(project_id, ctx)
        return await self.tasks.search(
            project.id, page, completed=completed, search=search
        )

    async def get_task(self, project_id: int, task_id: int, ctx: AuthContext) -> Task:
        project = await self.guard.check_project_ownership(project_id, ctx)
        return await self.guard.check_task_ownership(task_id, project)

    # ─── Update ──────────────────────────────────────────

    async def update_task(
        self,
        project_id: int,
        task_id: int,
        ctx: AuthContext,
        title: str,
        description: Optional[str] = None,
        due_date: Optional[date] = None,
    ) -> Task:
        """Replace title, description and due date (full update).

        The completed flag and project membership are not touched here.
        """
        project = await self.guard.check_project_ownership(project_id, ctx)
        task = await self.guard.check_task_ownership(task_id, project)

        task.title = title
        task.description = description
        task.due_date = due_date
        await self.tasks.save(task)
        await self.db.commit()

        logger.info("task.updated", task_id=task.id, project_id=project.id)
        return task

    async def set_completed(
        self, project_id: int, task_id: int, ctx: AuthContext, completed: bool
    ) -> Task:
        project = await self.guard.check_project_ownership(project_id, ctx)
        task = await self.guard.check_task_ownership(task_id, project)

        task.completed = completed
        await self.tasks.save(task)
        await self.db.commit()

        logger.info(
            "task.completion_changed",
            task_id=task.id,
            project_id=project.id,
            completed=completed,
        )
        return task

    async def mark_completed(self, project_id: int, task_id: int, ctx: AuthContext) -> Task:
        return await self.set_completed(project_id, task_id, ctx, True)

    # ─── Delete ──────────────────────────────────────────

    async def delete_task(self, project_id: int, task_id: int, ctx: AuthContext) -> None:
        project = await self.guard.check_project_ownership(project_id, ctx)
        task = await self.guard.check_task_ownership(task_id, project)

        await self.tasks.delete(task)
        await self.db.commit()

        logger.info("task.deleted", task_id=task_id, project_id=project.id)
