"""Ownership guard — ALLOW/DENY decisions along the ownership chain.

Learn: Authorization always walks the chain root-first:
  caller → project (owner_id must match) → task (project_id must match)

Existence is checked strictly before ownership, so a missing id yields
PROJECT_NOT_FOUND / TASK_NOT_FOUND even for an anonymous caller. That
leaks existence of numeric ids (accepted), but a denied caller never
sees any field of the resource.

The guard only reads. It never commits, flushes or retries.
"""

from tasktrack.auth.context import AuthContext
from tasktrack.db.models import Project, Task
from tasktrack.db.repositories import ProjectRepository, TaskRepository
from tasktrack.errors import AccessDenied, ProjectNotFound, TaskNotFound


class OwnershipGuard:
    def __init__(self, projects: ProjectRepository, tasks: TaskRepository):
        self.projects = projects
        self.tasks = tasks

    async def check_project_ownership(
        self, project_id: int, ctx: AuthContext
    ) -> Project:
        project = await self.projects.get_by_id(project_id)
        if project is None:
            raise ProjectNotFound(project_id)
        if not ctx.is_authenticated or ctx.user_id != project.owner_id:
            raise AccessDenied("You don't have permission to access this project")
        return project

    async def check_task_ownership(self, task_id: int, project: Project) -> Task:
        task = await self.tasks.get_by_id(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        if task.project_id != project.id:
            raise AccessDenied("This task does not belong to the specified project")
        return task
