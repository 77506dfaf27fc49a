"""Repositories — the only place that builds SQL.

Learn: Services and the ownership guard talk to these classes, never to
select() directly. Each repository wraps the request's AsyncSession;
they flush but never commit — the calling service owns the transaction
and commits once per mutation.
"""

from typing import Optional

from sqlalchemy import case, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.db.models import Project, Task, User
from tasktrack.db.pagination import Page, PageRequest

PROJECT_SORT_COLUMNS = {
    "id": Project.id,
    "title": Project.title,
    "created_at": Project.created_at,
}

TASK_SORT_COLUMNS = {
    "id": Task.id,
    "title": Task.title,
    "due_date": Task.due_date,
    "completed": Task.completed,
    "created_at": Task.created_at,
}


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def email_exists(self, email: str) -> bool:
        result = await self.session.execute(
            select(User.id).where(User.email == email)
        )
        return result.first() is not None

    async def save(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        return user


class ProjectRepository:
    """Repository for projects and their aggregate task counts."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, project_id: int) -> Optional[Project]:
        return await self.session.get(Project, project_id)

    async def save(self, project: Project) -> Project:
        self.session.add(project)
        await self.session.flush()
        return project

    async def delete(self, project: Project) -> None:
        """Delete a project and every task in it.

        Both deletes happen in the caller's transaction, so they commit
        or roll back together.
        """
        await self.session.execute(delete(Task).where(Task.project_id == project.id))
        await self.session.delete(project)
        await self.session.flush()

    async def find_by_owner(self, owner_id: int, page: PageRequest) -> Page[Project]:
        total = await self.session.scalar(
            select(func.count()).select_from(Project).where(Project.owner_id == owner_id)
        )
        query = page.apply(
            select(Project).where(Project.owner_id == owner_id),
            PROJECT_SORT_COLUMNS,
        )
        result = await self.session.execute(query)
        return Page(
            content=list(result.scalars().all()),
            page=page.page,
            size=page.size,
            total_elements=total or 0,
        )

    async def task_counts(self, project_ids: list[int]) -> dict[int, tuple[int, int]]:
        """Return {project_id: (total, completed)} in one grouped query.

        Projects with no tasks are absent from the result.
        """
        if not project_ids:
            return {}
        query = (
            select(
                Task.project_id,
                func.count(Task.id),
                func.sum(case((Task.completed.is_(True), 1), else_=0)),
            )
            .where(Task.project_id.in_(project_ids))
            .group_by(Task.project_id)
        )
        result = await self.session.execute(query)
        return {
            project_id: (int(total), int(completed or 0))
            for project_id, total, completed in result.all()
        }


class TaskRepository:
    """Repository for tasks, always addressed through their project."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, task_id: int) -> Optional[Task]:
        return await self.session.get(Task, task_id)

    async def save(self, task: Task) -> Task:
        self.session.add(task)
        await self.session.flush()
        return task

    async def delete(self, task: Task) -> None:
        await self.session.delete(task)
        await self.session.flush()

    async def count_by_project(self, project_id: int) -> int:
        total = await self.session.scalar(
            select(func.count()).select_from(Task).where(Task.project_id == project_id)
        )
        return total or 0

    async def count_by_project_and_completed(self, project_id: int) -> int:
        completed = await self.session.scalar(
            select(func.count())
            .select_from(Task)
            .where(Task.project_id == project_id, Task.completed.is_(True))
        )
        return completed or 0

    async def search(
        self,
        project_id: int,
        page: PageRequest,
        completed: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Page[Task]:
        """Tasks of one project, optionally filtered.

        Learn: Filters are applied conditionally — only when the caller
        provides them — and combine with AND. `search` is a
        case-insensitive substring match on the title; LIKE wildcards in
        the term are escaped so "50%" matches literally.
        """
        conditions = [Task.project_id == project_id]
        if completed is not None:
            conditions.append(Task.completed.is_(completed))
        if search is not None and search.strip():
            conditions.append(
                func.lower(Task.title).contains(search.lower(), autoescape=True)
            )

        total = await self.session.scalar(
            select(func.count()).select_from(Task).where(*conditions)
        )
        query = page.apply(select(Task).where(*conditions), TASK_SORT_COLUMNS)
        result = await self.session.execute(query)
        return Page(
            content=list(result.scalars().all()),
            page=page.page,
            size=page.size,
            total_elements=total or 0,
        )
