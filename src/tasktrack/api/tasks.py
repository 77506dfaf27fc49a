"""Task API routes — always nested under their project.

Learn: Key patterns:
- POST for creation, PUT for full replacement of editable fields
- PATCH .../complete marks done; PATCH .../completion?completed= sets the flag
- Query params for filtering (completed, search) and paging (page, size, sort)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.api.pagination import page_body, task_page
from tasktrack.auth.context import AuthContext
from tasktrack.auth.dependencies import get_auth_context
from tasktrack.db.engine import get_db
from tasktrack.db.pagination import PageRequest
from tasktrack.schemas.common import PageRead
from tasktrack.schemas.task import TaskCreate, TaskRead, TaskUpdate
from tasktrack.services.task_service import TaskService

router = APIRouter(prefix="/projects/{project_id}/tasks")


def _task_svc(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)


@router.get("", response_model=PageRead[TaskRead])
async def list_tasks(
    project_id: int,
    completed: Optional[bool] = Query(None, description="Filter by completion"),
    search: Optional[str] = Query(None, description="Case-insensitive title search"),
    page: PageRequest = Depends(task_page),
    ctx: AuthContext = Depends(get_auth_context),
    svc: TaskService = Depends(_task_svc),
):
    """List tasks for a project with optional filters."""
    result = await svc.list_tasks(
        project_id, ctx, page, completed=completed, search=search
    )
    return page_body(result, [TaskRead.model_validate(t) for t in result.content])


@router.post("", response_model=TaskRead, status_code=201)
async def create_task(
    project_id: int,
    body: TaskCreate,
    ctx: AuthContext = Depends(get_auth_context),
    svc: TaskService = Depends(_task_svc),
):
    """Create a new (incomplete) task in the project."""
    return await svc.create_task(
        project_id,
        ctx,
        title=body.title,
        description=body.description,
        due_date=body.due_date,
    )


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(
    project_id: int,
    task_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    svc: TaskService = Depends(_task_svc),
):
    return await svc.get_task(project_id, task_id, ctx)


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(
    project_id: int,
    task_id: int,
    body: TaskUpdate,
    ctx: AuthContext = Depends(get_auth_context),
    svc: TaskService = Depends(_task_svc),
):
    """Replace a task's title, description and due date."""
    return await svc.update_task(
        project_id,
        task_id,
        ctx,
        title=body.title,
        description=body.description,
        due_date=body.due_date,
    )


@router.patch("/{task_id}/complete", response_model=TaskRead)
async def mark_task_completed(
    project_id: int,
    task_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    svc: TaskService = Depends(_task_svc),
):
    return await svc.mark_completed(project_id, task_id, ctx)


@router.patch("/{task_id}/completion", response_model=TaskRead)
async def set_task_completion(
    project_id: int,
    task_id: int,
    completed: bool = Query(..., description="New completion state"),
    ctx: AuthContext = Depends(get_auth_context),
    svc: TaskService = Depends(_task_svc),
):
    return await svc.set_completed(project_id, task_id, ctx, completed)


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    project_id: int,
    task_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    svc: TaskService = Depends(_task_svc),
):
    await svc.delete_task(project_id, task_id, ctx)
    return Response(status_code=204)
